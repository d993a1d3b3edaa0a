from datetime import date
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from meetcore.apps.contests.models import Contest
from meetcore.apps.judging.models import Attempt
from meetcore.apps.registration.models import Competitor, Registration
from meetcore.apps.scoring.models import McCulloughCoefficient, ReshelCoefficient, Result
from meetcore.apps.scoring.services.coefficients import load_bundled_tables, resolve_reshel
from meetcore.apps.scoring.tables import coefficient_cache, load_tables_from_db


class SeedCoefficientsTest(TestCase):
    def test_loads_bundled_tables(self):
        out = StringIO()
        call_command("seed_coefficients", stdout=out)
        bundled = load_bundled_tables()
        self.assertEqual(
            ReshelCoefficient.objects.count(),
            len(bundled.reshel.male) + len(bundled.reshel.female),
        )
        self.assertEqual(McCulloughCoefficient.objects.count(), len(bundled.mccullough.entries))
        self.assertIn("Reshel", out.getvalue())

    def test_is_idempotent_and_replace_works(self):
        call_command("seed_coefficients", stdout=StringIO())
        count = ReshelCoefficient.objects.count()
        call_command("seed_coefficients", stdout=StringIO())
        self.assertEqual(ReshelCoefficient.objects.count(), count)
        call_command("seed_coefficients", "--replace", stdout=StringIO())
        self.assertEqual(ReshelCoefficient.objects.count(), count)

    def test_db_tables_match_bundled(self):
        call_command("seed_coefficients", stdout=StringIO())
        from_db = load_tables_from_db()
        bundled = load_bundled_tables()
        self.assertEqual(
            resolve_reshel(82.5, "Male", from_db.reshel),
            resolve_reshel(82.5, "Male", bundled.reshel),
        )
        self.assertEqual(from_db.mccullough, bundled.mccullough)
        # el comando deja la caché con las tablas de BD
        self.assertEqual(coefficient_cache.snapshot().mccullough, bundled.mccullough)


class RecalculateContestCommandTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.contest = Contest.objects.create(name="Kup", slug="kup", date=date(2025, 1, 1))
        competitor = Competitor.objects.create(first_name="Ivan", last_name="H", gender="Male", birth_date=date(1990, 1, 1))
        cls.reg = Registration.objects.create(contest=cls.contest, competitor=competitor, bodyweight=Decimal("80"))
        Attempt.objects.bulk_create([
            Attempt(registration=cls.reg, lift=lift, attempt_number=1, weight=Decimal("100"), status="Successful")
            for lift in ("Squat", "Bench", "Deadlift")
        ])

    def test_recalculates(self):
        out = StringIO()
        call_command("recalculate_contest", "kup", stdout=out)
        result = Result.objects.get(registration=self.reg)
        self.assertEqual(result.total_weight, 300)
        self.assertEqual(result.place_open, 1)
        self.assertIn("1 inscripciones", out.getvalue())

    def test_unknown_slug(self):
        with self.assertRaises(CommandError):
            call_command("recalculate_contest", "nope", stdout=StringIO())
