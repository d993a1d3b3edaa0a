from datetime import date
from io import StringIO

from django.contrib.auth.models import Group, User
from django.core.management import call_command
from django.test import TestCase

from meetcore.apps.contests.models import Contest, ContestState, PlateSet
from meetcore.apps.contests.services.loading import plate_plan_for_contest
from meetcore.apps.contests.services.setup import prepare_contest, seed_contest_categories
from meetcore.apps.scoring.errors import NotFound
from meetcore.apps.scoring.models import Result


class ContestSetupTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.contest = Contest.objects.create(name="Kup", slug="kup", date=date(2025, 9, 21))

    def test_prepare_is_idempotent(self):
        first = prepare_contest(self.contest)
        second = prepare_contest(self.contest)
        self.assertEqual(first, {"age_categories": 7, "weight_classes": 11, "plates": 9})
        self.assertEqual(second, {"age_categories": 0, "weight_classes": 0, "plates": 0})
        self.assertEqual([t.label for t in self.contest.tags.all()], ["Open"])

    def test_existing_categories_are_not_overwritten(self):
        self.contest.age_categories.create(code="ALL", sort_order=1)
        summary = seed_contest_categories(self.contest)
        self.assertEqual(summary["age_categories"], 0)
        self.assertEqual(list(self.contest.age_categories.values_list("code", flat=True)), ["ALL"])


class PlatePlanServiceTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.contest = Contest.objects.create(name="Kup", slug="kup", date=date(2025, 9, 21))

    def test_uses_default_inventory_without_plates(self):
        plan = plate_plan_for_contest(self.contest.pk, 100)
        self.assertTrue(plan.exact)
        self.assertEqual(plan.bar_weight_kg, 20)

    def test_uses_contest_inventory_and_womens_bar(self):
        PlateSet.objects.create(contest=self.contest, plate_weight=10, quantity=1)
        plan = plate_plan_for_contest(self.contest.pk, 45, gender="Female")
        # 15 + 5 de clips = 20; 25 por cargar, solo hay un par de 10
        self.assertEqual(plan.bar_weight_kg, 15)
        self.assertFalse(plan.exact)
        self.assertAlmostEqual(plan.total_loaded, 40)

    def test_unknown_contest(self):
        with self.assertRaises(NotFound):
            plate_plan_for_contest(999999, 100)


class ContestViewsTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.contest = Contest.objects.create(name="Kup", slug="kup", date=date(2025, 9, 21))
        prepare_contest(cls.contest)

    def test_health(self):
        r = self.client.get("/api/health/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"ok": True})

    def test_list_and_detail(self):
        r = self.client.get("/contests/")
        self.assertEqual([c["slug"] for c in r.json()["contests"]], ["kup"])

        r = self.client.get(f"/contests/{self.contest.slug}/")
        self.assertEqual(r.status_code, 200)
        data = r.json()
        self.assertEqual(len(data["age_categories"]), 7)
        self.assertEqual(len(data["weight_classes"]), 11)
        self.assertEqual(data["tags"], ["Open"])
        self.assertEqual(data["bars"], {"mens_kg": 20.0, "womens_kg": 15.0, "clamp_kg": 2.5})

    def test_plate_plan(self):
        r = self.client.get(f"/contests/{self.contest.slug}/plate-plan/", {"weight": "102,5"})
        self.assertEqual(r.status_code, 200)
        plan = r.json()["plan"]
        self.assertTrue(plan["exact"])
        self.assertEqual(plan["total_loaded"], 102.5)
        self.assertEqual(plan["plates"][0], {"plate_weight": 25.0, "pair_count": 1, "color": "#DC2626"})

    def test_plate_plan_bar_override(self):
        r = self.client.get(f"/contests/{self.contest.slug}/plate-plan/", {"weight": "100", "bar": "25"})
        self.assertEqual(r.json()["plan"]["bar_weight_kg"], 25.0)

    def test_plate_plan_bad_weight(self):
        r = self.client.get(f"/contests/{self.contest.slug}/plate-plan/", {"weight": "abc"})
        self.assertEqual(r.status_code, 400)
        r = self.client.get(f"/contests/{self.contest.slug}/plate-plan/")
        self.assertEqual(r.status_code, 400)

    def test_unknown_contest(self):
        self.assertEqual(self.client.get("/contests/nope/").status_code, 404)
        self.assertEqual(self.client.get("/contests/nope/plate-plan/?weight=100").status_code, 404)


class SeedDemoContestTest(TestCase):
    def test_creates_ranked_contest(self):
        call_command("seed_demo_contest", "--slug", "demo", "--lifters", "8", stdout=StringIO())
        contest = Contest.objects.get(slug="demo")
        results = list(Result.objects.filter(registration__contest=contest))
        self.assertEqual(len(results), 8)
        for r in results:
            # todos llevan la etiqueta Open: posición open sii no está descalificado
            self.assertEqual(r.place_open is None, r.is_disqualified)


class ContestStateViewTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.contest = Contest.objects.create(name="Kup", slug="kup", date=date(2025, 9, 21))
        cls.judge = User.objects.create_user("judge", password="x")
        group, _ = Group.objects.get_or_create(name="judges")
        cls.judge.groups.add(group)
        cls.visitor = User.objects.create_user("visitor", password="x")

    def update_url(self):
        return f"/contests/{self.contest.slug}/state/update/"

    def test_default_state_without_row(self):
        r = self.client.get(f"/contests/{self.contest.slug}/state/")
        self.assertEqual(r.status_code, 200)
        state = r.json()["state"]
        self.assertEqual(state["status"], "Setup")
        self.assertIsNone(state["current_lift"])
        self.assertEqual(state["current_round"], 1)
        self.assertFalse(ContestState.objects.exists())

    def test_update_requires_judge(self):
        r = self.client.post(self.update_url(), {"status": "InProgress"})
        self.assertEqual(r.status_code, 302)
        self.client.force_login(self.visitor)
        r = self.client.post(self.update_url(), {"status": "InProgress"})
        self.assertEqual(r.status_code, 403)
        self.assertFalse(ContestState.objects.exists())

    def test_partial_update_keeps_other_fields(self):
        self.client.force_login(self.judge)
        r = self.client.post(self.update_url(), {"status": "InProgress", "current_lift": "Squat", "current_round": "2"})
        self.assertEqual(r.status_code, 200, r.content)

        r = self.client.post(self.update_url(), {"current_attempt_number": "3"})
        state = r.json()["state"]
        self.assertEqual(state["status"], "InProgress")
        self.assertEqual(state["current_lift"], "Squat")
        self.assertEqual(state["current_round"], 2)
        self.assertEqual(state["current_attempt_number"], 3)

        self.contest.refresh_from_db()
        self.assertEqual(self.contest.status, "InProgress")
        self.assertEqual(self.client.get(f"/contests/{self.contest.slug}/state/").json()["state"], state)

    def test_bad_input(self):
        self.client.force_login(self.judge)
        r = self.client.post(self.update_url(), {"current_lift": "Snatch"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("current_lift", r.json()["errors"])
        r = self.client.post(self.update_url(), {"current_round": "0"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("current_round", r.json()["errors"])

    def test_unknown_contest(self):
        self.assertEqual(self.client.get("/contests/nope/state/").status_code, 404)
