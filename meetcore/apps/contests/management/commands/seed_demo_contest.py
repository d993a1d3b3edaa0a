from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils.text import slugify

from meetcore.apps.contests.models import Contest
from meetcore.apps.contests.services.setup import prepare_contest
from meetcore.apps.judging.models import Attempt
from meetcore.apps.registration.models import Competitor, Registration
from meetcore.apps.scoring.services.recalc import recalculate_contest
from meetcore.apps.scoring.services.results import AttemptStatus, LiftKind

CLUBS = ["PK Osijek", "PK Zagreb", "PK Split", "PK Rijeka"]
FIRST_NAMES = {
    "Male": ["Ivan", "Marko", "Luka", "Ante", "Josip", "Petar", "Filip", "Tomislav"],
    "Female": ["Ana", "Maja", "Ivana", "Petra", "Lucija", "Marija"],
}
LAST_NAMES = ["Horvat", "Kovač", "Babić", "Marić", "Jurić", "Novak", "Knežević", "Vuković"]

# Primer intento aproximado como fracción del peso corporal
OPENERS = {
    "Male": {LiftKind.SQUAT: 1.9, LiftKind.BENCH: 1.3, LiftKind.DEADLIFT: 2.2},
    "Female": {LiftKind.SQUAT: 1.4, LiftKind.BENCH: 0.8, LiftKind.DEADLIFT: 1.7},
}


def _round_to_plate(kg: float) -> Decimal:
    return Decimal(str(round(kg / 2.5) * 2.5))


class Command(BaseCommand):
    help = "Crea un concurso DEMO con categorías, discos, competidores de varios clubes e intentos ya juzgados."

    def add_arguments(self, parser):
        parser.add_argument("--name", type=str, default="Demo Powerlifting Open")
        parser.add_argument("--slug", type=str, default="")
        parser.add_argument("--lifters", type=int, default=24)
        parser.add_argument("--seed", type=int, default=7, help="Semilla aleatoria (resultados reproducibles)")

    def handle(self, *args, **opts):
        name: str = opts["name"]
        slug: str = opts["slug"] or slugify(name)
        lifters: int = max(1, opts["lifters"])
        rng = random.Random(opts["seed"])

        if Contest.objects.filter(slug=slug).exists():
            raise CommandError(f"Ya existe un concurso con slug='{slug}'")

        with transaction.atomic():
            contest = Contest.objects.create(
                name=name,
                slug=slug,
                date=date.today(),
                location="Demo Arena",
            )
            prepare_contest(contest)
            self.stdout.write(self.style.SUCCESS(f"✓ Concurso creado: {slug}"))

            attempts = []
            for i in range(lifters):
                gender = "Female" if i % 4 == 3 else "Male"
                competitor = Competitor.objects.create(
                    first_name=rng.choice(FIRST_NAMES[gender]),
                    last_name=rng.choice(LAST_NAMES),
                    gender=gender,
                    birth_date=date.today() - timedelta(days=365 * rng.randint(16, 62) + rng.randint(0, 364)),
                    club=CLUBS[i % len(CLUBS)],
                )
                bodyweight = rng.uniform(55, 120) if gender == "Male" else rng.uniform(47, 90)
                registration = Registration.objects.create(
                    contest=contest,
                    competitor=competitor,
                    bodyweight=Decimal(f"{bodyweight:.2f}"),
                    lot_number=i + 1,
                    flight_code="A" if i < lifters / 2 else "B",
                    flight_order=i + 1,
                    labels=["Open"],
                )

                for lift in LiftKind.ALL:
                    opener = bodyweight * OPENERS[gender][lift] * rng.uniform(0.8, 1.2)
                    for n, jump in enumerate((0.0, 0.05, 0.09), start=1):
                        # ~80 % de intentos válidos
                        ok = rng.random() < 0.8
                        attempts.append(Attempt(
                            registration=registration,
                            lift=lift,
                            attempt_number=n,
                            weight=_round_to_plate(opener * (1 + jump)),
                            status=AttemptStatus.SUCCESSFUL if ok else AttemptStatus.FAILED,
                        ))

            # bulk_create no dispara señales: se recalcula una vez al final
            Attempt.objects.bulk_create(attempts)
            self.stdout.write(self.style.SUCCESS(f"✓ {lifters} inscripciones · {len(attempts)} intentos"))

        summary = recalculate_contest(contest.pk)
        self.stdout.write(self.style.SUCCESS(
            f"✓ Resultados: {summary['registrations']} · posiciones actualizadas: {summary['placements_changed']}"
        ))
