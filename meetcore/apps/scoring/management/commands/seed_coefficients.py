from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from meetcore.apps.scoring.models import McCulloughCoefficient, ReshelCoefficient
from meetcore.apps.scoring.services.coefficients import FEMALE, MALE, load_bundled_tables
from meetcore.apps.scoring.tables import coefficient_cache


class Command(BaseCommand):
    help = "Carga las tablas Reshel y McCullough incluidas en el paquete y recarga la caché."

    def add_arguments(self, parser):
        parser.add_argument("--replace", action="store_true", help="Borra las tablas existentes antes de cargar")

    def handle(self, *args, **options):
        tables = load_bundled_tables()

        with transaction.atomic():
            if options.get("replace"):
                ReshelCoefficient.objects.all().delete()
                McCulloughCoefficient.objects.all().delete()

            reshel_rows = [
                ReshelCoefficient(gender=gender, bodyweight=Decimal(f"{e.bodyweight_kg:.2f}"), coefficient=e.coefficient)
                for gender, entries in ((MALE, tables.reshel.male), (FEMALE, tables.reshel.female))
                for e in entries
            ]
            mcc_rows = [
                McCulloughCoefficient(age=e.age, coefficient=e.coefficient)
                for e in tables.mccullough.entries
            ]
            ReshelCoefficient.objects.bulk_create(reshel_rows, ignore_conflicts=True)
            McCulloughCoefficient.objects.bulk_create(mcc_rows, ignore_conflicts=True)

        coefficient_cache.reload()

        self.stdout.write(self.style.SUCCESS(
            f"Reshel: {ReshelCoefficient.objects.count()} filas · "
            f"McCullough: {McCulloughCoefficient.objects.count()} filas"
        ))
