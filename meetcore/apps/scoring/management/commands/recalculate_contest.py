from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from meetcore.apps.contests.models import Contest
from meetcore.apps.scoring.services.recalc import recalculate_contest
from meetcore.apps.scoring.tables import coefficient_cache


class Command(BaseCommand):
    help = "Recalcula resultados y posiciones de un concurso."

    def add_arguments(self, parser):
        parser.add_argument("slug", type=str, help="Slug del concurso")
        parser.add_argument("--reload-tables", action="store_true", help="Vuelve a leer las tablas de coeficientes")

    def handle(self, *args, **options):
        slug = options["slug"]
        try:
            contest = Contest.objects.get(slug=slug)
        except Contest.DoesNotExist:
            raise CommandError(f"Concurso '{slug}' no existe.")

        tables = coefficient_cache.reload() if options.get("reload_tables") else None
        summary = recalculate_contest(contest.pk, tables)

        self.stdout.write(self.style.SUCCESS(
            f"{contest.name}: {summary['registrations']} inscripciones · "
            f"{summary['placements_changed']} posiciones actualizadas"
        ))
