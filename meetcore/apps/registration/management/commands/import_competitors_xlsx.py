from __future__ import annotations

import csv
import re
import unicodedata
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, List, Optional

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from openpyxl import load_workbook

from meetcore.apps.contests.models import Contest
from meetcore.apps.registration.models import Competitor, Registration
from meetcore.apps.scoring.services.coefficients import normalize_gender


# ======================
# Utilidades de parseo
# ======================

def _strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFKD", s) if not unicodedata.combining(c))


def _header_key(value) -> str:
    s = _strip_accents(str(value or "")).strip().lower()
    return re.sub(r"[^a-z0-9]+", "_", s).strip("_")


def _parse_date(value) -> Optional[date]:
    """
    Acepta:
    - date/datetime ya convertido por openpyxl
    - string 'YYYY-MM-DD', 'DD.MM.YYYY', 'DD/MM/YYYY'
    """
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip().rstrip(".")
    for fmt in ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            pass
    return None


def _parse_decimal(value) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        d = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation:
        raise CommandError(f"Número inválido: {value!r}")
    return d.quantize(Decimal("0.01"))


def _parse_gender(value) -> str:
    g = normalize_gender(value)
    if g is None:
        raise CommandError(f"Género desconocido: {value!r} (use Male/Female o M/F)")
    return g


def _parse_labels(value) -> List[str]:
    return [p.strip() for p in re.split(r"[;,]", str(value or "")) if p.strip()]


# ======================
# Importador
# ======================

REQUIRED_COLUMNS = ["first_name", "last_name", "gender"]
OPTIONAL_COLUMNS = ["birth_date", "club", "city", "bodyweight", "labels", "flight_code", "lot_number"]


class Command(BaseCommand):
    help = "Importa competidores e inscripciones de un concurso desde un .xlsx (una fila por competidor)."

    def add_arguments(self, parser):
        parser.add_argument("xlsx_path", type=str, help="Ruta al archivo .xlsx")
        parser.add_argument("--sheet", type=str, default=None, help="Nombre de la hoja (por defecto: primera)")
        parser.add_argument("--contest-slug", required=True, help="Slug del concurso destino")
        parser.add_argument("--dry-run", action="store_true", help="Simula sin escribir cambios")
        parser.add_argument("--report-dir", type=str, default=None, help="Carpeta del reporte CSV (por defecto: cwd)")

    def handle(self, *args, **options):
        xlsx_path = Path(options["xlsx_path"])
        sheet_name = options.get("sheet")
        contest_slug = options["contest_slug"]
        dry_run = options.get("dry_run", False)

        if not xlsx_path.exists():
            raise CommandError(f"Archivo no encontrado: {xlsx_path}")

        try:
            contest = Contest.objects.get(slug=contest_slug)
        except Contest.DoesNotExist:
            raise CommandError(f"Concurso '{contest_slug}' no existe.")

        wb = load_workbook(filename=str(xlsx_path), data_only=True)
        ws = wb[sheet_name] if sheet_name else wb.worksheets[0]

        # Validar cabecera (por nombre, en cualquier orden)
        headers = [_header_key(c.value) for c in next(ws.iter_rows(min_row=1, max_row=1))]
        missing = [c for c in REQUIRED_COLUMNS if c not in headers]
        if missing:
            raise CommandError(f"Faltan columnas obligatorias: {', '.join(missing)}. Cabecera: {headers}")

        report_rows: List[List[object]] = []
        total = ok = errs = 0

        for idx, row in enumerate(ws.iter_rows(min_row=2, values_only=True), start=2):
            if all(v in (None, "") for v in row):
                continue
            total += 1
            data: Dict[str, object] = dict(zip(headers, row))
            status, message = "OK", ""

            try:
                first = str(data.get("first_name") or "").strip()
                last = str(data.get("last_name") or "").strip()
                if not first or not last:
                    raise CommandError("Nombre o apellido vacío.")
                gender = _parse_gender(data.get("gender"))
                birth = _parse_date(data.get("birth_date"))
                bodyweight = _parse_decimal(data.get("bodyweight"))
                lot = data.get("lot_number")

                if not dry_run:
                    with transaction.atomic():
                        competitor, _ = Competitor.objects.get_or_create(
                            first_name=first,
                            last_name=last,
                            birth_date=birth,
                            defaults={
                                "gender": gender,
                                "club": str(data.get("club") or "").strip(),
                                "city": str(data.get("city") or "").strip(),
                            },
                        )
                        registration, created = Registration.objects.get_or_create(
                            contest=contest,
                            competitor=competitor,
                            defaults={
                                "bodyweight": bodyweight,
                                "labels": _parse_labels(data.get("labels")),
                                "flight_code": str(data.get("flight_code") or "").strip(),
                                "lot_number": int(lot) if lot not in (None, "") else None,
                            },
                        )
                        if not created:
                            message = "Ya inscrito; sin cambios."
            except (CommandError, ValueError) as e:
                status, message = "ERROR", str(e)
                errs += 1
            else:
                ok += 1

            report_rows.append([idx, status, data.get("first_name"), data.get("last_name"), message])

        self.stdout.write(self.style.SUCCESS(f"Filas procesadas: {total}"))
        self.stdout.write(self.style.SUCCESS(f"OK: {ok}  ·  ERRORES: {errs}"))

        if dry_run:
            self.stdout.write(self.style.WARNING("Dry-run: no se escribió reporte ni se crearon inscripciones."))
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_dir = Path(options.get("report_dir") or Path.cwd())
        report_path = report_dir / f"import_report_{timestamp}.csv"
        with report_path.open("w", newline="", encoding="utf-8") as fp:
            writer = csv.writer(fp)
            writer.writerow(["row", "status", "first_name", "last_name", "message"])
            writer.writerows(report_rows)
        self.stdout.write(self.style.SUCCESS(f"Reporte: {report_path}"))
