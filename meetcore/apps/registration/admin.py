from __future__ import annotations

from django.contrib import admin

from .models import Competitor, Registration


class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0
    fields = ("contest", "bodyweight", "lot_number", "flight_code")
    show_change_link = True


@admin.register(Competitor)
class CompetitorAdmin(admin.ModelAdmin):
    list_display = ("last_name", "first_name", "gender", "birth_date", "club", "city")
    list_filter = ("gender", "club")
    search_fields = ("first_name", "last_name", "club", "city")
    inlines = [RegistrationInline]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = (
        "competitor",
        "contest",
        "bodyweight",
        "age_category",
        "weight_class",
        "reshel_coefficient",
        "mccullough_coefficient",
        "flight_code",
        "lot_number",
        "points",
    )
    list_filter = ("contest", "flight_code", "age_category", "weight_class")
    search_fields = ("competitor__first_name", "competitor__last_name", "competitor__club")
    raw_id_fields = ("contest", "competitor")

    def points(self, obj: Registration) -> float | None:
        result = getattr(obj, "result", None)
        return round(result.coefficient_points, 3) if result else None
    points.short_description = "Puntos"
