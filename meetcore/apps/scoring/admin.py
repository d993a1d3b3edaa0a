from __future__ import annotations

from django.contrib import admin

from .models import McCulloughCoefficient, ReshelCoefficient, Result
from .tables import coefficient_cache


@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = (
        "registration",
        "total_weight",
        "coefficient_points",
        "place_open",
        "place_in_age_class",
        "place_in_weight_class",
        "is_disqualified",
    )
    list_filter = ("registration__contest", "is_disqualified")
    readonly_fields = [f.name for f in Result._meta.fields]


class CoefficientTableAdmin(admin.ModelAdmin):
    """Cualquier cambio en las tablas invalida la caché del proceso."""

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        coefficient_cache.invalidate()

    def delete_model(self, request, obj):
        super().delete_model(request, obj)
        coefficient_cache.invalidate()

    def delete_queryset(self, request, queryset):
        super().delete_queryset(request, queryset)
        coefficient_cache.invalidate()


@admin.register(ReshelCoefficient)
class ReshelCoefficientAdmin(CoefficientTableAdmin):
    list_display = ("gender", "bodyweight", "coefficient")
    list_filter = ("gender",)


@admin.register(McCulloughCoefficient)
class McCulloughCoefficientAdmin(CoefficientTableAdmin):
    list_display = ("age", "coefficient")
