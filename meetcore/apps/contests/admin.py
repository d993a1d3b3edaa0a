from __future__ import annotations

from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.forms.models import BaseInlineFormSet

from meetcore.apps.scoring.services.ranking import MANDATORY_TAG_LABEL

from .models import Contest, ContestAgeCategory, ContestState, ContestTag, ContestWeightClass, PlateSet
from .services.categories import (
    AgeCategoryDescriptor,
    WeightClassDescriptor,
    validate_age_categories,
    validate_weight_classes,
)
from .services.setup import prepare_contest


def _live_forms(formset):
    for form in formset.forms:
        data = getattr(form, "cleaned_data", None)
        if data and not data.get("DELETE"):
            yield data


class AgeCategoryFormSet(BaseInlineFormSet):
    def clean(self):
        super().clean()
        descriptors = [
            AgeCategoryDescriptor(None, d.get("code") or "", d.get("min_age"), d.get("max_age"), d.get("sort_order") or 0)
            for d in _live_forms(self)
        ]
        errors = validate_age_categories(descriptors)
        if errors:
            raise ValidationError(errors)


class WeightClassFormSet(BaseInlineFormSet):
    def clean(self):
        super().clean()
        descriptors = [
            WeightClassDescriptor(
                None, d.get("code") or "", d.get("gender") or "",
                d.get("min_weight"), d.get("max_weight"), d.get("sort_order") or 0,
            )
            for d in _live_forms(self)
        ]
        errors = validate_weight_classes(descriptors)
        if errors:
            raise ValidationError(errors)


class ContestTagFormSet(BaseInlineFormSet):
    """La etiqueta Open es obligatoria: no se borra ni se renombra."""

    def clean(self):
        super().clean()
        for form in self.forms:
            if form.instance.pk is None or not hasattr(form, "cleaned_data"):
                continue
            if (form.initial.get("label") or "").lower() != MANDATORY_TAG_LABEL.lower():
                continue
            data = form.cleaned_data
            if data.get("DELETE") or data.get("label") != form.initial.get("label"):
                raise ValidationError(f"La etiqueta \"{MANDATORY_TAG_LABEL}\" no se puede borrar ni renombrar.")


class AgeCategoryInline(admin.TabularInline):
    model = ContestAgeCategory
    formset = AgeCategoryFormSet
    extra = 0
    fields = ("code", "name", "min_age", "max_age", "sort_order")


class WeightClassInline(admin.TabularInline):
    model = ContestWeightClass
    formset = WeightClassFormSet
    extra = 0
    fields = ("gender", "code", "name", "min_weight", "max_weight", "sort_order")


class PlateSetInline(admin.TabularInline):
    model = PlateSet
    extra = 0
    fields = ("plate_weight", "quantity", "color")


class ContestTagInline(admin.TabularInline):
    model = ContestTag
    formset = ContestTagFormSet
    extra = 0


@admin.register(Contest)
class ContestAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "date", "discipline", "status", "registrations_count")
    list_filter = ("discipline", "status")
    search_fields = ("name", "slug", "location")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [AgeCategoryInline, WeightClassInline, PlateSetInline, ContestTagInline]
    actions = ["seed_defaults", "recalculate"]

    def registrations_count(self, obj: Contest) -> int:
        return obj.registrations.count()
    registrations_count.short_description = "Inscritos"

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        prepare_contest(form.instance)

    @admin.action(description="Crear categorías, discos y etiquetas por defecto")
    def seed_defaults(self, request, queryset):
        for contest in queryset:
            prepare_contest(contest)
        self.message_user(request, f"{queryset.count()} concurso(s) preparados.", messages.SUCCESS)

    @admin.action(description="Recalcular resultados y posiciones")
    def recalculate(self, request, queryset):
        from meetcore.apps.scoring.services.recalc import recalculate_contest

        for contest in queryset:
            summary = recalculate_contest(contest.pk)
            self.message_user(
                request,
                f"{contest.name}: {summary['registrations']} inscripciones, "
                f"{summary['placements_changed']} posiciones actualizadas.",
                messages.SUCCESS,
            )


@admin.register(ContestState)
class ContestStateAdmin(admin.ModelAdmin):
    list_display = ("contest", "status", "current_lift", "current_round", "current_attempt_number", "updated_at")
    list_filter = ("status", "current_lift")
