from __future__ import annotations

from django.contrib import admin

from .models import Attempt


@admin.register(Attempt)
class AttemptAdmin(admin.ModelAdmin):
    list_display = ("registration", "lift", "attempt_number", "weight", "status", "updated_at")
    list_filter = ("status", "lift", "registration__contest")
    list_editable = ("status",)
    search_fields = ("registration__competitor__first_name", "registration__competitor__last_name")
    raw_id_fields = ("registration",)
