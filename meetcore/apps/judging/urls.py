from django.urls import path
from . import views

# Namespace del app para usar 'judging:...'
app_name = "judging"

urlpatterns = [
    path(
        "registrations/<int:registration_id>/attempts/",
        views.registration_attempts,
        name="registration_attempts",
    ),
    path(
        "attempts/<int:attempt_id>/decision/",
        views.attempt_decision,
        name="attempt_decision",
    ),
]
