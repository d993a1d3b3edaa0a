from django.urls import path
from . import views

urlpatterns = [
    path("", views.contest_list, name="contest_list"),
    path("<slug:slug>/", views.contest_detail, name="contest_detail"),
    # Plan de carga de discos para un peso dado
    path("<slug:slug>/plate-plan/", views.plate_plan, name="contest_plate_plan"),
    # Estado en vivo: lectura pública, cambios de jueces/staff
    path("<slug:slug>/state/", views.contest_state, name="contest_state"),
    path("<slug:slug>/state/update/", views.contest_state_update, name="contest_state_update"),
]
