from django.urls import path
from . import views

urlpatterns = [
    # resultados individuales por concurso
    path("<slug:slug>/results/", views.contest_results, name="leaderboard_results"),
    path("<slug:slug>/results.csv", views.contest_results_csv, name="leaderboard_results_csv"),
    # clasificación por clubes
    path("<slug:slug>/teams/", views.contest_teams, name="leaderboard_teams"),
]
