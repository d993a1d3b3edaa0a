from django.contrib import admin
from django.urls import path, include
from meetcore.apps.contests import views as contest_views

urlpatterns = [
    path("admin/", admin.site.urls),

    # API healthcheck
    path("api/health/", contest_views.health, name="api_health"),

    # Concursos: detalle y plan de discos
    path("contests/", include("meetcore.apps.contests.urls")),

    # Decisiones de jueces (namespace 'judging')
    path("judging/", include(("meetcore.apps.judging.urls", "judging"), namespace="judging")),

    # Resultados individuales y por clubes
    path("leaderboard/", include("meetcore.apps.leaderboard.urls")),
]
