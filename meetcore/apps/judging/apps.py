from django.apps import AppConfig
from django.db.models.signals import post_migrate


def ensure_judges_group(sender, **kwargs):
    # Crea el grupo "judges" si no existe (idempotente)
    from django.contrib.auth.models import Group

    from .permissions import JUDGES_GROUP
    Group.objects.get_or_create(name=JUDGES_GROUP)


class JudgingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'meetcore.apps.judging'
    label = 'judging'

    def ready(self):
        from . import signals  # noqa: F401  (registra recálculo al guardar intentos)

        post_migrate.connect(ensure_judges_group, sender=self, dispatch_uid="judging.ensure_judges_group")
