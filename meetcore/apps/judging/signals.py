# meetcore/apps/judging/signals.py
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Attempt

logger = logging.getLogger(__name__)


def _schedule_recalc(registration_id: int, contest_id: int) -> None:
    def _run():
        from meetcore.apps.scoring.errors import NotFound
        from meetcore.apps.scoring.services.recalc import recalculate_registration, update_rankings

        # NotFound aquí = borrado en cascada dentro de la misma transacción
        try:
            recalculate_registration(registration_id)
        except NotFound as exc:
            logger.info("Se omite el recálculo: %s", exc)
        try:
            update_rankings(contest_id)
        except NotFound as exc:
            logger.info("Se omite el ranking: %s", exc)

    transaction.on_commit(_run)


@receiver(post_save, sender=Attempt, dispatch_uid="judging.attempt_saved")
def attempt_saved(sender, instance: Attempt, **kwargs):
    _schedule_recalc(instance.registration_id, instance.registration.contest_id)


@receiver(post_delete, sender=Attempt, dispatch_uid="judging.attempt_deleted")
def attempt_deleted(sender, instance: Attempt, **kwargs):
    from meetcore.apps.registration.models import Registration

    contest_id = (
        Registration.objects.filter(pk=instance.registration_id)
        .values_list("contest_id", flat=True)
        .first()
    )
    if contest_id is None:
        return
    _schedule_recalc(instance.registration_id, contest_id)
