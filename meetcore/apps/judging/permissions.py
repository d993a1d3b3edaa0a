# meetcore/apps/judging/permissions.py
from __future__ import annotations

JUDGES_GROUP = "judges"


def is_judge(user) -> bool:
    """Staff o miembro del grupo de jueces."""
    if not user.is_authenticated:
        return False
    return user.is_staff or user.groups.filter(name=JUDGES_GROUP).exists()
