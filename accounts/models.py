from __future__ import annotations

from typing import Any

from django.conf import settings
from django.db import models


class UserProfile(models.Model):
    """Per-user capability flags that don't belong on the auth user model."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    # None means "never set"; only an explicit False revokes access.
    can_manage_ape_keys = models.BooleanField(null=True, default=None)

    def __str__(self) -> str:
        return f"profile:{self.user_id}"


def get_user_flag(user: Any, flag: str) -> bool | None:
    """Read a tri-state profile flag, returning None when no profile exists."""
    try:
        profile = user.profile
    except (UserProfile.DoesNotExist, AttributeError):
        return None
    value = getattr(profile, flag, None)
    return value if isinstance(value, bool) else None
