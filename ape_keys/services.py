"""Ape key controller operations.

Views call these after every guard has passed; each function is scoped to the
owning user so one user can never see or touch another user's keys.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet
from rest_framework.exceptions import NotFound

from config.api.guards import Conflict

from .keys import encode_ape_key, generate_secret, hash_secret
from .models import ApeKey

DEFAULT_MAX_KEYS_PER_USER = 5

APE_KEY_NOT_FOUND = "ApeKey not found"
APE_KEY_LIMIT_REACHED = "Maximum number of ApeKeys have been generated"


def max_keys_per_user() -> int:
    return int(
        settings.APE_KEYS.get("MAX_KEYS_PER_USER", DEFAULT_MAX_KEYS_PER_USER)
    )


def list_ape_keys(user: Any) -> QuerySet[ApeKey]:
    return ApeKey.objects.filter(user=user)


def generate_ape_key(
    user: Any,
    *,
    name: str,
    enabled: bool,
) -> tuple[ApeKey, str]:
    """Create a key and return it with its one-time encoded value."""
    with transaction.atomic():
        # Serialize concurrent generate calls for the same user.
        get_user_model().objects.select_for_update().filter(
            pk=user.pk
        ).first()
        if ApeKey.objects.filter(user=user).count() >= max_keys_per_user():
            raise Conflict(APE_KEY_LIMIT_REACHED)

        secret = generate_secret()
        ape_key = ApeKey.objects.create(
            user=user,
            name=name,
            enabled=enabled,
            key_hash=hash_secret(secret),
        )
    return ape_key, encode_ape_key(ape_key.id, secret)


def _get_owned(user: Any, ape_key_id: str) -> ApeKey:
    ape_key = ApeKey.objects.filter(pk=ape_key_id, user=user).first()
    if ape_key is None:
        raise NotFound(APE_KEY_NOT_FOUND)
    return ape_key


def edit_ape_key(
    user: Any,
    ape_key_id: str,
    *,
    name: str | None = None,
    enabled: bool | None = None,
) -> ApeKey:
    ape_key = _get_owned(user, ape_key_id)
    update_fields = ["modified_at"]
    if name is not None:
        ape_key.name = name
        update_fields.append("name")
    if enabled is not None:
        ape_key.enabled = enabled
        update_fields.append("enabled")
    ape_key.save(update_fields=update_fields)
    return ape_key


def delete_ape_key(user: Any, ape_key_id: str) -> None:
    ape_key = _get_owned(user, ape_key_id)
    ape_key.delete()
