from __future__ import annotations

import secrets

from django.conf import settings
from django.db import models

APE_KEY_ID_LENGTH = 24
APE_KEY_NAME_MAX_LENGTH = 20


def generate_ape_key_id() -> str:
    # Hex ids satisfy the token format used for the `apeKeyId` path param.
    return secrets.token_hex(APE_KEY_ID_LENGTH // 2)


class ApeKey(models.Model):
    id = models.CharField(
        primary_key=True,
        max_length=APE_KEY_ID_LENGTH,
        default=generate_ape_key_id,
        editable=False,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ape_keys",
    )
    name = models.CharField(max_length=APE_KEY_NAME_MAX_LENGTH)
    enabled = models.BooleanField(default=True)
    key_hash = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)
    last_used_at = models.DateTimeField(null=True, blank=True)
    use_count = models.PositiveIntegerField(default=0)

    class Meta:
        indexes = [
            models.Index(
                fields=["user", "created_at"],
                name="ape_keys_user_created_idx",
            ),
        ]
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
