"""Ape key secrets: generation, hashing and the public key encoding.

A generated ape key is shown to its owner exactly once, as
base64url("<ape_key_id>.<secret>"). Only a peppered, salted hash of the
secret is stored.
"""

from __future__ import annotations

import base64
import secrets

from django.conf import settings
from django.contrib.auth.hashers import make_password

DEFAULT_KEY_BYTES = 24


def generate_secret(num_bytes: int | None = None) -> str:
    if num_bytes is None:
        num_bytes = int(settings.APE_KEYS.get("KEY_BYTES", DEFAULT_KEY_BYTES))
    return secrets.token_urlsafe(num_bytes)


def peppered_secret(secret: str) -> str:
    return f"{getattr(settings, 'APE_KEY_PEPPER', '')}:{secret}"


def hash_secret(secret: str) -> str:
    return make_password(peppered_secret(secret))


def encode_ape_key(ape_key_id: str, secret: str) -> str:
    raw = f"{ape_key_id}.{secret}".encode()
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
