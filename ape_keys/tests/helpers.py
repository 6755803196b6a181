from __future__ import annotations

import base64
import binascii

from django.contrib.auth.hashers import check_password

from ape_keys.keys import peppered_secret


def decode_ape_key(ape_key: str) -> tuple[str, str] | None:
    """Split an encoded ape key into (ape_key_id, secret), or None."""
    padded = ape_key + "=" * (-len(ape_key) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded.encode("ascii")).decode()
    except (binascii.Error, UnicodeError, ValueError):
        return None
    ape_key_id, sep, secret = decoded.partition(".")
    if not sep or not ape_key_id or not secret:
        return None
    return ape_key_id, secret


def check_secret(secret: str, key_hash: str) -> bool:
    """Whether `secret` matches a hash produced by `hash_secret`."""
    return check_password(peppered_secret(secret), key_hash)
