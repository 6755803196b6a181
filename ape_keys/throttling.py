from __future__ import annotations

from django.core.cache import caches
from django.core.cache.backends.base import BaseCache
from django.core.exceptions import ImproperlyConfigured
from rest_framework.request import Request
from rest_framework.settings import api_settings
from rest_framework.throttling import SimpleRateThrottle
from rest_framework.views import APIView


class ApeKeysRateThrottle(SimpleRateThrottle):
    """Per-user throttle backed by the `throttle` cache alias."""

    def __init__(self) -> None:
        super().__init__()
        self.cache: BaseCache = caches["throttle"]

    def get_rate(self) -> str | None:
        rate: object = api_settings.DEFAULT_THROTTLE_RATES.get(self.scope)
        if rate is None:
            return None
        if not isinstance(rate, str):
            raise ImproperlyConfigured(
                "Throttle rate must be a string like '2/min'."
            )
        return rate

    def get_cache_key(self, request: Request, view: APIView) -> str | None:
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            ident = f"user:{user.pk}"
        else:
            ident = f"ip:{self.get_ident(request)}"

        return self.cache_format % {
            "scope": self.scope,
            "ident": ident,
        }


class ApeKeysGetThrottle(ApeKeysRateThrottle):
    scope = "ape_keys_get"


class ApeKeysGenerateThrottle(ApeKeysRateThrottle):
    scope = "ape_keys_generate"


class ApeKeysUpdateThrottle(ApeKeysRateThrottle):
    scope = "ape_keys_update"


class ApeKeysDeleteThrottle(ApeKeysRateThrottle):
    scope = "ape_keys_delete"
