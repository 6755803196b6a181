"""Project-level non-DRF views.

The root landing endpoint is used for quick service checks and links to the
interactive API documentation.
"""

from __future__ import annotations

from django.conf import settings
from django.http import HttpRequest, JsonResponse


def home(request: HttpRequest) -> JsonResponse:
    """Return basic service metadata and documentation links."""
    return JsonResponse(
        {
            "ok": True,
            "service": "ape-keys-api",
            "ape_keys_enabled": bool(
                settings.APE_KEYS.get("ENDPOINTS_ENABLED", False)
            ),
            "docs": "/api/docs/",
            "redoc": "/api/redoc/",
        }
    )
