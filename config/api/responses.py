"""Success envelope used by every DRF view in the project.

Errors are rendered by `config.api.exceptions.custom_exception_handler`.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response

from .exceptions import JSONValue


def success_response(
    data: JSONValue | None,
    message: str = "OK",
    *,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    payload: dict[str, JSONValue] = {
        "status": 0,
        "message": message,
        "data": data,
        "errors": None,
    }
    return Response(payload, status=status_code)
