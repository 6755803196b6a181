"""Ape key management endpoints.

Every route runs the same guard pipeline (see `config.api.guards`):

    feature gate -> JWT authentication -> per-route throttle
    -> CanManageApeKeys -> request validation -> controller

| Method    | Path               | Throttle scope     | Validation        |
|-----------|--------------------|--------------------|-------------------|
| GET, HEAD | /                  | ape_keys_get       | none              |
| POST      | /                  | ape_keys_generate  | body              |
| PATCH     | /<ape_key_id>[/]   | ape_keys_update    | params + body     |
| DELETE    | /<ape_key_id>[/]   | ape_keys_delete    | params            |

All successful responses are wrapped by
`config.api.responses.success_response`:

    {"status": 0, "message": "<str>", "data": <object|null>, "errors": null}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, cast

from drf_spectacular.utils import (
    OpenApiParameter,
    extend_schema,
    inline_serializer,
)
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from config.api.guards import (
    ConfigurationGate,
    GuardedAPIView,
    validate_request,
)
from config.api.openapi import (
    error_envelope_serializer,
    success_envelope_serializer,
    throttled_envelope_serializer,
)
from config.api.responses import success_response

from . import services
from .permissions import CanManageApeKeys
from .serializers import (
    ApeKeyDetailsSerializer,
    ApeKeyEditSerializer,
    ApeKeyGenerateSerializer,
    ApeKeyIdParamsSerializer,
)
from .throttling import (
    ApeKeysDeleteThrottle,
    ApeKeysGenerateThrottle,
    ApeKeysGetThrottle,
    ApeKeysUpdateThrottle,
)

logger = logging.getLogger(__name__)

APE_KEYS_DISABLED = "ApeKeys are currently disabled."


def _endpoints_enabled(configuration: Mapping[str, Any]) -> bool:
    return bool(configuration.get("ENDPOINTS_ENABLED", False))


ape_keys_enabled = ConfigurationGate(
    setting="APE_KEYS",
    criteria=_endpoints_enabled,
    invalid_message=APE_KEYS_DISABLED,
)


def _client_ip(request: Request) -> str | None:
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        parts = str(forwarded_for).split(",")
        if parts:
            return parts[0].strip() or None
    remote_addr = request.META.get("REMOTE_ADDR")
    return str(remote_addr) if remote_addr else None


def _audit(
    event: str,
    request: Request,
    ape_key_id: str | None,
    status_code: int,
) -> None:
    logger.info(
        "%s user_id=%s key_id=%s path=%s method=%s status_code=%s ip=%s "
        "ua=%s",
        event,
        getattr(request.user, "id", None),
        ape_key_id,
        getattr(request, "path", ""),
        getattr(request, "method", ""),
        status_code,
        _client_ip(request),
        request.META.get("HTTP_USER_AGENT"),
    )


ape_keys_error_response = error_envelope_serializer("ApeKeysErrorResponse")
ape_keys_throttled_response = throttled_envelope_serializer(
    "ApeKeysThrottledResponse"
)
ape_key_list_success_response = success_envelope_serializer(
    "ApeKeyListSuccessResponse",
    data=serializers.DictField(child=ApeKeyDetailsSerializer()),
)
ape_key_generate_success_response = success_envelope_serializer(
    "ApeKeyGenerateSuccessResponse",
    data=inline_serializer(
        name="ApeKeyGenerateData",
        fields={
            "ape_key": serializers.CharField(),
            "ape_key_id": serializers.CharField(),
            "ape_key_details": ApeKeyDetailsSerializer(),
        },
    ),
)
ape_key_empty_success_response = success_envelope_serializer(
    "ApeKeyEmptySuccessResponse",
    data=serializers.JSONField(allow_null=True),
)

ape_key_id_parameter = OpenApiParameter(
    name="ape_key_id",
    type=str,
    location=OpenApiParameter.PATH,
    pattern=r"^[a-zA-Z0-9_]+$",
)

_guard_responses = {
    401: ape_keys_error_response,
    403: ape_keys_error_response,
    429: ape_keys_throttled_response,
    503: ape_keys_error_response,
}


class ApeKeyGuardedView(GuardedAPIView):
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]
    configuration_gates = (ape_keys_enabled,)
    authorization_classes = (CanManageApeKeys,)


@extend_schema(auth=cast(list[str], [{"BearerAuth": []}]))
class ApeKeyListCreateView(ApeKeyGuardedView):
    """List and generate ape keys for the authenticated user.

    GET response: success envelope with `{<ape_key_id>: ApeKeyDetails}`.
    POST request: `ApeKeyGenerateSerializer` (`name`, `enabled`, both
    required).
    POST response: success envelope with the one-time `ape_key` value.
    """

    method_throttle_classes = {
        "GET": (ApeKeysGetThrottle,),
        "POST": (ApeKeysGenerateThrottle,),
    }

    @extend_schema(
        responses={200: ape_key_list_success_response, **_guard_responses}
    )
    def get(self, request: Request) -> Response:
        """Return the caller's ape keys keyed by id."""
        data = {
            ape_key.id: ApeKeyDetailsSerializer(ape_key).data
            for ape_key in services.list_ape_keys(request.user)
        }
        return success_response(
            cast(dict[str, Any], data), message="ApeKeys retrieved"
        )

    @extend_schema(
        request=ApeKeyGenerateSerializer,
        responses={
            201: ape_key_generate_success_response,
            400: ape_keys_error_response,
            409: ape_keys_error_response,
            **_guard_responses,
        },
    )
    def post(self, request: Request) -> Response:
        """Generate a key; the plaintext value is only returned here."""
        validated = validate_request(request, body=ApeKeyGenerateSerializer)
        ape_key, encoded = services.generate_ape_key(
            request.user,
            name=validated["name"],
            enabled=validated["enabled"],
        )
        _audit(
            "ape_key.generated",
            request,
            ape_key.id,
            status.HTTP_201_CREATED,
        )
        data = {
            "ape_key": encoded,
            "ape_key_id": ape_key.id,
            "ape_key_details": ApeKeyDetailsSerializer(ape_key).data,
        }
        return success_response(
            cast(dict[str, Any], data),
            message="ApeKey generated",
            status_code=status.HTTP_201_CREATED,
        )


@extend_schema(
    auth=cast(list[str], [{"BearerAuth": []}]),
    parameters=[ape_key_id_parameter],
)
class ApeKeyDetailView(ApeKeyGuardedView):
    """Edit or delete a single ape key owned by the caller.

    PATCH request: `ApeKeyEditSerializer` (`name`, `enabled`, both optional).
    Success responses: success envelope with `data = null`.
    """

    method_throttle_classes = {
        "PATCH": (ApeKeysUpdateThrottle,),
        "DELETE": (ApeKeysDeleteThrottle,),
    }

    @extend_schema(
        request=ApeKeyEditSerializer,
        responses={
            200: ape_key_empty_success_response,
            400: ape_keys_error_response,
            404: ape_keys_error_response,
            **_guard_responses,
        },
    )
    def patch(self, request: Request, ape_key_id: str) -> Response:
        """Update the name and/or enabled state of a key."""
        validated = validate_request(
            request,
            params=ApeKeyIdParamsSerializer,
            body=ApeKeyEditSerializer,
            kwargs={"ape_key_id": ape_key_id},
        )
        ape_key = services.edit_ape_key(
            request.user,
            validated["ape_key_id"],
            name=validated.get("name"),
            enabled=validated.get("enabled"),
        )
        _audit("ape_key.updated", request, ape_key.id, status.HTTP_200_OK)
        return success_response(None, message="ApeKey updated")

    @extend_schema(
        responses={
            200: ape_key_empty_success_response,
            400: ape_keys_error_response,
            404: ape_keys_error_response,
            **_guard_responses,
        },
    )
    def delete(self, request: Request, ape_key_id: str) -> Response:
        """Delete a key."""
        validated = validate_request(
            request,
            params=ApeKeyIdParamsSerializer,
            kwargs={"ape_key_id": ape_key_id},
        )
        services.delete_ape_key(request.user, validated["ape_key_id"])
        _audit(
            "ape_key.deleted",
            request,
            validated["ape_key_id"],
            status.HTTP_200_OK,
        )
        return success_response(None, message="ApeKey deleted")
