"""Ordered request guards for DRF views.

DRF's stock `APIView.initial` runs authentication, permissions and then
throttles. `GuardedAPIView` runs a fixed, explicit pipeline instead:

    configuration gates -> authentication -> throttles -> authorizations

followed by request validation inside the handler (`validate_request`).
Throttles may be declared per HTTP method so a single view can describe
several routes as data. HEAD is throttled as GET.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from django.conf import settings
from rest_framework import serializers, status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.throttling import BaseThrottle
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class ServiceUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service temporarily unavailable."
    default_code = "service_unavailable"


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


@dataclass(frozen=True)
class ConfigurationGate:
    """Reject requests unless `criteria(settings.<setting>)` holds."""

    setting: str
    criteria: Callable[[Mapping[str, Any]], bool]
    invalid_message: str

    def check(self, request: Request) -> None:
        configuration = getattr(settings, self.setting, None) or {}
        if self.criteria(configuration):
            return
        logger.warning(
            "configuration_gate.rejected setting=%s path=%s method=%s",
            self.setting,
            getattr(request, "path", ""),
            getattr(request, "method", ""),
        )
        raise ServiceUnavailable(self.invalid_message)


class GuardedAPIView(APIView):
    configuration_gates: ClassVar[Sequence[ConfigurationGate]] = ()
    authorization_classes: ClassVar[Sequence[type[BasePermission]]] = ()
    method_throttle_classes: ClassVar[
        Mapping[str, Sequence[type[BaseThrottle]]]
    ] = {}

    def get_throttles(self) -> list[BaseThrottle]:
        method = (self.request.method or "").upper()
        # Django dispatches HEAD to `get`; it shares the GET budget.
        if method == "HEAD":
            method = "GET"
        classes = self.method_throttle_classes.get(
            method, self.throttle_classes
        )
        return [throttle() for throttle in classes]

    def get_authorizations(self) -> list[BasePermission]:
        return [
            authorization() for authorization in self.authorization_classes
        ]

    def check_configuration(self, request: Request) -> None:
        for gate in self.configuration_gates:
            gate.check(request)

    def check_authorizations(self, request: Request) -> None:
        for authorization in self.get_authorizations():
            if not authorization.has_permission(request, self):
                self.permission_denied(
                    request,
                    message=getattr(authorization, "message", None),
                    code=getattr(authorization, "code", None),
                )

    def initial(self, request: Request, *args: Any, **kwargs: Any) -> None:
        self.format_kwarg = self.get_format_suffix(**kwargs)

        neg = self.perform_content_negotiation(request)
        request.accepted_renderer, request.accepted_media_type = neg

        version, scheme = self.determine_version(request, *args, **kwargs)
        request.version, request.versioning_scheme = version, scheme

        self.check_configuration(request)
        self.perform_authentication(request)
        # permission_classes only establish authentication (IsAuthenticated).
        self.check_permissions(request)
        self.check_throttles(request)
        self.check_authorizations(request)


def validate_request(
    request: Request,
    *,
    params: type[serializers.Serializer] | None = None,
    body: type[serializers.Serializer] | None = None,
    kwargs: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Validate path params and/or JSON body, raising one ValidationError.

    Returns the merged validated data (params first, body second).
    """

    validated: dict[str, Any] = {}
    errors: dict[str, Any] = {}

    if params is not None:
        param_serializer = params(data=dict(kwargs or {}))
        if param_serializer.is_valid():
            validated.update(param_serializer.validated_data)
        else:
            errors.update(param_serializer.errors)

    if body is not None:
        body_serializer = body(data=request.data)
        if body_serializer.is_valid():
            validated.update(body_serializer.validated_data)
        else:
            errors.update(body_serializer.errors)

    if errors:
        raise ValidationError(errors)
    return validated
