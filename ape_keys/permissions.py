from __future__ import annotations

import logging

from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.views import APIView

from accounts.models import get_user_flag

logger = logging.getLogger(__name__)


class CanManageApeKeys(BasePermission):
    """Deny only users whose `can_manage_ape_keys` flag is explicitly False.

    Users with no profile, or with the flag unset (None), keep access.
    """

    message = "You have lost access to ape keys, please contact support"
    code = "ape_keys_access_revoked"

    def has_permission(self, request: Request, view: APIView) -> bool:
        # Must be an exact check.
        if get_user_flag(request.user, "can_manage_ape_keys") is not False:
            return True
        logger.warning(
            "ape_keys.access_revoked user_id=%s path=%s method=%s",
            getattr(request.user, "id", None),
            getattr(request, "path", ""),
            getattr(request, "method", ""),
        )
        return False
