# hrportal/core/rbac.py
import logging

from fastapi import Depends

from hrportal.api.deps import get_current_user
from hrportal.core.errors import Forbidden
from hrportal.models.role import ROLE_ADMIN

logger = logging.getLogger(__name__)


def require_roles(*roles: str):
    allowed = set(roles)
    def dep(user = Depends(get_current_user)):
        if user.role is None or user.role.name not in allowed:
            logger.warning("Role check failed for user %s (needs one of %s)", user.id, sorted(allowed))
            raise Forbidden()
        return user
    return dep


require_admin = require_roles(ROLE_ADMIN)
