# registers every table on Base.metadata
from hrportal.models.role import Role  # noqa: F401
from hrportal.models.user import User  # noqa: F401
from hrportal.models.company import Company  # noqa: F401
from hrportal.models.invitation import AdminInvitation  # noqa: F401

__all__ = ["Role", "User", "Company", "AdminInvitation"]
