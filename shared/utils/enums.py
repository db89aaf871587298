from enum import Enum


class AdminRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    VIEWER = "viewer"


# Who may do what in the partner console
READ_ROLES = frozenset({AdminRole.VIEWER, AdminRole.ADMIN, AdminRole.SUPER_ADMIN})
REVIEW_ROLES = frozenset({AdminRole.ADMIN, AdminRole.SUPER_ADMIN})
PRIVILEGED_ROLES = frozenset({AdminRole.SUPER_ADMIN})
