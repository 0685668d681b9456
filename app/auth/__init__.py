"""Authentication and authorization module."""

from app.auth.permissions import AccessControl, AdminDep, AuthenticatedDep, access_control

__all__ = [
    "AccessControl",
    "AdminDep",
    "AuthenticatedDep",
    "access_control",
]
