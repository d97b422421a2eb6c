# core/permissions.py
from django.conf import settings
from rest_framework import permissions


def is_platform_admin(user) -> bool:
    """Staff flag is the admin role claim; ADMIN_EMAILS is a legacy fallback."""
    if not user or not user.is_authenticated:
        return False
    if user.is_staff:
        return True
    email = (user.email or '').lower()
    return any(email == allowed.strip().lower() for allowed in settings.ADMIN_EMAILS if allowed)


class IsPlatformAdmin(permissions.BasePermission):
    message = 'Access denied - admin privileges required'

    def has_permission(self, request, view):
        return is_platform_admin(request.user)
