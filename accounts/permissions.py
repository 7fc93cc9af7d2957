from rest_framework.permissions import BasePermission

from .services import is_site_admin


class IsSiteAdmin(BasePermission):
    """Allow access only to authenticated users holding the admin role."""
    message = 'Acesso negado'

    def has_permission(self, request, view):
        return is_site_admin(request.user)
