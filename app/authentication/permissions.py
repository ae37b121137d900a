"""
Permission classes for role and ownership checks.

Usage:
    class HouseViewSet(viewsets.ModelViewSet):
        def get_permissions(self):
            if self.action == "create":
                return [IsAuthenticated(), IsSeller()]
            if self.action in ("partial_update", "destroy"):
                return [IsAuthenticated(), IsOwnerOrAdmin()]
            return [IsAuthenticated()]
"""

from rest_framework.permissions import BasePermission


class HasRole(BasePermission):
    """Allow users whose role is in ``allowed_roles`` (admins always pass)."""

    allowed_roles: tuple[str, ...] = ()
    message = "Your account role does not allow this action."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_admin_role or user.role in self.allowed_roles


class IsSeller(HasRole):
    """Sellers (and admins) may publish listings."""

    allowed_roles = ("seller",)
    message = "Only sellers can publish listings."


class IsOwnerOrAdmin(BasePermission):
    """
    Object-level check against ``obj.owner``.

    Admins bypass ownership; everyone else must own the object.
    """

    message = "You do not own this resource."

    def has_object_permission(self, request, view, obj):
        user = request.user
        return user.is_admin_role or obj.owner_id == user.pk
