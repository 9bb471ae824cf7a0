# anynow_store/permissions.py
from django.conf import settings
from rest_framework.permissions import BasePermission


class FrontendOnlyPermission(BasePermission):
    def has_permission(self, request, view):
        key = getattr(settings, "FRONTEND_KEY", "")
        return bool(key) and request.headers.get("X-Frontend-Key") == key
