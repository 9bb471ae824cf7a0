# Standard Library
import logging

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .bridge import get_bridge
from .errors import FormError
from .permissions import FrontendOnlyPermission
from .utilities import _as_bool, _as_int, _error, _parse_payload

logger = logging.getLogger(__name__)


class DashboardAPIView(APIView):
    """Counts for the admin panel's overview cards."""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh()
        testimonials = bridge.get_all_testimonials()
        users = bridge.get_all_users()
        return Response({
            "products": len(bridge.get_all_products()),
            "categories": len(bridge.get_all_categories()),
            "panProducts": len(bridge.get_corner_products("pan-corner")),
            "liquorProducts": len(bridge.get_corner_products("liquor-corner")),
            "users": len(users),
            "blockedUsers": sum(1 for u in users if u.get("isBlocked")),
            "testimonials": len(testimonials),
            "pendingTestimonials": sum(1 for t in testimonials if not t.get("isApproved")),
            "orders": bridge.get_order_stats(),
        }, status=status.HTTP_200_OK)


class ClearDataAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        if not _as_bool(data.get("confirm"), default=False):
            return _error("Set confirm=true to reset products, categories and orders")
        get_bridge().clear_all_data()
        return Response({"success": True, "message": "All data reset to defaults"}, status=status.HTTP_200_OK)


class CreateSampleAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request, kind):
        data = _parse_payload(request)
        count = max(1, min(50, _as_int(data.get("count"), 1) or 1))
        bridge = get_bridge()
        try:
            created = [bridge.add_sample(kind) for _ in range(count)]
        except FormError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        logger.info("Created %d sample %s record(s)", len(created), kind)
        return Response(
            {"success": True, "message": f"Test {kind} created successfully!", "created": created},
            status=status.HTTP_201_CREATED,
        )
