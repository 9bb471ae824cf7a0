# Standard Library
import logging

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .accounts import public_user
from .bridge import get_bridge
from .errors import NotFoundError
from .permissions import FrontendOnlyPermission
from .utilities import _error

logger = logging.getLogger(__name__)


def _with_order_count(bridge, user):
    row = public_user(user)
    row["totalOrders"] = bridge.get_user_total_orders(user.get("id"))
    return row


class ShowUsersAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh()
        query = request.query_params.get("q") or request.query_params.get("search") or ""
        users = [_with_order_count(bridge, u) for u in bridge.search_users(query)]
        return Response({"users": users, "count": len(users)}, status=status.HTTP_200_OK)


class ShowSpecificUserAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, user_id):
        bridge = get_bridge()
        user = bridge.get_user(user_id)
        if user is None:
            return _error("User not found", status.HTTP_404_NOT_FOUND)
        payload = _with_order_count(bridge, user)
        payload["orders"] = bridge.get_orders_for_customer(user["id"])
        return Response(payload, status=status.HTTP_200_OK)


class ToggleUserStatusAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, user_id):
        bridge = get_bridge()
        try:
            user = bridge.toggle_user_blocked(user_id)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        verdict = "blocked" if user["isBlocked"] else "unblocked"
        logger.info("User %s %s", user["id"], verdict)
        return Response(
            {"success": True, "message": f"User {verdict} successfully", "user": _with_order_count(bridge, user)},
            status=status.HTTP_200_OK,
        )

    patch = put
