import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import accounts
from .accounts import AccountBlocked, AddressBook, AuthenticationFailed, current_user, public_user
from .bridge import get_bridge
from .errors import FormError, NotFoundError
from .permissions import FrontendOnlyPermission
from .utilities import _as_int, _error, _parse_payload

logger = logging.getLogger(__name__)


def _session_response(user, token, message, code=status.HTTP_200_OK):
    return Response(
        {"success": True, "message": message, "access": token, "user": public_user(user)},
        status=code,
    )


class CustomerAPIView(APIView):
    """Base for endpoints that need a signed-in, unblocked customer."""
    permission_classes = [FrontendOnlyPermission]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.customer = current_user(request)

    def handle_exception(self, exc):
        if isinstance(exc, AuthenticationFailed):
            return _error(str(exc), status.HTTP_401_UNAUTHORIZED)
        if isinstance(exc, AccountBlocked):
            return _error(str(exc), status.HTTP_403_FORBIDDEN)
        return super().handle_exception(exc)


class SignupView(APIView):
    """
    POST /api/account/signup/
    {name, email, phone, password, confirmPassword} -> {access, user}
    """
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        try:
            user, token = accounts.signup(_parse_payload(request))
        except FormError as e:
            return _error(str(e))
        return _session_response(user, token, accounts.SIGNUP_OK, status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        try:
            user, token = accounts.login(_parse_payload(request))
        except FormError as e:
            return _error(str(e))
        except AccountBlocked as e:
            return _error(str(e), status.HTTP_403_FORBIDDEN)
        return _session_response(user, token, accounts.LOGIN_OK)


class LogoutView(APIView):
    """Tokens are stateless; the client drops its copy."""
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        return Response({"success": True, "message": accounts.LOGOUT_OK}, status=status.HTTP_200_OK)


class MeView(CustomerAPIView):
    def get(self, request):
        return Response({"user": public_user(self.customer)}, status=status.HTTP_200_OK)


class MyOrdersView(CustomerAPIView):
    def get(self, request):
        orders = get_bridge().get_orders_for_customer(self.customer["id"])
        return Response({"orders": orders, "count": len(orders)}, status=status.HTTP_200_OK)


class AddressesView(CustomerAPIView):
    def get(self, request):
        return Response({"addresses": AddressBook(self.customer["id"]).list()}, status=status.HTTP_200_OK)

    def post(self, request):
        try:
            address = AddressBook(self.customer["id"]).add(_parse_payload(request))
        except FormError as e:
            return _error(str(e))
        return Response(
            {"success": True, "message": "Address saved successfully!", "address": address},
            status=status.HTTP_201_CREATED,
        )


class AddressDetailView(CustomerAPIView):
    def put(self, request, address_id):
        """Make this the default delivery address."""
        try:
            addresses = AddressBook(self.customer["id"]).set_default(_as_int(address_id))
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "addresses": addresses}, status=status.HTTP_200_OK)

    def delete(self, request, address_id):
        try:
            addresses = AddressBook(self.customer["id"]).remove(_as_int(address_id))
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        return Response(
            {"success": True, "message": "Address removed", "addresses": addresses},
            status=status.HTTP_200_OK,
        )
