# anynow_store/storefront.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import catalog, defaults
from .accounts import get_location, nearest_city, search_locations, set_location
from .errors import FormError, HostedBackendError
from .permissions import FrontendOnlyPermission
from .sync import snapshot_token
from .utilities import _device_id, _error, _parse_payload, _to_decimal

logger = logging.getLogger(__name__)


def _unchanged_since(request, data):
    """Return (token, unchanged) for clients polling with ?since=<token>."""
    token = snapshot_token(data)
    return token, request.query_params.get("since") == token


# --------------------------
# Catalog
# --------------------------

class WebsiteDataAPIView(APIView):
    """
    Grouped catalog the storefront renders.

    Clients poll this every couple of seconds with ``?since=<token>`` from
    the previous response and get ``{"changed": false}`` when nothing moved.
    """
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        data = catalog.fetch_admin_data()
        token, unchanged = _unchanged_since(request, data)
        if unchanged:
            return Response({"changed": False, "token": token}, status=status.HTTP_200_OK)
        return Response({"changed": True, "token": token, **data}, status=status.HTTP_200_OK)


class FeaturedProductsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        products = catalog.fetch_featured_products()
        token, unchanged = _unchanged_since(request, products)
        if unchanged:
            return Response({"changed": False, "token": token}, status=status.HTTP_200_OK)
        return Response({"changed": True, "token": token, "products": products}, status=status.HTTP_200_OK)


class ProductListAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        search = request.query_params.get("search") or ""
        category = request.query_params.get("category") or "all"
        try:
            products = catalog.list_products(search, category)
        except HostedBackendError as e:
            return _error(str(e), status.HTTP_502_BAD_GATEWAY)
        products = catalog.sort_products(products, request.query_params.get("sort") or "popular")
        return Response({"products": products, "count": len(products)}, status=status.HTTP_200_OK)


class ProductDetailAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, product_id):
        product = catalog.find_product(product_id)
        if product is None:
            return _error("Product not found", status.HTTP_404_NOT_FOUND)
        related = [
            p for p in catalog.get_category_products(product.get("category"))
            if p.get("id") != product.get("id")
        ][:4]
        return Response({
            "product": product,
            "discountedPrice": catalog.discounted_price(product),
            "related": related,
        }, status=status.HTTP_200_OK)


class CategoryListAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        try:
            categories = catalog.list_categories()
        except HostedBackendError as e:
            return _error(str(e), status.HTTP_502_BAD_GATEWAY)
        return Response({"categories": categories}, status=status.HTTP_200_OK)


class CategoryProductsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, slug):
        products = catalog.get_category_products(slug)
        sort_by = request.query_params.get("sort") or "popular"
        if sort_by not in catalog.SORT_OPTIONS:
            return _error(f"Unknown sort option: {sort_by}")
        products = catalog.sort_products(products, sort_by)
        return Response({"slug": slug, "products": products, "count": len(products)}, status=status.HTTP_200_OK)


# --------------------------
# Delivery location
# --------------------------

class LocationAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        return Response(get_location(_device_id(request)), status=status.HTTP_200_OK)

    def put(self, request):
        data = _parse_payload(request)
        city, area = data.get("city"), data.get("area")
        if not city and data.get("lat") is not None and data.get("lon") is not None:
            city = nearest_city(float(_to_decimal(data["lat"])), float(_to_decimal(data["lon"])))
            area = next((c["area"] for c in defaults.DELIVERY_CITIES if c["name"] == city), "")
        try:
            location = set_location(_device_id(request), city, area)
        except FormError as e:
            return _error(str(e))
        return Response(location, status=status.HTTP_200_OK)


class LocationSearchAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        return Response({"results": search_locations(request.query_params.get("q"))}, status=status.HTTP_200_OK)


# --------------------------
# Corners
# --------------------------

class CornerCatalogAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, corner):
        if corner not in defaults.CORNERS:
            return _error("Corner not found", status.HTTP_404_NOT_FOUND)
        products = catalog.sort_products(
            catalog.get_category_products(corner), request.query_params.get("sort") or "popular"
        )
        return Response({"slug": corner, "products": products}, status=status.HTTP_200_OK)
