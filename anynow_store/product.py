# Standard Library
import logging

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .bridge import get_bridge
from .errors import FormError, NotFoundError
from .forms import clean_product_form
from .permissions import FrontendOnlyPermission
from .utilities import _error, _parse_payload

logger = logging.getLogger(__name__)


# -----------------------
# Grocery products
# -----------------------

class ShowProductsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh("products")
        products = bridge.get_all_products()
        category = (request.query_params.get("category") or "").strip()
        if category:
            products = [p for p in products if p.get("category") == category]
        return Response({"products": products, "count": len(products)}, status=status.HTTP_200_OK)


class ShowSpecificProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, product_id):
        product = get_bridge().get_product_by_id(product_id)
        if product is None:
            return _error("Product not found", status.HTTP_404_NOT_FOUND)
        return Response(product, status=status.HTTP_200_OK)


class SaveProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        bridge = get_bridge()
        try:
            cleaned = clean_product_form(data)
            if not cleaned.get("category"):
                raise FormError("Please select a category")
            if bridge.get_category_by_slug(cleaned["category"]) is None:
                raise FormError("Category not found")
            product = bridge.create_product(cleaned)
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("SaveProduct failed")
            return _error("Could not save product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Product added successfully!", "product": product},
            status=status.HTTP_201_CREATED,
        )


class EditProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, product_id):
        data = _parse_payload(request)
        bridge = get_bridge()
        try:
            cleaned = clean_product_form(data, partial=True)
            if "category" in data and not cleaned.get("category"):
                raise FormError("Please select a category")
            if "category" in cleaned and bridge.get_category_by_slug(cleaned["category"]) is None:
                raise FormError("Category not found")
            product = bridge.update_product(product_id, cleaned)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("EditProduct failed")
            return _error("Could not update product", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Product updated successfully!", "product": product},
            status=status.HTTP_200_OK,
        )

    patch = put


class DeleteProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def delete(self, request, product_id):
        try:
            get_bridge().delete_product(product_id)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("DeleteProduct failed")
            return _error("Could not delete product", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"success": True, "message": "Product deleted successfully!"}, status=status.HTTP_200_OK)


# -----------------------
# Pan / liquor corner
# -----------------------

class ShowCornerProductsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, corner):
        bridge = get_bridge()
        try:
            bridge.refresh()
            products = bridge.get_corner_products(corner)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        return Response({"products": products, "count": len(products)}, status=status.HTTP_200_OK)


class SaveCornerProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request, corner):
        data = _parse_payload(request)
        try:
            cleaned = clean_product_form(data, default_unit="")
            cleaned.pop("category", None)
            product = get_bridge().create_corner_product(corner, cleaned)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("SaveCornerProduct failed")
            return _error("Could not save product", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"success": True, "message": "Product added successfully!", "product": product},
            status=status.HTTP_201_CREATED,
        )


class EditCornerProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, corner, product_id):
        data = _parse_payload(request)
        try:
            cleaned = clean_product_form(data, partial=True)
            product = get_bridge().update_corner_product(corner, product_id, cleaned)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("EditCornerProduct failed")
            return _error("Could not update product", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"success": True, "message": "Product updated successfully!", "product": product},
            status=status.HTTP_200_OK,
        )

    patch = put


class DeleteCornerProductAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def delete(self, request, corner, product_id):
        try:
            get_bridge().delete_corner_product(corner, product_id)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("DeleteCornerProduct failed")
            return _error("Could not delete product", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"success": True, "message": "Product deleted successfully!"}, status=status.HTTP_200_OK)
