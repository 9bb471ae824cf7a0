# Standard Library
import logging

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .bridge import get_bridge
from .errors import FormError, NotFoundError
from .forms import clean_category_form
from .permissions import FrontendOnlyPermission
from .utilities import _error, _parse_payload

logger = logging.getLogger(__name__)


class ShowCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh()
        products = bridge.get_all_products()
        result = []
        for cat in bridge.get_all_categories():
            count = sum(1 for p in products if p.get("category") == cat.get("slug"))
            result.append({**cat, "productCount": count})
        return Response({"categories": result}, status=status.HTTP_200_OK)


class SaveCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        try:
            category = get_bridge().create_category(clean_category_form(data))
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("SaveCategory failed")
            return _error("Could not save category", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Category added successfully!", "category": category},
            status=status.HTTP_201_CREATED,
        )


class EditCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, category_id):
        data = _parse_payload(request)
        try:
            category = get_bridge().update_category(category_id, clean_category_form(data, partial=True))
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("EditCategory failed")
            return _error("Could not update category", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Category updated successfully!", "category": category},
            status=status.HTTP_200_OK,
        )

    patch = put


class DeleteCategoryAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def delete(self, request, category_id):
        try:
            removed = get_bridge().delete_category(category_id)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except Exception:
            logger.exception("DeleteCategory failed")
            return _error("Could not delete category", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Category deleted successfully!", "productsRemoved": removed},
            status=status.HTTP_200_OK,
        )
