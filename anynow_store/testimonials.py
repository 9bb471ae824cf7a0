# anynow_store/testimonials.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .bridge import get_bridge
from .errors import FormError, NotFoundError
from .forms import clean_testimonial_form
from .permissions import FrontendOnlyPermission
from .utilities import _as_bool, _error, _parse_payload


logger = logging.getLogger(__name__)


# --------------------------
# 1) SHOW (admin list)
# GET /api/admin/show-testimonials/[?q=...&status=approved|pending]
# --------------------------
class ShowTestimonialsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh("testimonials")
        query = request.query_params.get("q") or request.query_params.get("search") or ""
        items = bridge.search_testimonials(query)

        state = (request.query_params.get("status") or "").strip().lower()
        if state == "approved":
            items = [t for t in items if t.get("isApproved")]
        elif state == "pending":
            items = [t for t in items if not t.get("isApproved")]

        return Response({"testimonials": items, "count": len(items)}, status=status.HTTP_200_OK)


# --------------------------
# 2) TOGGLE approval
# PUT /api/admin/toggle-testimonial/<id>/
# --------------------------
class ToggleTestimonialAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, testimonial_id):
        try:
            item = get_bridge().toggle_testimonial_approval(testimonial_id)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        verdict = "approved" if item["isApproved"] else "rejected"
        return Response(
            {"success": True, "message": f"Testimonial {verdict} successfully", "testimonial": item},
            status=status.HTTP_200_OK,
        )

    patch = put


# --------------------------
# 3) DELETE
# DELETE /api/admin/delete-testimonial/<id>/
# --------------------------
class DeleteTestimonialAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def delete(self, request, testimonial_id):
        try:
            get_bridge().delete_testimonial(testimonial_id)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "message": "Testimonial deleted successfully"}, status=status.HTTP_200_OK)


# --------------------------
# 4) STOREFRONT list + submit
# GET  /api/testimonials/          approved only (?all=1 for everything)
# POST /api/testimonials/          new review, awaits approval
# --------------------------
class TestimonialsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        if _as_bool(request.query_params.get("all"), default=False):
            items = bridge.get_all_testimonials()
        else:
            items = bridge.get_approved_testimonials()
        return Response({"testimonials": items}, status=status.HTTP_200_OK)

    def post(self, request):
        data = _parse_payload(request)
        try:
            item = get_bridge().create_testimonial(clean_testimonial_form(data))
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("SaveTestimonial failed")
            return _error("Could not save testimonial", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(
            {"success": True, "message": "Thank you! Your review will appear once approved.", "testimonial": item},
            status=status.HTTP_201_CREATED,
        )
