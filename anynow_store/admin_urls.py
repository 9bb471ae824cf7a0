from django.urls import path

from .category import DeleteCategoryAPIView, EditCategoryAPIView, SaveCategoryAPIView, ShowCategoryAPIView
from .dashboard import ClearDataAPIView, CreateSampleAPIView, DashboardAPIView
from .order_cart import EditOrderStatusAPIView, OrderStatsAPIView, ShowOrdersAPIView, ShowSpecificOrderAPIView
from .product import (
    DeleteCornerProductAPIView, DeleteProductAPIView, EditCornerProductAPIView, EditProductAPIView,
    SaveCornerProductAPIView, SaveProductAPIView, ShowCornerProductsAPIView, ShowProductsAPIView,
    ShowSpecificProductAPIView,
)
from .testimonials import DeleteTestimonialAPIView, ShowTestimonialsAPIView, ToggleTestimonialAPIView
from .users import ShowSpecificUserAPIView, ShowUsersAPIView, ToggleUserStatusAPIView

urlpatterns = [
    path('dashboard/', DashboardAPIView.as_view(), name='admin_dashboard'),

    # Products
    path('show-products/', ShowProductsAPIView.as_view(), name='show_products'),
    path('show-product/<int:product_id>/', ShowSpecificProductAPIView.as_view(), name='show_product'),
    path('save-product/', SaveProductAPIView.as_view(), name='save_product'),
    path('edit-product/<int:product_id>/', EditProductAPIView.as_view(), name='edit_product'),
    path('delete-product/<int:product_id>/', DeleteProductAPIView.as_view(), name='delete_product'),

    # Pan / liquor corner
    path('corners/<slug:corner>/show-products/', ShowCornerProductsAPIView.as_view(), name='show_corner_products'),
    path('corners/<slug:corner>/save-product/', SaveCornerProductAPIView.as_view(), name='save_corner_product'),
    path('corners/<slug:corner>/edit-product/<int:product_id>/', EditCornerProductAPIView.as_view(), name='edit_corner_product'),
    path('corners/<slug:corner>/delete-product/<int:product_id>/', DeleteCornerProductAPIView.as_view(), name='delete_corner_product'),

    # Categories
    path('show-categories/', ShowCategoryAPIView.as_view(), name='show_categories'),
    path('save-category/', SaveCategoryAPIView.as_view(), name='save_category'),
    path('edit-category/<int:category_id>/', EditCategoryAPIView.as_view(), name='edit_category'),
    path('delete-category/<int:category_id>/', DeleteCategoryAPIView.as_view(), name='delete_category'),

    # Orders
    path('show-orders/', ShowOrdersAPIView.as_view(), name='show_orders'),
    path('show-order/<int:order_id>/', ShowSpecificOrderAPIView.as_view(), name='show_order'),
    path('edit-order-status/<int:order_id>/', EditOrderStatusAPIView.as_view(), name='edit_order_status'),
    path('order-stats/', OrderStatsAPIView.as_view(), name='order_stats'),

    # Users
    path('show-users/', ShowUsersAPIView.as_view(), name='show_users'),
    path('show-user/<int:user_id>/', ShowSpecificUserAPIView.as_view(), name='show_user'),
    path('toggle-user-status/<int:user_id>/', ToggleUserStatusAPIView.as_view(), name='toggle_user_status'),

    # Testimonials
    path('show-testimonials/', ShowTestimonialsAPIView.as_view(), name='show_testimonials'),
    path('toggle-testimonial/<int:testimonial_id>/', ToggleTestimonialAPIView.as_view(), name='toggle_testimonial'),
    path('delete-testimonial/<int:testimonial_id>/', DeleteTestimonialAPIView.as_view(), name='delete_testimonial'),

    # Maintenance
    path('clear-data/', ClearDataAPIView.as_view(), name='clear_data'),
    path('create-sample/<slug:kind>/', CreateSampleAPIView.as_view(), name='create_sample'),
]
