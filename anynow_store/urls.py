from django.urls import include, path

from .order_cart import (
    CheckoutAPIView, ClearCartAPIView, DeleteCartItemAPIView, EditCartAPIView, SaveCartAPIView, ShowCartAPIView,
)
from .storefront import (
    CategoryListAPIView, CategoryProductsAPIView, CornerCatalogAPIView, FeaturedProductsAPIView,
    LocationAPIView, LocationSearchAPIView, ProductDetailAPIView, ProductListAPIView, WebsiteDataAPIView,
)
from .testimonials import TestimonialsAPIView

urlpatterns = [
    # Catalog
    path('website-data/', WebsiteDataAPIView.as_view(), name='website_data'),
    path('featured-products/', FeaturedProductsAPIView.as_view(), name='featured_products'),
    path('products/', ProductListAPIView.as_view(), name='product_list'),
    path('products/<int:product_id>/', ProductDetailAPIView.as_view(), name='product_detail'),
    path('categories/', CategoryListAPIView.as_view(), name='category_list'),
    path('categories/<slug:slug>/products/', CategoryProductsAPIView.as_view(), name='category_products'),
    path('corners/<slug:corner>/', CornerCatalogAPIView.as_view(), name='corner_catalog'),

    # Cart / checkout
    path('cart/', ShowCartAPIView.as_view(), name='show_cart'),
    path('cart/add/', SaveCartAPIView.as_view(), name='save_cart'),
    path('cart/items/<int:product_id>/', EditCartAPIView.as_view(), name='edit_cart'),
    path('cart/items/<int:product_id>/remove/', DeleteCartItemAPIView.as_view(), name='delete_cart_item'),
    path('cart/clear/', ClearCartAPIView.as_view(), name='clear_cart'),
    path('checkout/', CheckoutAPIView.as_view(), name='checkout'),

    # Account
    path('account/', include('anynow_store.auth_urls')),

    # Location
    path('location/', LocationAPIView.as_view(), name='location'),
    path('location/search/', LocationSearchAPIView.as_view(), name='location_search'),

    # Testimonials
    path('testimonials/', TestimonialsAPIView.as_view(), name='testimonials'),
]
