"""
URL configuration for backend project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # Admin panel API routes
    path('api/admin/', include('anynow_store.admin_urls')),

    # Storefront API routes
    path('api/', include('anynow_store.urls')),
]
