"""
URL configuration for license admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_api"

urlpatterns = [
    path(
        "licenses",
        views.CreateLicenseView.as_view(),
        name="create-license",
    ),
    path(
        "licenses/<str:key>",
        views.LicenseDetailView.as_view(),
        name="get-license",
    ),
    path(
        "licenses/<str:key>/extend",
        views.ExtendLicenseView.as_view(),
        name="extend-license",
    ),
    path(
        "licenses/<str:key>/revoke",
        views.RevokeLicenseView.as_view(),
        name="revoke-license",
    ),
]
