"""
URL configuration for the Blog Management API.
"""

from django.urls import path

from .api import api

urlpatterns = [
    path("api/", api.urls),
]
