from django.urls import path

from modules.core.views import PublicConfigView, health_check

urlpatterns = [
    path("health", health_check, name="health_check"),
    path("api/v1/config/", PublicConfigView.as_view(), name="public_config"),
]
