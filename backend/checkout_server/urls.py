from django.urls import path, include, re_path
from apps.common.views import live_health, ready_health, public_file
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("", include("apps.api.urls")),
    path("health/live", live_health, name="health-live"),
    path("health/ready", ready_health, name="health-ready"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "docs/swagger/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    # Catch-all for the public directory; must stay last.
    re_path(r"^(?P<path>.*)$", public_file, name="public-file"),
]
