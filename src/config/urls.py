"""
Root URL configuration.

Mounts the blog posts resource at the site root, the health checks and the
OpenAPI schema/docs.
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("", include("src.apps.core.urls")),
    path("", include("src.apps.blog.urls")),
    # API documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]

handler404 = "src.apps.core.views.not_found"
handler500 = "src.apps.core.views.server_error"
