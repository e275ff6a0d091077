"""URL configuration for the blog posts resource."""

from django.urls import re_path

from .views import PostDetailView, PostListView

app_name = "blog"

urlpatterns = [
    re_path(r"^posts/?$", PostListView.as_view(), name="post-list"),
    re_path(r"^posts/(?P<post_id>[^/]+)/?$", PostDetailView.as_view(), name="post-detail"),
]
