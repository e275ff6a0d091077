"""API views for the blog posts resource."""

import logging
from typing import Any, Optional

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from . import exceptions, services
from .serializers import (
    ErrorSerializer,
    PostDraftSerializer,
    PostListSerializer,
    PostSerializer,
    PostUpdateSerializer,
)

logger = logging.getLogger(__name__)

BLOGPOSTS_ENVELOPE = "blogposts"

ERROR_STATUS = {
    exceptions.ValidationError: status.HTTP_400_BAD_REQUEST,
    exceptions.NotFound: status.HTTP_404_NOT_FOUND,
    exceptions.StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PostAPIView(APIView):  # type: ignore[misc]
    """Base view mapping post store errors onto JSON error responses."""

    permission_classes = [AllowAny]

    def handle_exception(self, exc: Exception) -> Response:
        for error_class, status_code in ERROR_STATUS.items():
            if isinstance(exc, error_class):
                if status_code >= 500:
                    logger.error(
                        f"Post store failure on {self.request.method} {self.request.path}"
                    )
                return Response({"message": exc.message}, status=status_code)
        return super().handle_exception(exc)


@extend_schema(tags=["Posts"])
class PostListView(PostAPIView):
    """
    Collection endpoint for blog posts.

    - `GET`: lists every post inside the `blogposts` envelope.
    - `POST`: creates a post from `author`, `title` and `content`.
    """

    @extend_schema(
        summary="List all blog posts",
        responses={200: PostListSerializer},
    )
    def get(self, request: Request, format: Optional[str] = None) -> Response:
        posts = services.list_posts()
        return Response({BLOGPOSTS_ENVELOPE: PostSerializer(posts, many=True).data})

    @extend_schema(
        summary="Create a blog post",
        request=PostDraftSerializer,
        responses={201: PostSerializer, 400: ErrorSerializer},
        examples=[
            OpenApiExample(
                "Create a blog post",
                value={"author": "A", "title": "T", "content": "C"},
                request_only=True,
            ),
        ],
    )
    def post(self, request: Request, format: Optional[str] = None) -> Response:
        serializer = PostDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        post = services.create_post(**serializer.validated_data)
        return Response(PostSerializer(post).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Posts"])
class PostDetailView(PostAPIView):
    """
    Item endpoint for blog posts.

    Single posts are not fetched through the API; only updates and deletes
    are routed here.
    """

    @extend_schema(
        summary="Update a blog post",
        request=PostUpdateSerializer,
        responses={
            204: OpenApiResponse(description="Post updated."),
            400: ErrorSerializer,
            404: ErrorSerializer,
        },
        examples=[
            OpenApiExample(
                "Update author and title",
                value={"author": "John Madden", "title": "FOOTBALL"},
                request_only=True,
            ),
        ],
    )
    def put(self, request: Request, post_id: str, format: Optional[str] = None) -> Response:
        serializer = PostUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        changes: dict[str, Any] = dict(serializer.validated_data)
        body_id = changes.pop("id", None)
        if body_id is not None and body_id != post_id:
            raise exceptions.ValidationError(
                f"Request path id ({post_id}) and request body id ({body_id}) must match"
            )

        services.update_post(post_id, changes)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        summary="Delete a blog post",
        responses={
            204: OpenApiResponse(description="Post deleted."),
            404: ErrorSerializer,
        },
    )
    def delete(self, request: Request, post_id: str, format: Optional[str] = None) -> Response:
        if not services.delete_post(post_id):
            raise exceptions.NotFound(f"No blog post with id `{post_id}`")
        return Response(status=status.HTTP_204_NO_CONTENT)
