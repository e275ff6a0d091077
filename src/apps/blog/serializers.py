"""
Serializers for the blog posts API.
"""

from typing import Any

from rest_framework import serializers


class PostSerializer(serializers.Serializer[Any]):  # type: ignore[misc]
    """
    Output representation of a stored post.

    All five fields are always present and carry the store's values as-is.
    """

    id = serializers.CharField(read_only=True)
    author = serializers.CharField(read_only=True)
    title = serializers.CharField(read_only=True)
    created = serializers.DateTimeField(read_only=True)
    content = serializers.CharField(read_only=True)


class PostDraftSerializer(serializers.Serializer[dict[str, Any]]):  # type: ignore[misc]
    """Request body for creating a post."""

    author = serializers.CharField(max_length=255, help_text="Author of the post.")
    title = serializers.CharField(max_length=255, help_text="Title of the post.")
    content = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        trim_whitespace=False,
        default="",
        help_text="Body of the post. `null` is stored as an empty string.",
    )


class PostUpdateSerializer(serializers.Serializer[dict[str, Any]]):  # type: ignore[misc]
    """
    Request body for updating a post.

    Every field is optional. `id`, when sent, must match the id in the URL;
    `created` and any other unknown keys are dropped.
    """

    id = serializers.CharField(
        required=False,
        allow_null=True,
        help_text="Must match the id in the URL when present.",
    )
    author = serializers.CharField(required=False, max_length=255)
    title = serializers.CharField(required=False, max_length=255)
    content = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class PostListSerializer(serializers.Serializer[dict[str, Any]]):  # type: ignore[misc]
    """Envelope returned by the list endpoint."""

    blogposts = PostSerializer(many=True, read_only=True)


class ErrorSerializer(serializers.Serializer[dict[str, Any]]):  # type: ignore[misc]
    """Body of every failure response."""

    message = serializers.CharField(read_only=True)
