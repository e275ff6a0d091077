"""Errors raised by the post store and mapped to responses by the API views."""


class PostError(Exception):
    """Base class for every blog post failure."""

    default_message = "Blog post operation failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PostError):
    """Caller supplied malformed or missing input."""

    default_message = "Invalid blog post."


class NotFound(PostError):
    """No post exists with the requested id."""

    default_message = "Blog post not found."


class StoreError(PostError):
    """The underlying storage failed. Never carries storage details."""

    default_message = "The blog post store is unavailable."
