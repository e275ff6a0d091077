"""Database model backing the Django post store."""

from django.db import models

from .records import Post


class BlogPost(models.Model):
    """
    Persistent row for a blog post.

    The primary key is the opaque id handed out by the store's id generator,
    and ``created`` is set by the store on insert. Neither is ever updated.
    ``sequence`` records insertion order independently of the id format.
    """

    id = models.CharField(
        primary_key=True,
        max_length=64,
        editable=False,
        help_text="Opaque identifier assigned by the post store.",
    )
    author = models.CharField(max_length=255, help_text="The author of the post.")
    title = models.CharField(max_length=255, help_text="The title of the post.")
    content = models.TextField(
        blank=True, default="", help_text="The main content of the post."
    )
    created = models.DateTimeField(
        editable=False, db_index=True, help_text="Timestamp when the post was created."
    )
    sequence = models.PositiveBigIntegerField(
        unique=True, editable=False, help_text="Insertion position of the post."
    )

    class Meta:
        verbose_name = "Blog Post"
        verbose_name_plural = "Blog Posts"
        ordering = ["sequence"]

    def __str__(self) -> str:
        """String representation of a BlogPost."""
        return self.title

    def to_post(self) -> Post:
        """Return the immutable record for this row."""
        return Post(
            id=self.id,
            author=self.author,
            title=self.title,
            content=self.content,
            created=self.created,
        )
