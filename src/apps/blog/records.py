"""The blog post record shared by every store backend."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Post:
    """A stored blog post. Stores hand these out instead of mutable rows."""

    id: str
    author: str
    title: str
    content: str
    created: datetime
