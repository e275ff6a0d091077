"""Django management command to fill the post store with synthetic posts."""

from typing import Any

from django.core.management.base import BaseCommand, CommandParser
from faker import Faker
from tqdm import tqdm

from src.apps.blog.exceptions import PostError
from src.apps.blog.seeding import DEFAULT_SEED_COUNT, generate_fake_post
from src.apps.blog.store import get_post_store


class Command(BaseCommand):
    """
    Insert fake blog posts through the configured post store.

    Usage:
        python manage.py seed_posts
        python manage.py seed_posts --count 50 --clear
    """

    help = "Seed the post store with synthetic blog posts"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "--count",
            type=int,
            default=DEFAULT_SEED_COUNT,
            help=f"Number of posts to create (default: {DEFAULT_SEED_COUNT})",
        )
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Delete every existing post before seeding",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the management command."""
        count: int = options["count"]
        if count < 0:
            self.stdout.write(self.style.ERROR("--count must not be negative"))
            return

        store = get_post_store()

        if options["clear"]:
            removed = store.delete_all()
            self.stdout.write(self.style.WARNING(f"Deleted {removed} existing posts"))

        fake = Faker()
        created_count = 0
        try:
            for _ in tqdm(range(count), desc="Seeding posts", unit="post"):
                store.insert(generate_fake_post(fake))
                created_count += 1
        except PostError as e:
            self.stdout.write(self.style.ERROR(f"Seeding stopped: {e.message}"))
            self.stdout.write(f"Created {created_count} posts before the failure")
            return

        self.stdout.write(self.style.SUCCESS(f"Created {created_count} posts"))
        self.stdout.write(f"Total posts in store: {store.count()}")
