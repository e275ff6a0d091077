from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BlogPost",
            fields=[
                (
                    "id",
                    models.CharField(
                        editable=False,
                        help_text="Opaque identifier assigned by the post store.",
                        max_length=64,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "author",
                    models.CharField(
                        help_text="The author of the post.", max_length=255
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        help_text="The title of the post.", max_length=255
                    ),
                ),
                (
                    "content",
                    models.TextField(
                        blank=True,
                        default="",
                        help_text="The main content of the post.",
                    ),
                ),
                (
                    "created",
                    models.DateTimeField(
                        db_index=True,
                        editable=False,
                        help_text="Timestamp when the post was created.",
                    ),
                ),
                (
                    "sequence",
                    models.PositiveBigIntegerField(
                        editable=False,
                        help_text="Insertion position of the post.",
                        unique=True,
                    ),
                ),
            ],
            options={
                "verbose_name": "Blog Post",
                "verbose_name_plural": "Blog Posts",
                "ordering": ["sequence"],
            },
        ),
    ]
