from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Book",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=255)),
                ("isbn", models.CharField(max_length=20, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("author", models.CharField(max_length=255)),
                ("genre", models.CharField(blank=True, default="", max_length=100)),
                ("language", models.CharField(blank=True, default="", max_length=50)),
                ("format", models.CharField(blank=True, default="", max_length=50)),
                ("publisher", models.CharField(blank=True, default="", max_length=255)),
                ("publication_date", models.DateField(blank=True, null=True)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("stock", models.PositiveIntegerField(default=0)),
                ("is_available_in_library", models.BooleanField(default=False)),
                ("on_sale", models.BooleanField(default=False)),
                (
                    "discount_percentage",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00")),
                            django.core.validators.MaxValueValidator(Decimal("100.00")),
                        ],
                    ),
                ),
                ("discount_start_date", models.DateTimeField(blank=True, null=True)),
                ("discount_end_date", models.DateTimeField(blank=True, null=True)),
                ("exclusive_edition", models.BooleanField(default=False)),
                ("book_photo", models.CharField(blank=True, default="", max_length=500)),
            ],
            options={
                "db_table": "books",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["title"], name="books_title_idx"),
                    models.Index(fields=["genre"], name="books_genre_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(price__gte=0),
                        name="books_price_non_negative",
                    ),
                ],
            },
        ),
    ]
