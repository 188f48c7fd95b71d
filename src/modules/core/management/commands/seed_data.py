from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.catalog.models import Book
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem
from modules.orders.pricing import quote


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users = self._seed_users()
        books = self._seed_books()
        orders_created = self._seed_orders(users, books)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={len(users)}, "
                f"books={len(books)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> list:
        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser(
                "admin", email="admin@bookstore.local", password="admin123"
            )

        users = []
        seed_users = [
            ("reader", "Ana Reader", "reader@example.com"),
            ("collector", "Bruno Collector", "collector@example.com"),
            ("student", "Carla Student", "student@example.com"),
        ]
        for username, full_name, email in seed_users:
            user = User.objects.filter(username=username).first()
            if user is None:
                user = User.objects.create_user(
                    username,
                    email=email,
                    password=f"{username}123",
                    full_name=full_name,
                )
            users.append(user)
        return users

    def _seed_books(self) -> list[Book]:
        self.stdout.write("Creating books...")
        books: list[Book] = []
        catalog = [
            ("9780000000011", "The Go Programming Language", "Alan Donovan", "Programming", Decimal("39.99")),
            ("9780000000028", "Programming Rust", "Jim Blandy", "Programming", Decimal("49.99")),
            ("9780000000035", "Fluent Python", "Luciano Ramalho", "Programming", Decimal("54.90")),
            ("9780000000042", "Dune", "Frank Herbert", "Science Fiction", Decimal("12.99")),
            ("9780000000059", "Foundation", "Isaac Asimov", "Science Fiction", Decimal("10.50")),
            ("9780000000066", "The Left Hand of Darkness", "Ursula K. Le Guin", "Science Fiction", Decimal("11.25")),
            ("9780000000073", "Pride and Prejudice", "Jane Austen", "Classics", Decimal("8.00")),
            ("9780000000080", "Middlemarch", "George Eliot", "Classics", Decimal("9.75")),
            ("9780000000097", "The Name of the Rose", "Umberto Eco", "Mystery", Decimal("14.40")),
            ("9780000000103", "Gone Girl", "Gillian Flynn", "Mystery", Decimal("13.10")),
        ]
        formats = ["Paperback", "Hardcover", "eBook"]
        for isbn, title, author, genre, price in catalog:
            book, _ = Book.objects.get_or_create(
                isbn=isbn,
                defaults={
                    "title": title,
                    "author": author,
                    "genre": genre,
                    "language": "English",
                    "format": random.choice(formats),
                    "publisher": "Seed Press",
                    "publication_date": date(2000, 1, 1)
                    + timedelta(days=random.randint(0, 8000)),
                    "price": price,
                    "stock": random.randint(0, 50),
                    "is_available_in_library": random.random() < 0.5,
                },
            )
            books.append(book)
        self.stdout.write(self.style.SUCCESS("Creating books... Done!"))
        return books

    def _seed_orders(self, users: Iterable, books: list[Book]) -> int:
        self.stdout.write("Creating orders...")
        users_list = list(users)
        if not users_list or not books:
            self.stdout.write(self.style.WARNING("Skipping orders (no users/books)."))
            return 0
        if Order.objects.filter(user__in=users_list).exists():
            self.stdout.write(self.style.WARNING("Orders already seeded."))
            return 0

        status_weights = [
            (OrderStatus.PENDING, 0.4),
            (OrderStatus.COMPLETED, 0.45),
            (OrderStatus.CANCELLED, 0.15),
        ]
        statuses = [s for s, _ in status_weights]
        weights = [w for _, w in status_weights]

        orders_created = 0
        for _ in range(30):
            user = random.choice(users_list)
            status = random.choices(statuses, weights=weights, k=1)[0]
            picked = random.sample(books, k=random.randint(1, 4))
            lines = [
                OrderItem(book=book, quantity=random.randint(1, 3), unit_price=book.price)
                for book in picked
            ]
            prior = Order.objects.filter(
                user=user, status=OrderStatus.COMPLETED
            ).count()
            priced = quote(lines, prior)

            order_date = timezone.now() - timedelta(days=random.randint(1, 30))
            order = Order(
                user=user,
                order_date=order_date,
                status=status,
                total_amount=priced.total_amount,
                discount_applied=priced.discount,
            )
            if status == OrderStatus.COMPLETED:
                order.completed_at = order_date + timedelta(days=1)
            order.save()

            for line in lines:
                line.order = order
                line.save()
            orders_created += 1

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
