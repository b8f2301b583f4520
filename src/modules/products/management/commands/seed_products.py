from __future__ import annotations

import random

from django.core.management.base import BaseCommand

from modules.products.exceptions import ProductAlreadyExists
from modules.products.repositories import get_product_repository
from modules.products.services import ProductService

SEED_PRODUCTS = [
    ("Mechanical Keyboard", "87-key keyboard with brown switches."),
    ("Wireless Mouse", "Ergonomic mouse with silent clicks."),
    ("USB-C Hub", "7-in-1 hub with HDMI and card reader."),
    ("27in Monitor", "QHD IPS panel, 144 Hz."),
    ("Laptop Stand", "Aluminium stand with adjustable height."),
    ("Noise Cancelling Headphones", "Over-ear, 30 h battery."),
    ("Webcam", "1080p webcam with dual microphones."),
    ("Desk Lamp", "LED lamp with colour temperature control."),
]

MANAGERS = ["Alice", "Bruno", "Carla", "Daniel"]


class Command(BaseCommand):
    help = "Seed the product catalog with development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--count",
            type=int,
            default=len(SEED_PRODUCTS),
            help="Number of demo products to create (at most %d)." % len(SEED_PRODUCTS),
        )
        parser.add_argument(
            "--password",
            default="seed1234",
            help="Shared-secret password assigned to every seeded product.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        service = ProductService(repository=get_product_repository())
        self.stdout.write("Seeding products...")

        created = skipped = 0
        for name, description in SEED_PRODUCTS[: max(options["count"], 0)]:
            try:
                service.create_product(
                    {
                        "name": name,
                        "description": description,
                        "manager": random.choice(MANAGERS),
                        "password": options["password"],
                    }
                )
            except ProductAlreadyExists:
                skipped += 1
                continue
            created += 1

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: created={created}, skipped={skipped}")
        )
