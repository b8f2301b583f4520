from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.core import mongo
from modules.products.repositories import ProductMongoRepository


class Command(BaseCommand):
    help = "Create the MongoDB indexes used by the product catalog."

    def handle(self, *args, **options):
        repository = ProductMongoRepository(mongo.get_database())
        names = repository.ensure_indexes()
        self.stdout.write(
            self.style.SUCCESS(f"Indexes ensured: {', '.join(names)}")
        )
