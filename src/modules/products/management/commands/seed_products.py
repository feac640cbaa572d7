from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

SAMPLE_CATALOG = [
    {
        "nome": "Notebook Dell Inspiron",
        "preco": Decimal("2999.99"),
        "descricao": "Notebook com processador Intel i5, 8GB RAM, 256GB SSD",
        "quantidade": 10,
    },
    {
        "nome": "Mouse Gamer RGB",
        "preco": Decimal("89.90"),
        "descricao": "Mouse gamer com 6 botões e iluminação RGB",
        "quantidade": 25,
    },
    {
        "nome": "Teclado Mecânico",
        "preco": Decimal("299.90"),
        "descricao": "Teclado mecânico com switches Cherry MX Blue",
        "quantidade": 15,
    },
    {
        "nome": 'Monitor 24" Full HD',
        "preco": Decimal("599.90"),
        "descricao": "Monitor LED 24 polegadas com resolução Full HD",
        "quantidade": 8,
    },
    {
        "nome": "Webcam HD",
        "preco": Decimal("129.90"),
        "descricao": "Webcam com resolução HD e microfone integrado",
        "quantidade": 20,
    },
    {
        "nome": "Headset Gamer",
        "preco": Decimal("199.90"),
        "descricao": "Headset com microfone e cancelamento de ruído",
        "quantidade": 12,
    },
    {
        "nome": "SSD 500GB",
        "preco": Decimal("299.90"),
        "descricao": "SSD SATA de 500GB para upgrade de performance",
        "quantidade": 30,
    },
    {
        "nome": "Memória RAM 8GB",
        "preco": Decimal("159.90"),
        "descricao": "Memória DDR4 8GB para desktop",
        "quantidade": 40,
    },
]


class Command(BaseCommand):
    help = "Seed the product catalog with sample data when it is empty."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every product before seeding.",
        )
        parser.add_argument(
            "--database",
            default="default",
            help="Database alias to seed (default: 'default').",
        )

    def handle(self, *args, **options):
        repo = ProductDjangoRepository(using=options["database"])

        # reset and seed succeed or fail together
        with transaction.atomic(using=repo.using):
            if options["reset"]:
                existing = repo.list_all()
                for product in existing:
                    repo.delete(product.id)
                self.stdout.write(
                    self.style.WARNING(f"Removed {len(existing)} products.")
                )

            if repo.count() > 0:
                self.stdout.write("Catalog already has products, skipping seed.")
                return

            self.stdout.write("Creating products...")
            for record in SAMPLE_CATALOG:
                repo.create(Product.from_record(record))

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={len(SAMPLE_CATALOG)}")
        )
