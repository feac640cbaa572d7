import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now, editable=False
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(default=django.utils.timezone.now),
                ),
                ("name", models.CharField(db_column="nome", max_length=255)),
                (
                    "price",
                    models.DecimalField(
                        db_column="preco", decimal_places=2, max_digits=10
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, db_column="descricao", default=""),
                ),
                ("quantity", models.IntegerField(db_column="quantidade", default=0)),
            ],
            options={
                "db_table": "produtos",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["name"], name="idx_produtos_nome"),
                    models.Index(fields=["price"], name="idx_produtos_preco"),
                    models.Index(
                        fields=["created_at"], name="idx_produtos_created_at"
                    ),
                ],
            },
        ),
    ]
