from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("sku", models.CharField(max_length=64, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(max_length=64)),
                ("stock_level", models.IntegerField(default=0)),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("version", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "products",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(stock_level__gte=0),
                        name="products_stock_level_non_negative",
                    ),
                ],
            },
        ),
    ]
