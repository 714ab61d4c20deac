from django.apps import AppConfig


class BoutiqueStockConfig(AppConfig):
    name = "boutique_stock"
    verbose_name = "Boutique stock"
