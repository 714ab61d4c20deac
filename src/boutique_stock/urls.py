from django.urls import path

from . import views

app_name = "boutique_stock"

urlpatterns = [
    path("", views.product_list, name="product_list"),
    path("<str:product_id>/stock", views.adjust_stock, name="adjust_stock"),
]
