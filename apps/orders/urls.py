from django.urls import path

from .views import OrdersCollectionView, OrdersHealthView, RetrieveOrderView

app_name = "orders"

urlpatterns = [
    path("health/", OrdersHealthView.as_view(), name="health"),
    path("", OrdersCollectionView.as_view(), name="orders-collection"),  # GET list / POST create
    path("<str:oid>/", RetrieveOrderView.as_view(), name="orders-detail"),
]
