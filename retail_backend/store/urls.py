# store/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from store.views import BillingSettingsView, StoreViewSet

router = DefaultRouter()
router.register(r"stores", StoreViewSet, basename="stores")

urlpatterns = [
    path("<uuid:store_id>/billing-settings/", BillingSettingsView.as_view(), name="billing-settings"),
    path("", include(router.urls)),
]
