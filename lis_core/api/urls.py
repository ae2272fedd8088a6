# lis_core/api/urls.py
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from lis_core.alerts.api.views import PendingOrdersView
from lis_core.catalog.api.views import LabTestViewSet
from lis_core.orders.api.views import OrderViewSet
from lis_core.patients.api.views import PatientViewSet

router = DefaultRouter()
router.register(r"catalog/tests", LabTestViewSet, basename="catalog-tests")
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"orders", OrderViewSet, basename="orders")

urlpatterns = [
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("pending/", PendingOrdersView.as_view(), name="pending-orders"),
]

urlpatterns += router.urls
