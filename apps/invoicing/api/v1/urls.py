from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.invoicing.api.v1.views import InvoiceViewSet

router = DefaultRouter()
router.register(r'invoices', InvoiceViewSet, basename='invoice')

urlpatterns = [
    path('', include(router.urls)),
]
