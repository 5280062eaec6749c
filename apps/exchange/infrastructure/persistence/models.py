"""
Django ORM models for persistence.
Infrastructure layer: technical storage detail.
"""

import uuid
from django.db import models
from django.utils import timezone


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class ExchangeRate(BaseModel):

    from_currency = models.CharField(max_length=3, db_index=True)
    to_currency = models.CharField(max_length=3, db_index=True)
    rate = models.DecimalField(
        decimal_places=6,
        max_digits=12,
    )
    last_updated = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        app_label = "exchange"
        constraints = [
            models.UniqueConstraint(
                fields=["from_currency", "to_currency"],
                name="unique_rate_per_pair",
            )
        ]
        ordering = ["from_currency", "to_currency"]

    def __str__(self):
        return f"{self.from_currency}/{self.to_currency} | {self.rate} | {self.last_updated:%Y-%m-%d %H:%M}"
