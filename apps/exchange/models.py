# ORM models are defined in the infrastructure layer; Django discovers them here.
from apps.exchange.infrastructure.persistence.models import ExchangeRate  # noqa: F401
