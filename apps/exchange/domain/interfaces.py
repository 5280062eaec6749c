from abc import ABC, abstractmethod

from apps.exchange.domain.models import ExchangeRateRecord


class BaseExchangeRateStore(ABC):
    @abstractmethod
    def find_rate(self, from_currency: str, to_currency: str) -> ExchangeRateRecord | None:
        pass
