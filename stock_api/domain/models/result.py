from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from stock_api.domain.errors import StockApiError

T = TypeVar('T')


class ResultStatus(str, Enum):
    OK = 'ok'
    FALLBACK = 'fallback'
    ERROR = 'error'


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a data fetch: live data, degraded (synthetic) data, or a failure."""

    status: ResultStatus
    data: Optional[T] = None
    error: Optional[StockApiError] = None

    @classmethod
    def ok(cls, data: T) -> 'FetchResult[T]':
        return cls(ResultStatus.OK, data=data)

    @classmethod
    def fallback(cls, data: T, error: StockApiError) -> 'FetchResult[T]':
        return cls(ResultStatus.FALLBACK, data=data, error=error)

    @classmethod
    def err(cls, error: StockApiError) -> 'FetchResult[T]':
        return cls(ResultStatus.ERROR, error=error)

    @property
    def is_ok(self) -> bool:
        return self.status is ResultStatus.OK

    @property
    def is_degraded(self) -> bool:
        return self.status is ResultStatus.FALLBACK

    @property
    def source(self) -> str:
        return 'live' if self.is_ok else 'synthetic'

    def unwrap(self) -> T:
        """Return the data, raising the stored error for ERROR results."""
        if self.status is ResultStatus.ERROR:
            raise self.error
        return self.data
