"""Base candle provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from ..types import Candle


class CandleProvider(ABC):
    """Abstract base for all candle providers.

    A CandleProvider yields daily Candle objects in date order.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Candle]:
        """Yield candles in chronological order."""
        ...

    @abstractmethod
    def symbol(self) -> str:
        """Return the symbol this provider serves."""
        ...

    def reset(self) -> None:
        """Reset provider to beginning. Override if stateful."""
        pass
