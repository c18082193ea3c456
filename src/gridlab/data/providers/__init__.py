from .base import CandleProvider
from .csv import CSVProvider
from .memory import ListProvider, SeedProvider

__all__ = [
    "CandleProvider",
    "CSVProvider",
    "ListProvider",
    "SeedProvider",
]
