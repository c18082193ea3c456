from .types import Candle, GridLevel, LevelSide, LevelStatus
from .seed import generate_seed_candles
from .validation import CandleValidator, DataIssue, validate_candles, validate_dataframe

__all__ = [
    "Candle", "GridLevel", "LevelSide", "LevelStatus",
    "generate_seed_candles",
    "CandleValidator", "DataIssue", "validate_candles", "validate_dataframe",
]
