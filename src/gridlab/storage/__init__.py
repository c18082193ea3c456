from .memory import MemStorage, StoredCandle, StoredConfig, StoredLevel

__all__ = ["MemStorage", "StoredCandle", "StoredConfig", "StoredLevel"]
