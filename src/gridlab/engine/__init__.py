from .lab import GridLab, LabConfig

__all__ = ["GridLab", "LabConfig"]
