from .metrics import PerformanceMetrics, calculate_performance_metrics
from .export import build_export, default_export_filename, export_state, load_export
from .formatting import format_currency, format_number, format_percentage, price_color_class

__all__ = [
    "PerformanceMetrics",
    "calculate_performance_metrics",
    "build_export",
    "default_export_filename",
    "export_state",
    "load_export",
    "format_currency",
    "format_number",
    "format_percentage",
    "price_color_class",
]
