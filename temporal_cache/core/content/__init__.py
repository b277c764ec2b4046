from .filters import ContentFilter, filter_records, is_harmonizable
from .statistics import ContentStatistics, content_statistics

__all__ = [
    "ContentFilter",
    "filter_records",
    "is_harmonizable",
    "ContentStatistics",
    "content_statistics",
]
