from .registry import MANDATORY_FIELDS, RegistrationError, TemporalMonitorRegistry
from .builder import TemporalRecordBuilder

__all__ = [
    "MANDATORY_FIELDS",
    "RegistrationError",
    "TemporalMonitorRegistry",
    "TemporalRecordBuilder",
]
