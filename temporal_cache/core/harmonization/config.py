from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import ConfigurationDisabled, InvalidConfiguration


SECONDS_PER_DAY = 86400

DEFAULT_SLOTS: Tuple[str, ...] = ("00:00", "06:00", "12:00", "18:00")
DEFAULT_TOLERANCE_SECONDS = 3600


def parse_slot(value: str) -> int:
    """Convert ``"HH:MM"`` (or ``"HH:MM:SS"``) into seconds since midnight."""
    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3):
        raise InvalidConfiguration(f"invalid slot {value!r}: expected HH:MM")
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        raise InvalidConfiguration(f"invalid slot {value!r}: expected HH:MM") from None

    hours, minutes = numbers[0], numbers[1]
    seconds = numbers[2] if len(numbers) == 3 else 0
    if not (0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60):
        raise InvalidConfiguration(f"invalid slot {value!r}: out of range")
    return hours * 3600 + minutes * 60 + seconds


def format_slot(offset: int) -> str:
    hours, rest = divmod(int(offset), 3600)
    return f"{hours:02d}:{rest // 60:02d}"


@dataclass(frozen=True)
class HarmonizationConfig:
    enabled: bool = False
    slots: Tuple[int, ...] = tuple(parse_slot(s) for s in DEFAULT_SLOTS)
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS

    @classmethod
    def from_slot_strings(
        cls,
        slots: Iterable[str],
        *,
        enabled: bool = True,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    ) -> "HarmonizationConfig":
        return cls(
            enabled=enabled,
            slots=tuple(parse_slot(s) for s in slots if str(s).strip()),
            tolerance_seconds=tolerance_seconds,
        )

    def require_usable(self) -> None:
        """Raise unless harmonization may run with this configuration."""
        if not self.enabled:
            raise ConfigurationDisabled()
        if not self.slots:
            raise InvalidConfiguration("no harmonization slots configured")
        if self.tolerance_seconds < 0:
            raise InvalidConfiguration(f"tolerance must be >= 0, got {self.tolerance_seconds}")

        previous = -1
        for slot in self.slots:
            if not (0 <= slot < SECONDS_PER_DAY):
                raise InvalidConfiguration(f"slot offset {slot} outside one day")
            if slot <= previous:
                raise InvalidConfiguration("slots must be strictly increasing")
            previous = slot

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "slots": [format_slot(s) for s in self.slots],
            "tolerance_seconds": self.tolerance_seconds,
        }
