from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class DateMatch:
    """Raw fields of an absolute or partial date phrase, still as digit strings."""
    month: str
    day: str
    year: Optional[str] = None
    hour: Optional[str] = None
    minute: Optional[str] = None
    span: tuple[int, int] = (0, 0)

    @property
    def has_year(self) -> bool:
        return self.year is not None


@dataclass(frozen=True)
class DeltaMatch:
    """A signed day offset from today plus an optional clock time."""
    days: str
    hour: Optional[str] = None
    minute: Optional[str] = None


RawMatch = Union[DateMatch, DeltaMatch]


@dataclass(frozen=True)
class LunarCoordinate:
    year: int
    month: int
    is_leap: bool
    day: int

    def __str__(self) -> str:
        leap = "leap " if self.is_leap else ""
        return f"lunar {self.year}-{leap}{self.month:02d}-{self.day:02d}"
