from typing import Optional


class DateResolutionError(ValueError):
    """Base class for every failure raised while resolving a date phrase."""

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{msg} (input: {self.text!r})" if self.text is not None else msg


class FormatError(DateResolutionError):
    """Neither grammar recognises the input."""


class InvalidCalendarDate(DateResolutionError):
    """The Gregorian year/month/day combination does not exist."""


class InvalidLunarDate(DateResolutionError):
    """The lunisolar year/month/leap/day combination was rejected."""


class InvalidTimeComponent(DateResolutionError):
    """Hour or minute outside 0-23 / 0-59."""


class ArithmeticOverflow(DateResolutionError):
    """A day delta or year increment left the representable date range."""


class UnresolvedNextOccurrence(DateResolutionError):
    """The lunar next-occurrence search ran past its iteration bound."""
