import logging
import re
from datetime import datetime
from typing import Callable, List, Optional

from ndate.config import ResolverConfig
from ndate.errors import DateResolutionError
from ndate.patterns import iter_date_matches, match_phrase
from ndate.types.date_types import DateMatch, DeltaMatch
from ndate.utils.date_utils import (
    fixed_offset,
    now_at_offset,
    resolve_date,
    resolve_delta,
    start_of_day,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# A strftime directive, so "%%Y" stays a literal
_DIRECTIVE = re.compile(r"%(.)")

# ───────────────────────────  Orchestrator  ──────────────────────────────


class DatePhraseResolver:
    """Phrase → datetime → text, with one "today" anchor per call."""

    def __init__(self, config: Optional[ResolverConfig] = None, clock: Optional[Clock] = None):
        self.config = config or ResolverConfig()
        self.tz = fixed_offset(self.config.utc_offset_hours)
        self.clock = clock or (lambda: now_at_offset(self.config.utc_offset_hours))

    def today(self) -> datetime:
        now = self.clock()
        now = now.replace(tzinfo=self.tz) if now.tzinfo is None else now.astimezone(self.tz)
        return start_of_day(now)

    def format(self, dt: datetime, fmt: Optional[str] = None) -> str:
        fmt = fmt or self.config.default_format
        # %Y is not zero-padded below year 1000 on every platform
        year = f"{dt.year:04d}"
        fmt = _DIRECTIVE.sub(lambda m: year if m.group(1) == "Y" else m.group(0), fmt)
        return dt.strftime(fmt)

    def _resolve_date(self, match: DateMatch, today: datetime) -> datetime:
        return resolve_date(
            match,
            today,
            lunar=self.config.lunar,
            infer_next=self.config.infer_next,
            max_lunar_search=self.config.max_lunar_search_years,
        )

    def resolve_datetime(self, text: str, today: Optional[datetime] = None) -> datetime:
        today = today or self.today()
        try:
            raw = match_phrase(text)
            if isinstance(raw, DeltaMatch):
                result = resolve_delta(raw, today)
            else:
                result = self._resolve_date(raw, today)
        except DateResolutionError as e:
            if e.text is None:
                e.text = text
            raise
        logger.debug("✅ resolve: %r → %s", text, result.isoformat())
        return result

    def resolve(self, text: str, fmt: Optional[str] = None) -> str:
        return self.format(self.resolve_datetime(text), fmt)

    def substitute(self, text: str, fmt: Optional[str] = None) -> str:
        """
        Replace every absolute/partial date phrase in `text` with its resolved
        form. All phrases share one "today"; the first failure aborts the whole
        call and nothing is returned.
        """
        today = self.today()
        resolved: List[tuple[DateMatch, str]] = []

        for match in iter_date_matches(text):
            phrase = text[match.span[0]:match.span[1]]
            try:
                dt = self._resolve_date(match, today)
            except DateResolutionError as e:
                if e.text is None:
                    e.text = phrase
                raise
            resolved.append((match, self.format(dt, fmt)))
            logger.debug("🔁 substitute: %r → %s", phrase, resolved[-1][1])

        if not resolved:
            logger.info("🔁 substitute: no date phrases found")
            return text

        parts: List[str] = []
        pos = 0
        for match, rendered in resolved:
            start, end = match.span
            parts.append(text[pos:start])
            parts.append(rendered)
            pos = end
        parts.append(text[pos:])

        logger.info("🔁 substitute: replaced %s phrase(s)", len(resolved))
        return "".join(parts)


# ───────────────────────────  Entry points  ──────────────────────────────


def _resolver(lunar: bool, infer_next: bool, clock: Optional[Clock]) -> DatePhraseResolver:
    return DatePhraseResolver(ResolverConfig.from_env(lunar=lunar, infer_next=infer_next), clock=clock)


def resolve_datetime(
    text: str,
    lunar: bool = False,
    infer_next: bool = True,
    *,
    clock: Optional[Clock] = None,
) -> datetime:
    return _resolver(lunar, infer_next, clock).resolve_datetime(text)


def resolve(
    text: str,
    lunar: bool = False,
    infer_next: bool = True,
    format: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
) -> str:
    """Resolve one date phrase and render it (default `%Y-%m-%d %H:%M`)."""
    return _resolver(lunar, infer_next, clock).resolve(text, format)


def substitute(
    text: str,
    lunar: bool = False,
    infer_next: bool = True,
    format: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
) -> str:
    """Resolve and replace every date phrase in free text."""
    return _resolver(lunar, infer_next, clock).substitute(text, format)


__all__ = [
    "DatePhraseResolver",
    "resolve",
    "resolve_datetime",
    "substitute",
]
