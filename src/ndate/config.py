import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


DEFAULT_UTC_OFFSET = 8
DEFAULT_FORMAT = "%Y-%m-%d %H:%M"
DEFAULT_MAX_LUNAR_SEARCH = 50

ENV_UTC_OFFSET = "NDATE_UTC_OFFSET"
ENV_FORMAT = "NDATE_FORMAT"
ENV_MAX_LUNAR_SEARCH = "NDATE_MAX_LUNAR_SEARCH"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by every resolution made through one resolver."""
    lunar: bool = False
    infer_next: bool = True
    default_format: str = DEFAULT_FORMAT
    utc_offset_hours: int = DEFAULT_UTC_OFFSET
    max_lunar_search_years: int = DEFAULT_MAX_LUNAR_SEARCH

    def __post_init__(self):
        if not -23 <= self.utc_offset_hours <= 23:
            raise ValueError(f"utc_offset_hours must be within ±23, got {self.utc_offset_hours}")
        if self.max_lunar_search_years < 1:
            raise ValueError("max_lunar_search_years must be at least 1")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, **overrides) -> "ResolverConfig":
        env = os.environ if env is None else env
        cfg = cls(
            default_format=env.get(ENV_FORMAT) or DEFAULT_FORMAT,
            utc_offset_hours=_env_int(env, ENV_UTC_OFFSET, DEFAULT_UTC_OFFSET),
            max_lunar_search_years=_env_int(env, ENV_MAX_LUNAR_SEARCH, DEFAULT_MAX_LUNAR_SEARCH),
        )
        return replace(cfg, **overrides) if overrides else cfg
