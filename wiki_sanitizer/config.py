"""Engine options read from the environment."""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class SanitizerSettings:
    """Options passed to the sanitizer engine alongside the policy."""

    strip: bool = True
    strip_comments: bool = True


def get_settings() -> SanitizerSettings:
    """Read settings, allowing override for tests."""
    return SanitizerSettings(
        strip=_env_flag("WIKI_SANITIZER_STRIP", True),
        strip_comments=_env_flag("WIKI_SANITIZER_STRIP_COMMENTS", True),
    )
