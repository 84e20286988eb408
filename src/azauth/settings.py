from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .domain.constants import DEFAULT_USER_AGENT


@dataclass(slots=True)
class AzAuthSettings:
    """
    Connection settings for an AzAuth-enabled website.

    Host code decides how to construct this (env, config file, etc.).
    """
    url: str
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True

    # seconds; None keeps the HTTP client's own default
    timeout: Optional[float] = None

    @property
    def base_url(self) -> str:
        return self.url.strip().removesuffix("/")
