"""Application configuration.

Everything that selects or tunes a backend is resolved once, at process
start, into an immutable ``ForumSettings`` value. The value is handed to
``create_repository`` / ``create_app``; nothing reads the environment after
that, so switching between the fixture store and the remote API requires a
restart.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Mapping, Optional

# ------------------------------- Site ------------------------------------ #
SITE_NAME: Final[str] = "Waterloo Star"
SITE_DESCRIPTION: Final[str] = (
    "Waterloo Star is a platform for students to find and share housing requests and sublets."
)
SIDEBAR_SECTIONS: Final[list[dict]] = [
    {
        "title": "Housing",
        "items": [
            {
                "label": "Housing Requests",
                "href": "/housing-request",
                "description": "Find and share housing requests",
            },
            {
                "label": "Sublets",
                "href": "/sublet",
                "description": "Find and share sublets",
            },
        ],
    },
]

# ----------------------------- Defaults ---------------------------------- #
DEFAULT_API_BASE_URL: Final[str] = "http://localhost:3001"
DEFAULT_REQUEST_TIMEOUT: Final[float] = 10.0
DEFAULT_MOCK_MIN_DELAY: Final[float] = 0.5   # seconds
DEFAULT_MOCK_MAX_DELAY: Final[float] = 1.0   # seconds
DEFAULT_MOCK_AUTHOR_ID: Final[str] = "user-1"
DEFAULT_AUTH_COOKIE_NAME: Final[str] = "auth-token"


@dataclass(frozen=True)
class ForumSettings:
    use_mocks: bool = False
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    mock_min_delay: float = DEFAULT_MOCK_MIN_DELAY
    mock_max_delay: float = DEFAULT_MOCK_MAX_DELAY
    mock_failure_rate: float = 0.0
    mock_author_id: str = DEFAULT_MOCK_AUTHOR_ID
    random_seed: Optional[int] = None
    auth_cookie_name: str = DEFAULT_AUTH_COOKIE_NAME
    log_level: str = "INFO"
    log_file: Optional[str] = None
    cors_origins: tuple[str, ...] = ("*",)

    def __post_init__(self) -> None:
        if self.mock_min_delay < 0 or self.mock_max_delay < 0:
            raise ValueError("Mock delays must be non-negative")
        if self.mock_min_delay > self.mock_max_delay:
            raise ValueError(
                f"mock_min_delay ({self.mock_min_delay}) must not exceed mock_max_delay ({self.mock_max_delay})"
            )
        if not 0.0 <= self.mock_failure_rate <= 1.0:
            raise ValueError("mock_failure_rate must be within [0, 1]")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        # Normalise so path joins never produce '//'
        object.__setattr__(self, "api_base_url", self.api_base_url.rstrip("/"))

    @property
    def backend_name(self) -> str:
        return "fixtures" if self.use_mocks else "remote"


def _float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ForumSettings:
    """Build settings from environment variables (``os.environ`` by default)."""
    env = os.environ if environ is None else environ

    seed_raw = env.get("MOCK_RANDOM_SEED", "").strip()
    cors_raw = env.get("CORS_ORIGINS", "*")

    return ForumSettings(
        use_mocks=env.get("USE_MOCKS") == "true",
        api_base_url=env.get("API_URL") or DEFAULT_API_BASE_URL,
        request_timeout=_float(env, "API_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        mock_min_delay=_float(env, "MOCK_MIN_DELAY", DEFAULT_MOCK_MIN_DELAY),
        mock_max_delay=_float(env, "MOCK_MAX_DELAY", DEFAULT_MOCK_MAX_DELAY),
        mock_failure_rate=_float(env, "MOCK_FAILURE_RATE", 0.0),
        mock_author_id=env.get("MOCK_AUTHOR_ID") or DEFAULT_MOCK_AUTHOR_ID,
        random_seed=int(seed_raw) if seed_raw else None,
        auth_cookie_name=env.get("AUTH_COOKIE_NAME") or DEFAULT_AUTH_COOKIE_NAME,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        log_file=env.get("LOG_FILE") or None,
        cors_origins=tuple(o.strip() for o in cors_raw.split(",") if o.strip()) or ("*",),
    )


__all__ = [
    "SITE_NAME",
    "SITE_DESCRIPTION",
    "SIDEBAR_SECTIONS",
    "ForumSettings",
    "load_settings",
]
