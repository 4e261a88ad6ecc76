# BE/insight_core/config.py
"""
config.py
─────────
Central configuration layer:
• Loads static settings (`data/settings.yml`): chart sizing, lookback windows,
  provider endpoints, LLM models, Auth0 options
• Exposes them as frozen dataclasses so alternate chart sizes are testable
• Centralizes environment/API key access (MarketStack, FMP, OpenAI, Groq, Auth0)

`INSIGHT_SETTINGS` may point at another YAML file with the same schema;
any block missing from the file keeps its built-in default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import os

from .utils.io import read_yaml


# ────────────────────────────────────────────────────────────
# Paths
# ────────────────────────────────────────────────────────────
@lru_cache(maxsize=1)
def _data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"


def settings_path() -> Path:
    override = os.getenv("INSIGHT_SETTINGS")
    if override:
        return Path(override)
    return _data_dir() / "settings.yml"


# ────────────────────────────────────────────────────────────
# Settings models
# ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ChartConfig:
    """Fixed-size text grid geometry plus the rendering thresholds."""
    width: int = 80
    height: int = 20
    price_margin: int = 10
    time_margin: int = 2
    max_points: int = 24
    h_grid_every: int = 4
    v_grid_every: int = 10
    interpolation_step: float = 0.25
    flat_slope_threshold: float = 0.1
    label_count: int = 6

    def __post_init__(self) -> None:
        if self.width <= self.price_margin:
            raise ValueError(f"chart width ({self.width}) must exceed price margin ({self.price_margin})")
        if self.height - self.time_margin < 2:
            raise ValueError("chart needs at least 2 plot rows")
        if self.price_margin < 0 or self.time_margin < 0:
            raise ValueError("margins must be non-negative")
        for name in ("max_points", "h_grid_every", "v_grid_every", "label_count"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1")
        if self.interpolation_step <= 0:
            raise ValueError("interpolation_step must be positive")

    @property
    def plot_height(self) -> int:
        return self.height - self.time_margin

    @property
    def plot_width(self) -> int:
        return self.width - self.price_margin


@dataclass(frozen=True)
class LookbackWindow:
    label: str
    hours_ago: int

    def __post_init__(self) -> None:
        if self.hours_ago < 0:
            raise ValueError(f"hours_ago must be >= 0 (got {self.hours_ago} for {self.label!r})")


DEFAULT_WINDOWS: Tuple[LookbackWindow, ...] = (
    LookbackWindow("1 hour", 1),
    LookbackWindow("4 hours", 4),
    LookbackWindow("8 hours", 8),
    LookbackWindow("24 hours", 24),
    LookbackWindow("1 week", 24 * 7),
    LookbackWindow("1 month", 24 * 30),
    LookbackWindow("3 months", 24 * 90),
)


@dataclass(frozen=True)
class ProviderSettings:
    marketstack_url: str = "http://api.marketstack.com/v1"
    history_days: int = 30
    fmp_url: str = "https://financialmodelingprep.com/api/v3"
    request_timeout: float = 20.0


@dataclass(frozen=True)
class LLMSettings:
    openai_model: str = "gpt-3.5-turbo"
    groq_model: str = "llama-3.3-70b-versatile"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    temperature: float = 0.7
    max_tokens: int = 4096


@dataclass(frozen=True)
class Auth0Settings:
    domain: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    scope: str = "openid profile email"
    default_expiry_secs: int = 86400

    @property
    def configured(self) -> bool:
        return bool(self.domain and self.client_id and self.client_secret)


@dataclass(frozen=True)
class AppSettings:
    chart: ChartConfig = field(default_factory=ChartConfig)
    windows: Tuple[LookbackWindow, ...] = DEFAULT_WINDOWS
    providers: ProviderSettings = field(default_factory=ProviderSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)
    auth0: Auth0Settings = field(default_factory=Auth0Settings)


# ────────────────────────────────────────────────────────────
# Parsing
# ────────────────────────────────────────────────────────────
def _known(cls, block: Any) -> Dict[str, Any]:
    """Keep only keys the dataclass declares; ignore anything else in YAML."""
    if not isinstance(block, dict):
        return {}
    names = set(cls.__dataclass_fields__)
    return {k: v for k, v in block.items() if k in names}


def _parse_windows(raw: Any) -> Tuple[LookbackWindow, ...]:
    if not raw:
        return DEFAULT_WINDOWS
    out = []
    for item in raw:
        if isinstance(item, dict):
            out.append(LookbackWindow(str(item["label"]), int(item["hours_ago"])))
        else:
            label, hours = item
            out.append(LookbackWindow(str(label), int(hours)))
    return tuple(out)


def parse_settings(data: Dict[str, Any], env: Optional[Dict[str, str]] = None) -> AppSettings:
    """Build AppSettings from a YAML mapping plus Auth0 credentials from env."""
    env = os.environ if env is None else env
    auth_block = _known(Auth0Settings, data.get("auth0"))
    auth_block.update(
        domain=env.get("AUTH0_DOMAIN") or auth_block.get("domain"),
        client_id=env.get("AUTH0_CLIENT_ID"),
        client_secret=env.get("AUTH0_CLIENT_SECRET"),
    )
    return AppSettings(
        chart=ChartConfig(**_known(ChartConfig, data.get("chart"))),
        windows=_parse_windows(data.get("lookback_windows")),
        providers=ProviderSettings(**_known(ProviderSettings, data.get("providers"))),
        llm=LLMSettings(**_known(LLMSettings, data.get("llm"))),
        auth0=Auth0Settings(**auth_block),
    )


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    """Load settings.yml once per process (call `load_settings.cache_clear()` to reload)."""
    return parse_settings(read_yaml(settings_path()))


# ────────────────────────────────────────────────────────────
# Environment and API key management
# ────────────────────────────────────────────────────────────
def load_api_keys() -> Dict[str, Optional[str]]:
    """Load API keys from environment variables."""
    return {
        "MARKETSTACK_API_KEY": os.getenv("MARKETSTACK_API_KEY"),
        "FMP_API_KEY": os.getenv("FMP_API_KEY"),
        "OPENAI_API_KEY": os.getenv("OPENAI_API_KEY"),
        "GROQ_API_KEY": os.getenv("GROQ_API_KEY"),
    }


def get_api_key(service: str) -> Optional[str]:
    """Get a specific API key, e.g. get_api_key("fmp")."""
    keys = load_api_keys()
    return keys.get(f"{service.upper()}_API_KEY")


def validate_api_keys() -> Dict[str, bool]:
    """Map of service name → key present (non-blank)."""
    return {name.replace("_API_KEY", ""): bool(v and v.strip()) for name, v in load_api_keys().items()}
