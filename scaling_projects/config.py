"""
Scaling Projects Configuration - Input locations and error policy.

Defaults point at the chain and token lists bundled with the package.
Every setting can be overridden from the environment or a .env file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv


load_dotenv()

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CHAINS_PATH = DATA_DIR / "chains.json"
DEFAULT_TOKENS_PATH = DATA_DIR / "tokens.json"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_path(name: str, default: Path) -> Path:
    raw = (os.environ.get(name) or "").strip()
    return Path(raw) if raw else default


def _env_bool(name: str, default: bool) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


@dataclass
class NormalizerConfig:
    """Main configuration for the normalization pipeline."""

    chains_path: Path = field(
        default_factory=lambda: _env_path("SCALING_PROJECTS_CHAINS_PATH", DEFAULT_CHAINS_PATH)
    )
    tokens_path: Path = field(
        default_factory=lambda: _env_path("SCALING_PROJECTS_TOKENS_PATH", DEFAULT_TOKENS_PATH)
    )

    # Abort the whole batch on the first bad project
    fail_fast: bool = field(
        default_factory=lambda: _env_bool("SCALING_PROJECTS_FAIL_FAST", True)
    )

    log_level: str = field(
        default_factory=lambda: os.environ.get("SCALING_PROJECTS_LOG_LEVEL", "INFO").upper()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "chains_path": str(self.chains_path),
            "tokens_path": str(self.tokens_path),
            "fail_fast": self.fail_fast,
            "log_level": self.log_level,
        }


# Default configuration instance
_default_config: Optional[NormalizerConfig] = None


def get_config() -> NormalizerConfig:
    """Get the default configuration."""
    global _default_config
    if _default_config is None:
        _default_config = NormalizerConfig()
    return _default_config


def set_config(config: Optional[NormalizerConfig]) -> None:
    """Set (or reset with None) the default configuration."""
    global _default_config
    _default_config = config
