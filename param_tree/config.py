import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from param_tree.errors import ConfigError
from param_tree.serializers import FORMATS

TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    example_seed: Optional[int] = None
    strict: bool = False
    output_dir: str = "output"
    output_format: str = "json"
    log_level: str = "INFO"


def _parse_seed(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"PARAM_TREE_EXAMPLE_SEED must be an integer, got {raw!r}")


def _parse_format(raw: str) -> str:
    fmt = raw.strip().lower()
    if fmt not in FORMATS:
        raise ConfigError(f"PARAM_TREE_OUTPUT_FORMAT must be one of {', '.join(FORMATS)}, got {raw!r}")
    return fmt


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"PARAM_TREE_LOG_LEVEL is not a logging level: {raw!r}")
    return level


def load_settings() -> Settings:
    """Reads settings from the environment, after loading a .env file if present."""
    load_dotenv()

    return Settings(
        example_seed=_parse_seed(os.getenv("PARAM_TREE_EXAMPLE_SEED")),
        strict=os.getenv("PARAM_TREE_STRICT", "").strip().lower() in TRUTHY,
        output_dir=os.getenv("PARAM_TREE_OUTPUT_DIR", "output"),
        output_format=_parse_format(os.getenv("PARAM_TREE_OUTPUT_FORMAT", "json")),
        log_level=_parse_log_level(os.getenv("PARAM_TREE_LOG_LEVEL", "INFO")),
    )
