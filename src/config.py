"""Unified configuration loaded from .showcase.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from showcase.content.models import ContentType

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".showcase.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "showcase" / "config.toml"


class StoreConfig(BaseModel):
    """[store] section."""

    path: str = "content.json"


class ListingConfig(BaseModel):
    """[listing] section.

    ``gates`` maps a content type to the fields that must be non-empty for
    an item of that type to be rendered at all::

        [listing.gates]
        slide = ["image"]
        employee = ["photo"]
        event = []
    """

    gates: dict[ContentType, list[str]] = Field(
        default_factory=lambda: {
            ContentType.SLIDE: ["image"],
            ContentType.EMPLOYEE: ["photo"],
        }
    )
    default_limit: int = Field(default=10, gt=0)


class ShowcaseConfig(BaseModel):
    """Top-level configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)

    @property
    def store_path(self) -> Path:
        return Path(self.store.path).expanduser()

    def gate_map(self) -> dict[ContentType, tuple[str, ...]]:
        """Gates in the shape ContentLister expects."""
        return {content_type: tuple(names) for content_type, names in self.listing.gates.items()}


def load_config(path: str | Path | None = None) -> ShowcaseConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .showcase.toml in CWD
    3. ~/.config/showcase/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged ShowcaseConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = ShowcaseConfig()
    if data:
        try:
            config = ShowcaseConfig.model_validate(data)
        except ValidationError as exc:
            logger.warning("Invalid configuration, using defaults: %s", exc)

    return _apply_env_vars(config)


def merge_cli_overrides(config: ShowcaseConfig, **cli_kwargs: object) -> ShowcaseConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "store_path": ("store", "path"),
        "default_limit": ("listing", "default_limit"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = str(value) if isinstance(value, Path) else value

    return ShowcaseConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: ShowcaseConfig) -> ShowcaseConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    store_path = os.environ.get("SHOWCASE_STORE_PATH")
    if store_path is not None:
        data["store"]["path"] = store_path

    limit_raw = os.environ.get("SHOWCASE_DEFAULT_LIMIT")
    if limit_raw is not None:
        try:
            data["listing"]["default_limit"] = int(limit_raw)
        except ValueError:
            logger.warning("Ignoring non-integer SHOWCASE_DEFAULT_LIMIT=%r", limit_raw)

    gates_raw = os.environ.get("SHOWCASE_GATES")
    if gates_raw is not None:
        data["listing"]["gates"] = _parse_gates(gates_raw)

    try:
        return ShowcaseConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Ignoring invalid environment overrides: %s", exc)
        return config


def _parse_gates(raw: str) -> dict[str, list[str]]:
    """Parse ``slide=image;employee=photo,email`` into a gate mapping."""
    gates: dict[str, list[str]] = {}
    for part in raw.split(";"):
        if not part.strip():
            continue
        content_type, _, names = part.partition("=")
        gates[content_type.strip()] = [n.strip() for n in names.split(",") if n.strip()]
    return gates
