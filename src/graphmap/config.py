"""
Configuration for the graphmap mapping layer.

Defines MappingSettings, a frozen dataclass carrying process-wide defaults for
index annotations and logging. Defaults are sourced from graphmap.core.constants.

Source of truth
- graphmap.core.constants.DEFAULT_LEVEL, DEFAULT_INDEX_TYPE
- Enum parsing via graphmap.core.grammar helpers

Notes
- Precedence: environment > TOML > defaults.
- Invalid values are ignored with a warning; the previous value is kept.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from graphmap.core.constants import DEFAULT_INDEX_TYPE, DEFAULT_LEVEL
from graphmap.core.errors import GrammarError
from graphmap.core.grammar import IndexType, Level, index_type_from_value, level_from_value

__all__ = ["MappingSettings"]

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class MappingSettings:
    """
    Runtime settings for graphmap.

    Attributes:
        default_level (Level): Level applied to Indexed markers that leave it unset.
        default_index_type (IndexType): Index type applied to Indexed markers that
            leave it unset.
        log_level (str): Level name for graphmap.logs.configure_logging.

    Examples:
        >>> from graphmap.config import MappingSettings
        >>> MappingSettings().default_level.value
        'class'
    """

    default_level: Level = DEFAULT_LEVEL
    default_index_type: IndexType = DEFAULT_INDEX_TYPE
    log_level: str = "WARNING"

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: MappingSettings, cfg: dict[str, Any] | None) -> MappingSettings:
        """Apply a loose config mapping onto MappingSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "default_level" in cfg:
            try:
                s = replace(s, default_level=level_from_value(cfg["default_level"]))
            except GrammarError as exc:
                logger.warning("Ignoring default_level: %s", exc)

        if "default_index_type" in cfg:
            try:
                s = replace(s, default_index_type=index_type_from_value(cfg["default_index_type"]))
            except GrammarError as exc:
                logger.warning("Ignoring default_index_type: %s", exc)

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            lvl = cfg["log_level"].strip().upper()
            if lvl in _LOG_LEVELS:
                s = replace(s, log_level=lvl)
            else:
                logger.warning("Ignoring log_level %r", cfg["log_level"])

        return s

    @classmethod
    def from_env(cls, base: MappingSettings | None = None, prefix: str = "GRAPHMAP_") -> MappingSettings:
        """
        Build MappingSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - GRAPHMAP_DEFAULT_LEVEL ("class" | "instance" | "global")
            - GRAPHMAP_DEFAULT_INDEX_TYPE ("legacy" | "fulltext" | "point" | "label_based")
            - GRAPHMAP_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in ("default_level", "default_index_type", "log_level"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> MappingSettings:
        """
        Build MappingSettings from a TOML file.

        Search order when `path` is None:
            1) ./graphmap.toml (with either a [mapping] table or top-level keys)
            2) ./pyproject.toml under [tool.graphmap]

        Returns defaults if no file is present.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "graphmap.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                logger.warning("Skipping unreadable config %s: %s", p, exc)
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("graphmap") if isinstance(tool, dict) else None
            elif isinstance(data.get("mapping"), dict):
                cfg = data["mapping"]
            else:
                cfg = data
            if cfg:
                logger.debug("Loaded mapping settings from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> MappingSettings:
        """
        Load MappingSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search graphmap.toml, pyproject.toml.
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)
