"""Configuration loader for calloutsync.toml."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "calloutsync.toml"


@dataclass
class SectionConfig:
    """How sections are delimited."""
    heading_marker: str = "#"


@dataclass
class CorrelateConfig:
    """Rendered-to-text matching."""
    fuzzy: bool = True


@dataclass
class CommandsConfig:
    """Defaults for palette commands run from the CLI."""
    view: str = "source"


@dataclass
class LogConfig:
    level: str = "WARNING"


@dataclass
class CalloutConfig:
    """Complete calloutsync configuration."""
    section: SectionConfig = field(default_factory=SectionConfig)
    correlate: CorrelateConfig = field(default_factory=CorrelateConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)
    log: LogConfig = field(default_factory=LogConfig)
    source: Path | None = None


def load_config(config_path: Path | None = None, document_path: Path | None = None) -> CalloutConfig:
    """
    Load configuration from calloutsync.toml.
    
    Search order:
    1. config_path (if provided)
    2. cwd/calloutsync.toml
    3. calloutsync.toml next to document_path
    
    Args:
        config_path: Explicit path to config file
        document_path: Document being operated on, for the fallback search
    
    Returns:
        CalloutConfig with defaults filled in
    """
    toml_data: dict[str, Any] = {}
    source = None
    
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if document_path:
        search_paths.append(document_path.parent / CONFIG_NAME)
    
    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            source = path
            break
    
    section_data = toml_data.get("section", {})
    section_config = SectionConfig(
        heading_marker=section_data.get("heading_marker", "#"),
    )
    
    correlate_data = toml_data.get("correlate", {})
    correlate_config = CorrelateConfig(
        fuzzy=correlate_data.get("fuzzy", True),
    )
    
    commands_data = toml_data.get("commands", {})
    view = commands_data.get("view", "source")
    if view not in ("source", "preview"):
        raise ValueError(f"Unknown view mode in {source}: {view}")
    commands_config = CommandsConfig(view=view)
    
    log_data = toml_data.get("log", {})
    level = str(log_data.get("level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level in {source}: {level}")
    log_config = LogConfig(level=level)
    
    return CalloutConfig(
        section=section_config,
        correlate=correlate_config,
        commands=commands_config,
        log=log_config,
        source=source,
    )
