"""Configuration loader for handoff.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .render.theme import DEFAULT_LABEL, Theme

CONFIG_NAME = "handoff.toml"


@dataclass
class NotesConfig:
    """Where record files live."""
    root: Path


@dataclass
class RenderConfig:
    """Label text and per-role style overrides."""
    label: str = DEFAULT_LABEL
    styles: dict[str, dict[str, Any]] = field(default_factory=dict)

    def theme(self) -> Theme:
        return Theme.from_overrides(label=self.label, overrides=self.styles)


@dataclass
class UIConfig:
    """Terminal output configuration."""
    colors: bool = True


@dataclass
class ApiConfig:
    """Local API server defaults."""
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class HandoffConfig:
    """Complete handoffnotes configuration."""
    notes: NotesConfig
    render: RenderConfig
    ui: UIConfig
    api: ApiConfig


def load_config(config_path: Path | None = None, notes_path: Path | None = None) -> HandoffConfig:
    """
    Load configuration from handoff.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/handoff.toml
    3. notes_path/handoff.toml

    Args:
        config_path: Explicit path to config file
        notes_path: Notes directory for fallback search

    Returns:
        HandoffConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if notes_path:
        search_paths.append(notes_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    notes_data = toml_data.get("notes", {})
    notes_config = NotesConfig(
        root=Path(notes_data.get("root", notes_path or Path("./notes"))),
    )

    render_data = toml_data.get("render", {})
    render_config = RenderConfig(
        label=render_data.get("label", DEFAULT_LABEL),
        styles=render_data.get("styles", {}),
    )

    ui_data = toml_data.get("ui", {})
    ui_config = UIConfig(
        colors=ui_data.get("colors", True)
    )

    api_data = toml_data.get("api", {})
    api_config = ApiConfig(
        host=api_data.get("host", "127.0.0.1"),
        port=int(api_data.get("port", 8765)),
    )

    return HandoffConfig(
        notes=notes_config,
        render=render_config,
        ui=ui_config,
        api=api_config,
    )
