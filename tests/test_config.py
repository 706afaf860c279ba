"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

from handoffnotes.config import load_config
from handoffnotes.render.theme import DEFAULT_LABEL


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        cwd = os.getcwd()
        os.chdir(tmpdir)
        try:
            config = load_config()
        finally:
            os.chdir(cwd)

    assert config.notes.root == Path("./notes")
    assert config.render.label == DEFAULT_LABEL
    assert config.render.styles == {}
    assert config.ui.colors is True
    assert config.api.host == "127.0.0.1"
    assert config.api.port == 8765


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "handoff.toml"
        config_path.write_text("""
[notes]
root = "ward-7"

[render]
label = "Night Shift"

[render.styles.code]
fontSize = "13px"

[ui]
colors = false

[api]
port = 9000
""")

        config = load_config(config_path=config_path)

        assert config.notes.root == Path("ward-7")
        assert config.render.label == "Night Shift"
        assert config.ui.colors is False
        assert config.api.port == 9000

        theme = config.render.theme()
        assert theme.label == "Night Shift"
        assert theme.style_for("code")["fontSize"] == "13px"
        assert theme.style_for("code")["fontFamily"].endswith("monospace")


def test_load_config_from_notes_dir():
    """Config next to the notes directory is found."""
    with tempfile.TemporaryDirectory() as tmpdir:
        notes = Path(tmpdir) / "notes"
        notes.mkdir()
        (notes / "handoff.toml").write_text('[render]\nlabel = "Ward 7"\n')

        cwd = os.getcwd()
        os.chdir(tmpdir)
        try:
            config = load_config(notes_path=notes)
        finally:
            os.chdir(cwd)

        assert config.render.label == "Ward 7"
        assert config.notes.root == notes


def test_explicit_path_wins():
    """An explicit config path is read before the notes directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        notes = Path(tmpdir) / "notes"
        notes.mkdir()
        (notes / "handoff.toml").write_text('[render]\nlabel = "From notes"\n')
        explicit = Path(tmpdir) / "explicit.toml"
        explicit.write_text('[render]\nlabel = "Explicit"\n')

        config = load_config(config_path=explicit, notes_path=notes)
        assert config.render.label == "Explicit"
