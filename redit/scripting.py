"""Embedded scripting: user code evaluated in a persistent namespace.

Settings are not bound to the namespace. After every evaluation the named
setting variables are read back out and applied one by one, so a script that
fails halfway still keeps whatever it set correctly before the failure.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import platformdirs

from .constants import EditorConstants
from .themes import THEMES

logger = logging.getLogger(__name__)


class ScriptError(Exception):
    """User code raised or failed to compile."""


@dataclass
class Settings:
    indent_width: int = EditorConstants.DEFAULT_INDENT_WIDTH
    electric_pairs: bool = True
    pairs: Dict[str, str] = field(default_factory=lambda: dict(EditorConstants.DEFAULT_PAIRS))
    scroll_top_margin: int = EditorConstants.DEFAULT_SCROLL_MARGIN
    scroll_bottom_margin: int = EditorConstants.DEFAULT_SCROLL_MARGIN
    show_line_numbers: bool = True
    show_fringe: bool = True
    insert_line_cursor: bool = False
    blink_cursor: bool = True
    system_clipboard: bool = False
    theme: str = EditorConstants.DEFAULT_THEME


def _is_pairs(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, str) and len(k) == 1 and len(v) == 1
        for k, v in value.items()
    )


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_count(low: int, high: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and low <= value <= high
    return check


VALIDATORS: Dict[str, Callable[[Any], bool]] = {
    'indent_width': _is_count(1, 16),
    'electric_pairs': _is_bool,
    'pairs': _is_pairs,
    'scroll_top_margin': _is_count(0, 50),
    'scroll_bottom_margin': _is_count(0, 50),
    'show_line_numbers': _is_bool,
    'show_fringe': _is_bool,
    'insert_line_cursor': _is_bool,
    'blink_cursor': _is_bool,
    'system_clipboard': _is_bool,
    'theme': lambda value: value in THEMES,
}


def init_script_path() -> Path:
    """Location of the user's init script in the platform config directory."""
    config_dir = Path(platformdirs.user_config_dir(EditorConstants.APP_NAME))
    return config_dir / EditorConstants.INIT_SCRIPT_NAME


class ScriptHost:
    """Runs user code and pulls settings back out of its globals."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.namespace: Dict[str, Any] = {'__name__': '__redit__'}
        for f in fields(Settings):
            self.namespace[f.name] = copy.deepcopy(getattr(self.settings, f.name))

    def evaluate(self, code: str, filename: str = '<eval>') -> list[str]:
        """Run `code`, then re-read every setting.

        Returns the names of settings whose new values were rejected. Raises
        ScriptError if the code itself failed; settings are refreshed first.
        """
        error: Optional[BaseException] = None
        try:
            exec(compile(code, filename, 'exec'), self.namespace)
        except Exception as e:
            # User code may raise anything
            error = e
        rejected = self.refresh()
        if error is not None:
            logger.warning(f"Script error in {filename}: {error!r}")
            raise ScriptError(f"{type(error).__name__}: {error}") from error
        return rejected

    def refresh(self) -> list[str]:
        """Apply each setting variable independently; return rejected names."""
        rejected = []
        for f in fields(Settings):
            name = f.name
            current = getattr(self.settings, name)
            value = self.namespace.get(name, current)
            if value == current:
                continue
            if VALIDATORS[name](value):
                setattr(self.settings, name, copy.deepcopy(value))
            else:
                logger.info(f"Rejected setting {name}={value!r}")
                rejected.append(name)
                self.namespace[name] = copy.deepcopy(current)
        return rejected

    def load_file(self, path: Path) -> Optional[list[str]]:
        """Evaluate a script file. Returns None if there is no such file."""
        try:
            code = path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ScriptError(f"Cannot read {path}: {e}") from e
        return self.evaluate(code, filename=str(path))

    def set(self, name: str, value: Any) -> None:
        """Change one setting from inside the editor (toggles, theme switch).

        The namespace is updated too, so the next refresh keeps the value.
        """
        if not VALIDATORS[name](value):
            raise ValueError(f"Invalid value for {name}: {value!r}")
        setattr(self.settings, name, copy.deepcopy(value))
        self.namespace[name] = copy.deepcopy(value)
