"""Interfaces for the directory browser and fuzzy finder.

Both live outside the editing core. The editor hands them keys while they
are active and acts on the result they commit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .keyboard import KeyEvent


@dataclass(frozen=True)
class BrowserOutcome:
    """A chosen file path, or None when the user backed out."""
    path: Optional[str]


@dataclass(frozen=True)
class FinderResult:
    kind: str  # 'file', 'command' or 'cancel'
    value: Optional[str] = None

    FILE = 'file'
    COMMAND = 'command'
    CANCEL = 'cancel'


class DirectoryBrowser(ABC):
    """Dired-style browser that takes over input while in Dired mode."""

    @abstractmethod
    def start(self, path: str, focus: Optional[str] = None) -> None:
        """Show `path`, highlighting the entry named `focus` if given."""

    @abstractmethod
    def handle_key(self, key_event: 'KeyEvent') -> Optional[BrowserOutcome]:
        """Process a key; return an outcome once the user chooses or cancels."""


class FuzzyFinder(ABC):
    """File finder / command palette overlay."""

    @abstractmethod
    def start(self, cwd: str, commands: list[str]) -> None:
        """Open the overlay rooted at `cwd`, offering the named commands."""

    @abstractmethod
    def handle_key(self, key_event: 'KeyEvent') -> Optional[FinderResult]:
        """Process a key; return a result once one is committed."""
