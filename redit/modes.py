"""Editing modes and the key dispatch for each of them.

Every mode is a handler class with its own key registry and a
`handle_key(editor, event) -> Transition` contract. Adding a mode means adding
a handler, not growing a shared dispatch function.
"""

import logging
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class Mode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    VISUAL = "VISUAL"
    DIRED = "DIRED"


@dataclass(frozen=True)
class Transition:
    """Outcome of handling one key: the next mode (None to stay) and whether
    the document changed."""

    to: Optional[Mode] = None
    modified: bool = False


STAY = Transition()


class ModeHandler(ABC):
    mode: Mode

    def __init__(self):
        from .commands import CommandRegistry
        self.registry = CommandRegistry()
        self._setup_commands()

    def _setup_commands(self):
        """Register this mode's key bindings."""

    def handle_key(self, editor: 'Editor', key_event: 'KeyEvent') -> Transition:
        command = self.registry.get_command(key_event.key_type, key_event.value)
        if command is not None:
            return command.execute(editor, key_event)
        return self.unbound_key(editor, key_event)

    def unbound_key(self, editor: 'Editor', key_event: 'KeyEvent') -> Transition:
        return STAY

    def on_enter(self, editor: 'Editor', previous: Mode):
        pass

    def on_exit(self, editor: 'Editor', next_mode: Mode):
        pass


class NormalMode(ModeHandler):
    mode = Mode.NORMAL

    def _setup_commands(self):
        from . import commands as cmd
        from .clipboard import PastePosition
        from .keyboard import KeyType

        r = self.registry
        cmd.register_movement(r)

        # Entering Insert mode
        r.register((KeyType.REGULAR, 'i'), cmd.EnterModeCommand(Mode.INSERT))
        r.register((KeyType.REGULAR, 'a'), cmd.EnterModeCommand(
            Mode.INSERT, lambda editor: editor.buffer.move_right()))
        r.register((KeyType.REGULAR, 'A'), cmd.EnterModeCommand(
            Mode.INSERT, lambda editor: editor.buffer.move_line_end()))
        r.register((KeyType.REGULAR, 'I'), cmd.EnterModeCommand(
            Mode.INSERT, lambda editor: editor.buffer.move_first_non_blank()))
        r.register((KeyType.REGULAR, 'o'), cmd.OpenLineCommand(above=False))
        r.register((KeyType.REGULAR, 'O'), cmd.OpenLineCommand(above=True))
        r.register((KeyType.REGULAR, 'v'), cmd.EnterModeCommand(Mode.VISUAL))

        # Editing
        r.register((KeyType.REGULAR, 'x'), cmd.DeleteCharCommand())
        r.register((KeyType.SPECIAL, 'delete'), cmd.DeleteCharCommand())
        r.register((KeyType.REGULAR, 'J'), cmd.JoinLineCommand())
        r.register((KeyType.SPECIAL, 'tab'), cmd.IndentLineCommand())
        r.register((KeyType.SPECIAL, 'enter'), cmd.SplitLineCommand())
        r.register((KeyType.CTRL, 'k'), cmd.KillLineCommand())
        r.register((KeyType.REGULAR, 'Y'), cmd.YankLineCommand())
        r.register((KeyType.REGULAR, 'p'), cmd.PasteCommand(PastePosition.AFTER))
        r.register((KeyType.REGULAR, 'P'), cmd.PasteCommand(PastePosition.BEFORE))

        # History
        r.register((KeyType.REGULAR, 'u'), cmd.UndoCommand())
        r.register((KeyType.CTRL, 'r'), cmd.RedoCommand())

        # Search and jumps
        r.register((KeyType.REGULAR, '/'), cmd.PromptCommand('search_forward'))
        r.register((KeyType.REGULAR, '?'), cmd.PromptCommand('search_backward'))
        r.register((KeyType.REGULAR, 'n'), cmd.SearchRepeatCommand(forward=True))
        r.register((KeyType.REGULAR, 'N'), cmd.SearchRepeatCommand(forward=False))
        r.register((KeyType.SPECIAL, 'escape'), cmd.ClearSearchCommand())
        r.register((KeyType.REGULAR, 'g'), cmd.PromptCommand('goto_line'))

        # Files, hooks and prompts
        r.register((KeyType.REGULAR, 's'), cmd.SaveCommand())
        r.register((KeyType.CTRL, 's'), cmd.SaveCommand())
        r.register((KeyType.REGULAR, 'q'), cmd.QuitCommand())
        r.register((KeyType.REGULAR, 'd'), cmd.DiredCommand())
        r.register((KeyType.REGULAR, 'f'), cmd.FinderCommand())
        r.register((KeyType.REGULAR, ':'), cmd.PromptCommand('command'))
        r.register((KeyType.REGULAR, ';'), cmd.PromptCommand('eval'))
        r.register((KeyType.CTRL, 't'), cmd.PromptCommand('theme'))


class InsertMode(ModeHandler):
    mode = Mode.INSERT

    def _setup_commands(self):
        from . import commands as cmd
        from .keyboard import KeyType

        r = self.registry
        cmd.register_arrows(r)
        r.register((KeyType.SPECIAL, 'backspace'), cmd.BackspaceCommand())
        r.register((KeyType.SPECIAL, 'delete'), cmd.DeleteCharCommand())
        r.register((KeyType.SPECIAL, 'enter'), cmd.SplitLineCommand())
        r.register((KeyType.SPECIAL, 'tab'), cmd.IndentLineCommand())
        r.register((KeyType.CTRL, 'k'), cmd.KillLineCommand())
        r.register((KeyType.SPECIAL, 'escape'), cmd.CancelCommand())
        self._insert = cmd.InsertCharCommand()

    def unbound_key(self, editor, key_event):
        if key_event.is_printable:
            return self._insert.execute(editor, key_event)
        return STAY

    def on_enter(self, editor, previous):
        editor.history.sync_cursor()

    def on_exit(self, editor, next_mode):
        # Everything typed since entering Insert mode is one change
        editor.history.snapshot()


class VisualMode(ModeHandler):
    mode = Mode.VISUAL

    def _setup_commands(self):
        from . import commands as cmd
        from .keyboard import KeyType

        r = self.registry
        cmd.register_movement(r)
        r.register((KeyType.REGULAR, 'y'), cmd.CopySelectionCommand())
        r.register((KeyType.REGULAR, 'd'), cmd.DeleteSelectionCommand())
        r.register((KeyType.REGULAR, 'x'), cmd.DeleteSelectionCommand())
        r.register((KeyType.SPECIAL, 'escape'), cmd.CancelCommand())
        r.register((KeyType.REGULAR, 'v'), cmd.CancelCommand())

    def handle_key(self, editor, key_event):
        transition = super().handle_key(editor, key_event)
        if transition.to is None and editor.selection is not None:
            editor.selection.update(editor.buffer.cursor)
        return transition

    def on_enter(self, editor, previous):
        from .selection import Selection
        editor.selection = Selection.at(editor.buffer.cursor)

    def on_exit(self, editor, next_mode):
        editor.selection = None


class DiredMode(ModeHandler):
    """Editing is suspended; keys go to the external directory browser."""

    mode = Mode.DIRED

    def handle_key(self, editor, key_event):
        browser = editor.directory_browser
        if browser is None:
            return Transition(to=Mode.NORMAL)
        outcome = browser.handle_key(key_event)
        if outcome is None:
            return STAY
        if outcome.path is None:
            return Transition(to=Mode.NORMAL)
        editor.open(outcome.path)
        return STAY


def build_mode_handlers() -> dict[Mode, ModeHandler]:
    handlers = (NormalMode(), InsertMode(), VisualMode(), DiredMode())
    return {handler.mode: handler for handler in handlers}
