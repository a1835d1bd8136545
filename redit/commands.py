"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Tuple, Optional, TYPE_CHECKING

from .keyboard import KeyType
from .modes import Mode, Transition, STAY
from .clipboard import PastePosition
from .view import Viewport

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> Transition:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            Transition naming the next mode and whether the document changed
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> Transition:
        """Movement commands don't modify the document."""
        self._move(editor, key_event)
        return STAY

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.move_left()


class RightCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.move_right()


class UpCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.move_up()


class DownCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.move_down()


class LineStartCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.move_line_start()


class LineEndCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.move_line_end()


class FirstNonBlankCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.move_first_non_blank()


class NextWordCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.next_word()
        editor.viewport.adjust_to_cursor()


class PreviousWordCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.buffer.previous_word()
        editor.viewport.adjust_to_cursor()


class RecenterCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.recenter()


class EditCommand(EditorCommand):
    """Base class for editing commands.

    Outside Insert mode each edit is a complete change and is snapshotted
    right away; typing in Insert mode is snapshotted when the mode is left.
    """

    next_mode: Optional[Mode] = None
    scroll_mode: Optional[str] = None

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> Transition:
        """Editing commands modify the document."""
        if editor.mode is not Mode.INSERT:
            editor.history.sync_cursor()
        before = list(editor.buffer.lines)
        if self._edit(editor, key_event) is False or editor.buffer.lines == before:
            return STAY
        editor.viewport.adjust_to_cursor(self.scroll_mode)
        if editor.mode is not Mode.INSERT and self.next_mode is not Mode.INSERT:
            editor.history.snapshot()
        return Transition(to=self.next_mode, modified=True)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> Optional[bool]:
        """Perform the edit; return False when nothing changed."""
        pass


class InsertCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        if not key_event.is_printable:
            return False
        editor.buffer.insert_char(key_event.value)


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.delete_at_cursor()


class SplitLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.split_line_at_cursor()


class JoinLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        if editor.buffer.cursor.row + 1 >= editor.buffer.line_count:
            return False
        editor.buffer.join_next_line()


class IndentLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.indent_current_line()


class OpenLineCommand(EditCommand):
    next_mode = Mode.INSERT

    def __init__(self, above: bool = False):
        self.above = above

    def _edit(self, editor, key_event):
        editor.buffer.open_line(above=self.above)


class KillLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.kill_line()


class PasteCommand(EditCommand):
    scroll_mode = Viewport.ENOUGH

    def __init__(self, where: PastePosition):
        self.where = where

    def _edit(self, editor, key_event):
        return editor.paste(self.where)


class SystemCommand(EditorCommand):
    """Base class for commands that don't edit the document directly."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> Transition:
        self._execute_system(editor, key_event)
        return STAY

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class YankLineCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.yank_line()


class UndoCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.undo()


class RedoCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.redo()


class SearchRepeatCommand(SystemCommand):
    def __init__(self, forward: bool = True):
        self.forward = forward

    def _execute_system(self, editor, key_event):
        editor.repeat_search(forward=self.forward)


class ClearSearchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.search.clear()


class PromptCommand(SystemCommand):
    """Open a minibuffer prompt of the given kind."""

    def __init__(self, kind: str):
        self.kind = kind

    def _execute_system(self, editor, key_event):
        editor.start_prompt(self.kind)


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor._handle_save()


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class FinderCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.open_finder()


class EnterModeCommand(EditorCommand):
    """Switch modes, optionally moving the cursor first (e.g. `a`, `A`, `I`)."""

    def __init__(self, mode: Mode, prepare: Optional[Callable[['Editor'], None]] = None):
        self.mode = mode
        self.prepare = prepare

    def execute(self, editor, key_event):
        if self.prepare is not None:
            self.prepare(editor)
        return Transition(to=self.mode)


class DiredCommand(EditorCommand):
    def execute(self, editor, key_event):
        if editor.start_dired():
            return Transition(to=Mode.DIRED)
        return STAY


class CopySelectionCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.copy_selection()
        return Transition(to=Mode.NORMAL)


class DeleteSelectionCommand(EditorCommand):
    def execute(self, editor, key_event):
        if not editor.delete_selection():
            return Transition(to=Mode.NORMAL)
        return Transition(to=Mode.NORMAL, modified=True)


class CancelCommand(EditorCommand):
    """Leave the current mode for Normal without touching the document."""

    def execute(self, editor, key_event):
        return Transition(to=Mode.NORMAL)


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def __contains__(self, key: Tuple[KeyType, str]) -> bool:
        return key in self._commands


def register_movement(registry: CommandRegistry):
    """Cursor movement shared by Normal and Visual mode."""
    for key, command in (
        ('h', LeftCommand()), ('l', RightCommand()),
        ('k', UpCommand()), ('j', DownCommand()),
        ('0', LineStartCommand()), ('$', LineEndCommand()),
        ('^', FirstNonBlankCommand()),
        ('w', NextWordCommand()), ('b', PreviousWordCommand()),
        ('z', RecenterCommand()),
    ):
        registry.register((KeyType.REGULAR, key), command)
    register_arrows(registry)


def register_arrows(registry: CommandRegistry):
    registry.register((KeyType.SPECIAL, 'left'), LeftCommand())
    registry.register((KeyType.SPECIAL, 'right'), RightCommand())
    registry.register((KeyType.SPECIAL, 'up'), UpCommand())
    registry.register((KeyType.SPECIAL, 'down'), DownCommand())
    registry.register((KeyType.SPECIAL, 'home'), LineStartCommand())
    registry.register((KeyType.SPECIAL, 'end'), LineEndCommand())


class CommandPalette:
    """Named zero-argument commands reachable from the palette or finder."""

    def __init__(self):
        self._commands: Dict[str, Callable[['Editor'], None]] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register('save', lambda editor: editor._handle_save())
        self.register('quit', lambda editor: editor.request_quit())
        self.register('undo', lambda editor: editor.undo())
        self.register('redo', lambda editor: editor.redo())
        self.register('recenter', lambda editor: editor.viewport.recenter())
        self.register('clear-search', lambda editor: editor.search.clear())
        self.register('toggle-line-numbers', lambda editor: editor.toggle_setting('show_line_numbers'))
        self.register('toggle-fringe', lambda editor: editor.toggle_setting('show_fringe'))
        self.register('next-theme', lambda editor: editor.cycle_theme())

    def register(self, name: str, func: Callable[['Editor'], None]):
        self._commands[name] = func

    def names(self) -> list[str]:
        return sorted(self._commands)

    def run(self, editor: 'Editor', name: str) -> bool:
        """Invoke a command by name; False when no such command exists."""
        func = self._commands.get(name)
        if func is None:
            return False
        func(editor)
        return True
