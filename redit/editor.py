"""Main editor controller: owns the editing session and the event loop."""

import logging
import os
import select
import signal
from pathlib import Path
from typing import Optional

from .clipboard import ClipboardRegister, PastePosition, RegisterKind, kill_line, paste, yank_line
from .commands import CommandPalette
from .constants import EditorConstants
from .hooks import DirectoryBrowser, FinderResult, FuzzyFinder
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .model import Buffer
from .modes import Mode, Transition, build_mode_handlers
from .scripting import ScriptError, ScriptHost, Settings, init_script_path
from .search import SearchState, find_next, find_previous
from .terminal import TerminalInterface
from .themes import THEMES, theme_names
from .undo import History
from .view import FrameSnapshot, Viewport

logger = logging.getLogger(__name__)


PROMPT_LABELS = {
    'search_forward': "/",
    'search_backward': "?",
    'goto_line': "Goto line: ",
    'eval': "Eval: ",
    'command': "Command: ",
    'theme': "Switch theme: ",
    'save_filename': "File to save in: ",
    'save_filename_quit': "File to save in: ",
    'quit_confirm': "Save file? (y, n) ",
}


def split_lines(text: str) -> list[str]:
    """Split file text into lines without terminators.

    A single trailing newline does not produce an extra empty line and a
    carriage return before a newline is dropped.
    """
    if text.endswith('\n'):
        text = text[:-1]
    lines = [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]
    return lines or [""]


class Editor:
    """Modal text editor session."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[Settings] = None,
                 directory_browser: Optional[DirectoryBrowser] = None,
                 fuzzy_finder: Optional[FuzzyFinder] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.script_host = ScriptHost(settings)
        self.buffer = Buffer()
        self.viewport = Viewport(self.buffer, height=self.terminal.text_rows)
        self.history = History(self.buffer)
        self.clipboard = ClipboardRegister()
        self.search = SearchState()
        self.selection = None
        self.palette = CommandPalette()
        self.handlers = build_mode_handlers()
        self.mode = Mode.NORMAL
        self.directory_browser = directory_browser
        self.fuzzy_finder = fuzzy_finder
        self.finder_active = False
        self.running = False
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None
        self.prompt_input = ""
        self.cursor_visible = True
        self.apply_settings()

    @property
    def settings(self) -> Settings:
        return self.script_host.settings

    def apply_settings(self):
        """Push the live settings into the components that use them."""
        s = self.settings
        self.buffer.indent_width = s.indent_width
        self.buffer.electric_pairs = s.electric_pairs
        self.buffer.pairs = dict(s.pairs)
        self.viewport.top_margin = s.scroll_top_margin
        self.viewport.bottom_margin = s.scroll_bottom_margin
        self.clipboard.mirror_system = s.system_clipboard

    # --- Mode handling ---

    def set_mode(self, mode: Mode):
        if mode is self.mode:
            return
        previous = self.mode
        self.handlers[previous].on_exit(self, mode)
        self.mode = mode
        self.handlers[mode].on_enter(self, previous)
        logger.debug(f"Mode {previous.value} -> {mode.value}")

    def _apply_transition(self, transition: Transition):
        if transition.modified:
            self.modified = True
        if transition.to is not None:
            self.set_mode(transition.to)

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        # Prompts take every key while active
        if self.prompt_mode:
            self._handle_prompt_mode(key_event)
            return

        if self.finder_active:
            self._handle_finder_key(key_event)
            return

        transition = self.handlers[self.mode].handle_key(self, key_event)
        self._apply_transition(transition)

    # --- Prompts ---

    def start_prompt(self, kind: str):
        self.prompt_mode = kind
        self.prompt_input = ""

    def cancel_prompt(self):
        self.prompt_mode = None
        self.prompt_input = ""

    @property
    def prompt_text(self) -> Optional[str]:
        if not self.prompt_mode:
            return None
        return PROMPT_LABELS.get(self.prompt_mode, "") + self.prompt_input

    def _handle_prompt_mode(self, key_event: KeyEvent):
        """Handle keypress during a minibuffer prompt."""
        if self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return
        if key_event.is_cancel:
            self.cancel_prompt()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            kind, text = self.prompt_mode, self.prompt_input
            self.cancel_prompt()
            self._commit_prompt(kind, text)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.is_printable:
            self.prompt_input += key_event.value

    def _commit_prompt(self, kind: str, text: str):
        if kind == 'search_forward':
            self.search_next(text or None)
        elif kind == 'search_backward':
            self.search_previous(text or None)
        elif kind == 'goto_line':
            self._goto_line_input(text)
        elif kind == 'eval':
            self.evaluate(text)
        elif kind == 'command':
            self.run_command(text.strip())
        elif kind == 'theme':
            self.switch_theme(text.strip())
        elif kind in ('save_filename', 'save_filename_quit'):
            if text and self.save_file(text):
                self.status_message = f"Saved {text}"
                if kind == 'save_filename_quit':
                    self.running = False

    def _handle_quit_confirm(self, key_event: KeyEvent):
        """Handle keypress during quit confirmation."""
        self.cancel_prompt()
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename:
                if self.save_file(self.filename):
                    self.running = False
            else:
                self.start_prompt('save_filename_quit')
        elif char == 'n':
            self.running = False

    # --- Files ---

    def open(self, path: str):
        """Load a file, replacing the document and resetting history.

        Unreadable or missing files give an empty document; directories are
        handed to the directory browser.
        """
        if os.path.isdir(path):
            if self.start_dired(path):
                self.set_mode(Mode.DIRED)
            return
        try:
            text = Path(path).read_bytes().decode('utf-8', errors='replace')
            lines = split_lines(text)
        except FileNotFoundError:
            lines = [""]
        except OSError as e:
            logger.warning(f"Cannot read {path}: {e}")
            self.status_message = f"Error: Cannot read {path}"
            lines = [""]
        self.set_mode(Mode.NORMAL)
        self.buffer.replace_contents(lines)
        self.viewport.offset = 0
        self.history.reset()
        self.selection = None
        self.filename = path
        self.modified = False
        logger.debug(f"Opened {path} ({len(lines)} lines)")

    def save_file(self, filename: str) -> bool:
        """Write the document to `filename`, overwriting it in place.

        Returns:
            True if save succeeded, False otherwise
        """
        content = '\n'.join(self.buffer.lines)
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                f.write(content)
        except PermissionError:
            logger.warning(f"Permission denied saving {filename}")
            self.status_message = f"Error: Permission denied saving {filename}"
            return False
        except OSError as e:
            logger.warning(f"Cannot save {filename}: {e}")
            self.status_message = f"Error: Cannot save to {filename}"
            return False
        self.filename = filename
        self.modified = False
        logger.debug(f"Saved {filename}")
        return True

    def _handle_save(self):
        """Handle the save command."""
        if self.filename:
            if self.save_file(self.filename):
                self.status_message = f"Saved {self.filename}"
        else:
            self.start_prompt('save_filename')

    def request_quit(self):
        if self.modified:
            self.start_prompt('quit_confirm')
        else:
            self.running = False

    # --- Navigation ---

    def goto_line(self, line_number: int) -> bool:
        """Jump to a 1-based line and recenter."""
        if not 1 <= line_number <= self.buffer.line_count:
            self.status_message = f"Line out of range: {line_number}"
            return False
        self.buffer.set_cursor(0, line_number - 1)
        self.viewport.recenter()
        return True

    def _goto_line_input(self, text: str):
        try:
            line_number = int(text.strip())
        except ValueError:
            self.status_message = f"Invalid line number: {text}"
            return
        self.goto_line(line_number)

    # --- Search ---

    def search_next(self, query: Optional[str] = None) -> bool:
        return self._search(query, find_next)

    def search_previous(self, query: Optional[str] = None) -> bool:
        return self._search(query, find_previous)

    def repeat_search(self, forward: bool = True) -> bool:
        return self.search_next() if forward else self.search_previous()

    def _search(self, query: Optional[str], finder) -> bool:
        if query is not None:
            self.search.set(query)
        query = self.search.query
        if not query:
            self.status_message = "No search query"
            return False
        self.search.highlight = True
        found = finder(self.buffer, query)
        if found is None:
            self.status_message = EditorConstants.NOT_FOUND_MESSAGE.format(query)
            return False
        if found.position == self.buffer.cursor:
            self.status_message = EditorConstants.ONLY_OCCURRENCE_MESSAGE
            return True
        self.buffer.cursor = found.position
        if found.wrapped:
            self.status_message = EditorConstants.WRAPPED_MESSAGE
            self.viewport.recenter()
        else:
            self.viewport.adjust_to_cursor()
        return True

    # --- History ---

    def undo(self) -> bool:
        if not self.history.undo():
            self.status_message = EditorConstants.OLDEST_CHANGE_MESSAGE
            return False
        self.modified = True
        self.viewport.recenter()
        return True

    def redo(self) -> bool:
        if not self.history.redo():
            self.status_message = EditorConstants.NEWEST_CHANGE_MESSAGE
            return False
        self.modified = True
        self.viewport.recenter()
        return True

    # --- Clipboard and selection ---

    def kill_line(self):
        kill_line(self.buffer, self.clipboard)

    def yank_line(self):
        yank_line(self.buffer, self.clipboard)
        self.status_message = "Line yanked"

    def paste(self, where: PastePosition) -> bool:
        if not paste(self.buffer, self.clipboard, where):
            self.status_message = "Clipboard is empty"
            return False
        self.viewport.adjust_to_cursor(Viewport.ENOUGH)
        return True

    def start_visual(self):
        self.set_mode(Mode.VISUAL)

    def copy_selection(self) -> bool:
        """Copy the selection to the clipboard and leave Visual mode."""
        if self.selection is None:
            return False
        start, _ = self.selection.normalized()
        self.clipboard.write(self.selection.text(self.buffer), RegisterKind.CHARACTER)
        self.buffer.set_cursor(start.column, start.row)
        self.viewport.adjust_to_cursor(Viewport.ENOUGH)
        self.set_mode(Mode.NORMAL)
        return True

    def delete_selection(self) -> bool:
        """Cut the selection to the clipboard and leave Visual mode."""
        if self.selection is None:
            return False
        self.history.sync_cursor()
        removed = self.selection.delete(self.buffer)
        if not removed:
            self.set_mode(Mode.NORMAL)
            return False
        self.clipboard.write(removed, RegisterKind.CHARACTER)
        self.viewport.adjust_to_cursor(Viewport.ENOUGH)
        self.set_mode(Mode.NORMAL)
        self.history.snapshot()
        self.modified = True
        return True

    # --- External hooks ---

    def start_dired(self, path: Optional[str] = None) -> bool:
        """Hand control to the directory browser, if one is registered."""
        if self.directory_browser is None:
            self.status_message = "No directory browser available"
            return False
        focus = None
        if path is None:
            if self.filename and os.path.isfile(self.filename):
                path = os.path.dirname(os.path.abspath(self.filename))
                focus = os.path.basename(self.filename)
            else:
                path = os.getcwd()
        self.directory_browser.start(path, focus)
        return True

    def open_finder(self):
        if self.fuzzy_finder is None:
            self.status_message = "No finder available"
            return
        self.fuzzy_finder.start(os.getcwd(), self.palette.names())
        self.finder_active = True

    def _handle_finder_key(self, key_event: KeyEvent):
        result = self.fuzzy_finder.handle_key(key_event)
        if result is None:
            return
        self.finder_active = False
        self.commit_finder_result(result)

    def commit_finder_result(self, result: FinderResult):
        if result.kind == FinderResult.FILE and result.value:
            self.open(result.value)
        elif result.kind == FinderResult.COMMAND and result.value:
            self.run_command(result.value)

    def run_command(self, name: str) -> bool:
        if not self.palette.run(self, name):
            self.status_message = f"Unknown command: {name}"
            return False
        return True

    # --- Scripting and settings ---

    def evaluate(self, code: str) -> bool:
        """Run user code; errors and rejected settings become status messages."""
        try:
            rejected = self.script_host.evaluate(code)
        except ScriptError as e:
            self.status_message = f"Error: {e}"
            return False
        finally:
            self.apply_settings()
        if rejected:
            self.status_message = f"Invalid value for: {', '.join(rejected)}"
            return False
        return True

    def load_init_script(self):
        path = init_script_path()
        try:
            rejected = self.script_host.load_file(path)
        except ScriptError as e:
            self.status_message = f"Error in {path.name}: {e}"
            rejected = None
        finally:
            self.apply_settings()
        if rejected:
            self.status_message = f"Invalid value for: {', '.join(rejected)}"

    def toggle_setting(self, name: str):
        self.script_host.set(name, not getattr(self.settings, name))
        self.apply_settings()

    def switch_theme(self, name: str) -> bool:
        if name not in THEMES:
            self.status_message = f"No such theme: {name}"
            return False
        self.script_host.set('theme', name)
        return True

    def cycle_theme(self):
        names = theme_names()
        current = names.index(self.settings.theme) if self.settings.theme in names else -1
        self.switch_theme(names[(current + 1) % len(names)])

    # --- Rendering ---

    def frame(self) -> FrameSnapshot:
        """Capture what the renderer needs for one frame."""
        rows = self.viewport.visible_rows()
        selection = None
        if self.mode is Mode.VISUAL and self.selection is not None:
            selection = self.selection.normalized()
        s = self.settings
        return FrameSnapshot(
            lines=tuple(self.buffer.lines[r] for r in rows),
            first_row=self.viewport.offset,
            cursor=self.buffer.cursor.copy(),
            mode=self.mode.value,
            selection=selection,
            search_query=self.search.query if self.search.highlight else None,
            filename=self.filename,
            modified=self.modified,
            line_count=self.buffer.line_count,
            status=self.status_message,
            prompt=self.prompt_text,
            cursor_visible=self.cursor_visible,
            show_line_numbers=s.show_line_numbers,
            show_fringe=s.show_fringe,
            insert_line_cursor=s.insert_line_cursor,
            theme=dict(THEMES.get(s.theme, {})),
        )

    def blink(self):
        """Input poll timed out: toggle the cursor and nothing else."""
        if self.settings.blink_cursor:
            self.cursor_visible = not self.cursor_visible
        else:
            self.cursor_visible = True

    def _draw(self):
        self.viewport.resize(self.terminal.text_rows)
        self.terminal.draw_frame(self.frame())

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop."""
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        self.terminal.setup()
        self.running = True
        try:
            while self.running:
                self._draw()
                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [],
                                            EditorConstants.BLINK_INTERVAL)
                if not ready:
                    self.blink()
                    continue
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                if 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self.cursor_visible = True
                        self._handle_key_event(key_event)
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
