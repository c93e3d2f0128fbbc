from __future__ import annotations

from rich.cells import set_cell_size
from rich.console import Group
from rich.style import Style
from rich.text import Text as RichText
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.geometry import Offset
from textual.widgets import Static

from histsuggest.config import CHROME_ROWS, StorageError
from histsuggest.lexer import highlight_command
from histsuggest.session import Action, Session

LABEL = (
    "Type to filter, UP/DOWN move, LEFT/RIGHT move cursor, ENTER/TAB select, "
    "DEL remove, ESC quit, C-f add/rm fav"
)

FAVORITE_STYLE = Style(color="cyan")
HIGHLIGHTED_STYLE = Style(color="white", bgcolor="green")
CURSOR_STYLE = Style(reverse=True)

KEY_ACTIONS = {
    "left": Action.CURSOR_LEFT,
    "right": Action.CURSOR_RIGHT,
    "up": Action.UP,
    "down": Action.DOWN,
    "pageup": Action.PAGE_UP,
    "pagedown": Action.PAGE_DOWN,
    "backspace": Action.BACKSPACE,
    "ctrl+h": Action.BACKSPACE,
}


def deletion_prompt(command: str) -> str:
    return f"Do you want to delete all occurrences of {command}? y/n"


class HistorySearchApp(App[str | None]):
    """Full-screen suggest box. Exits with the chosen command, or None."""

    CSS = """
    Screen {
        layout: vertical;
        overflow: hidden;
    }
    #top-bar, #label {
        height: 1;
        padding: 0 1;
    }
    #label.confirm {
        background: #E06C75;
        color: white;
    }
    #status-bar {
        height: 1;
        padding: 0 1;
        background: white;
        color: black;
    }
    #results {
        height: 1fr;
        padding: 0 1;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("enter", "accept(True)", "Select and run", priority=True),
        Binding("tab", "accept(False)", "Select", priority=True),
        Binding("escape", "cancel", "Quit", priority=True),
        Binding("ctrl+e", "dispatch('TOGGLE_MODE')", "Search mode", priority=True),
        Binding("ctrl+t", "dispatch('TOGGLE_CASE')", "Case", priority=True),
        Binding("ctrl+slash,ctrl+underscore", "dispatch('TOGGLE_VIEW')", "View", priority=True),
        Binding("ctrl+f", "dispatch('TOGGLE_FAVORITE')", "Favorite", priority=True),
        Binding("delete", "delete", "Delete", priority=True),
    ]

    def __init__(self, session: Session, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.pending_delete: str | None = None
        self.message: str | None = None

    def compose(self) -> ComposeResult:
        yield Static(id="top-bar")
        yield Static(LABEL, id="label")
        yield Static(id="status-bar")
        yield Static(id="results")

    def on_mount(self) -> None:
        self.populate_screen()

    def on_resize(self, event: events.Resize) -> None:
        self.populate_screen()

    # ------------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------------

    @property
    def page_capacity(self) -> int:
        return max(1, self.size.height - CHROME_ROWS)

    @property
    def row_width(self) -> int:
        return max(1, self.size.width - 2)

    def populate_screen(self) -> None:
        session = self.session
        session.set_page_capacity(self.page_capacity)

        rows = []
        for row in session.rows():
            text = highlight_command(row.command, row.matches)
            text.truncate(self.row_width, overflow="crop")
            if row.favorite:
                text.stylize(FAVORITE_STYLE)
            if row.highlighted:
                text = RichText(set_cell_size(text.plain, self.row_width), style=HIGHLIGHTED_STYLE)
            rows.append(text)
        self.query_one("#results", Static).update(Group(*rows))

        status = self.message or session.status_bar()
        self.query_one("#status-bar", Static).update(RichText(status, no_wrap=True))

        label = self.query_one("#label", Static)
        if self.pending_delete is not None:
            label.update(RichText(deletion_prompt(self.pending_delete), no_wrap=True))
            label.add_class("confirm")
        else:
            label.update(LABEL)
            label.remove_class("confirm")

        self.query_one("#top-bar", Static).update(self.top_bar())
        # The top bar has one cell of padding on the left
        self.cursor_position = Offset(session.cursor_column() + 1, 0)

    def top_bar(self) -> RichText:
        query = self.session.query
        text = RichText(f"{self.session.config.prompt} ", no_wrap=True)
        text.append(query.text)
        text.append(" ")
        cursor_idx = len(text.plain) - len(query.text) - 1 + query.cursor
        text.stylize(CURSOR_STYLE, cursor_idx, cursor_idx + 1)
        return text

    # ------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------

    def dispatch_action(self, action: Action, char: str | None = None) -> None:
        self.message = None
        try:
            outcome = self.session.handle(action, char)
        except StorageError as e:
            self.message = f"Could not save: {e}"
            outcome = None
        if outcome is not None:
            if outcome.done:
                self.exit(outcome.selection)
                return
            self.pending_delete = outcome.confirm_delete
        self.populate_screen()

    def on_key(self, event: events.Key) -> None:
        if self.pending_delete is not None:
            event.stop()
            self.confirm_delete(event.character == "y")
            return
        if action := KEY_ACTIONS.get(event.key):
            event.stop()
            self.dispatch_action(action)
        elif event.is_printable and event.character:
            event.stop()
            self.dispatch_action(Action.INSERT, event.character)

    def confirm_delete(self, confirmed: bool) -> None:
        command, self.pending_delete = self.pending_delete, None
        self.message = None
        if confirmed and command is not None:
            try:
                self.session.delete(command)
            except StorageError as e:
                self.message = f"Could not save deletion: {e}"
        self.populate_screen()

    def action_dispatch(self, name: str) -> None:
        if self.pending_delete is not None:
            self.confirm_delete(False)
            return
        self.dispatch_action(Action[name])

    def action_accept(self, newline: bool) -> None:
        if self.pending_delete is not None:
            self.confirm_delete(False)
            return
        self.dispatch_action(Action.ACCEPT_NEWLINE if newline else Action.ACCEPT)

    def action_delete(self) -> None:
        if self.pending_delete is not None:
            self.confirm_delete(False)
            return
        self.dispatch_action(Action.DELETE)

    def action_cancel(self) -> None:
        if self.pending_delete is not None:
            self.confirm_delete(False)
            return
        self.dispatch_action(Action.CANCEL)
