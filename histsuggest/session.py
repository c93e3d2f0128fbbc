"""
One interactive session: the state every keystroke acts on.

A keystroke arrives already classified as an ``Action``. ``Session.handle``
applies it completely (edit, search, reset the pager) before the next one is
read. Actions that can change the candidate list re-filter from the baseline
and put the pager back on page 1, row 0; navigation only moves the pager.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from histsuggest.config import Config, StorageError, debug
from histsuggest.paginator import Direction, Paginator
from histsuggest.query import QueryEditor
from histsuggest.search import filter_commands, match_indices
from histsuggest.storage import (
    load_history,
    read_favorites,
    remove_from_history_file,
    write_favorites,
)
from histsuggest.views import View, ViewState


class Action(Enum):
    INSERT = auto()
    BACKSPACE = auto()
    CURSOR_LEFT = auto()
    CURSOR_RIGHT = auto()
    UP = auto()
    DOWN = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    TOGGLE_FAVORITE = auto()
    TOGGLE_MODE = auto()
    TOGGLE_CASE = auto()
    TOGGLE_VIEW = auto()
    ACCEPT = auto()
    ACCEPT_NEWLINE = auto()
    CANCEL = auto()


@dataclass
class Outcome:
    """What the caller has to do after an action."""

    done: bool = False
    selection: str | None = None
    confirm_delete: str | None = None


@dataclass(frozen=True)
class Row:
    command: str
    favorite: bool
    highlighted: bool
    matches: tuple[int, ...]


class Session:
    def __init__(
        self,
        config: Config,
        raw_history: list[str],
        page_capacity: int,
        query: str = "",
        load_favorites: Callable[[], list[str]] | None = None,
        save_favorites: Callable[[list[str]], None] | None = None,
        remove_from_history: Callable[[str], object] | None = None,
    ):
        self.config = config
        self.search_mode = config.search_mode
        self.case_sensitive = config.case_sensitive
        self.load_favorites = load_favorites or (lambda: read_favorites(config.favorites_path))
        self.save_favorites = save_favorites or (
            lambda favorites: write_favorites(config.favorites_path, favorites)
        )
        self.remove_from_history = remove_from_history or (
            lambda command: remove_from_history_file(config, command)
        )
        self.views = ViewState(raw_history, self.load_favorites, view=config.view)
        self.query = QueryEditor(query)
        self.pager = Paginator(page_capacity)
        if query:
            self.search()
            self.query.move_to_end()

    @classmethod
    def from_config(cls, config: Config, page_capacity: int, query: str = "") -> Session:
        history = load_history(config)
        debug(config, f"Loaded {len(history)} entries from {config.history_path}")
        return cls(config, history, page_capacity, query=query)

    # ------------------------------------------------------------------------
    # Derived state for the renderer
    # ------------------------------------------------------------------------

    @property
    def view(self) -> View:
        return self.views.view

    @property
    def commands(self) -> list[str]:
        return self.views.active_view()

    def set_page_capacity(self, capacity: int) -> None:
        self.pager.page_capacity = capacity

    def rows(self) -> list[Row]:
        return [
            Row(
                command=cmd,
                favorite=self.views.is_favorite(cmd),
                highlighted=idx == self.pager.highlighted,
                matches=tuple(
                    match_indices(cmd, self.query.text, self.search_mode, self.case_sensitive)
                ),
            )
            for idx, cmd in enumerate(self.pager.page_contents(self.commands))
        ]

    def selected(self) -> str | None:
        return self.pager.selected(self.commands)

    def total_pages(self) -> int:
        return self.pager.total_pages(self.commands)

    def status_bar(self) -> str:
        return (
            f"- view:{self.view.value} (C-/) "
            f"- search:{self.search_mode.value} (C-e) "
            f"- case:{'sensitive' if self.case_sensitive else 'insensitive'} (C-t) "
            f"- page {self.pager.display_page(self.commands)}/{self.total_pages()} -"
        )

    def cursor_column(self) -> int:
        return self.query.cursor_column(self.config.prompt)

    # ------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------

    def search(self) -> None:
        """→ Re-filters the active view from its baseline and rewinds the pager"""
        self.views.restore()
        self.views.replace_active(
            filter_commands(self.commands, self.query.text, self.search_mode, self.case_sensitive)
        )
        self.pager.reset()

    def toggle_favorite(self) -> None:
        command = self.selected()
        if command is None:
            return
        shrinking = self.view is View.FAVORITES and self.views.is_favorite(command)
        if shrinking:
            self.pager.retain_selection(self.commands)
        self.views.add_or_remove_favorite(command)
        if shrinking:
            self.pager.step_back_past_end(self.commands)
        self.save_favorites(list(self.views.favorites))

    def _turn_page(self, direction: Direction) -> None:
        self.pager.turn_page(self.commands, direction)
        last_row = max(self.pager.page_size(self.commands) - 1, 0)
        self.pager.highlighted = min(self.pager.highlighted, last_row)

    def delete(self, command: str) -> None:
        """→ Removes ``command`` everywhere, then rebuilds the baseline from the history"""
        was_favorite = self.views.is_favorite(command)
        self.views.delete_command(command)
        favorites = list(self.views.favorites)

        # Both files are attempted; the first failure is raised afterwards
        failure: StorageError | None = None
        if was_favorite:
            try:
                self.save_favorites(favorites)
            except StorageError as e:
                failure = e
        try:
            self.remove_from_history(command)
        except StorageError as e:
            failure = failure or e

        self.views.reload(favorites)
        self.search()
        if failure is not None:
            raise failure

    def handle(self, action: Action, char: str | None = None) -> Outcome:
        pager, commands = self.pager, self.commands

        if action is Action.INSERT and char:
            self.query.insert_char(char)
            self.search()
            self.query.move_cursor(Direction.FORWARD)
        elif action is Action.BACKSPACE:
            if self.query.cursor > 0:
                self.query.remove_char()
                self.search()
                self.query.move_cursor(Direction.BACKWARD)
        elif action is Action.CURSOR_LEFT:
            self.query.move_cursor(Direction.BACKWARD)
        elif action is Action.CURSOR_RIGHT:
            self.query.move_cursor(Direction.FORWARD)
        elif action is Action.UP:
            pager.move_highlighted(commands, Direction.BACKWARD)
        elif action is Action.DOWN:
            pager.move_highlighted(commands, Direction.FORWARD)
        elif action is Action.PAGE_UP:
            self._turn_page(Direction.BACKWARD)
        elif action is Action.PAGE_DOWN:
            self._turn_page(Direction.FORWARD)
        elif action is Action.TOGGLE_MODE:
            self.search_mode = self.search_mode.next()
            self.search()
        elif action is Action.TOGGLE_CASE:
            self.case_sensitive = not self.case_sensitive
            self.search()
        elif action is Action.TOGGLE_VIEW:
            self.views.toggle_view()
            self.search()
        elif action is Action.TOGGLE_FAVORITE:
            self.toggle_favorite()
        elif action is Action.DELETE:
            return Outcome(confirm_delete=self.selected())
        elif action in (Action.ACCEPT, Action.ACCEPT_NEWLINE):
            command = self.selected()
            if command is None:
                return Outcome()
            suffix = "\n" if action is Action.ACCEPT_NEWLINE else ""
            return Outcome(done=True, selection=command + suffix)
        elif action is Action.CANCEL:
            return Outcome(done=True)
        return Outcome()
