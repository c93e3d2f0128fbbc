from __future__ import annotations

from enum import Enum
from typing import Callable, Sequence

from histsuggest.ranker import rank, unique


class View(Enum):
    SORTED = "sorted"
    FAVORITES = "favorites"
    ALL = "all"

    def next(self) -> View:
        return _NEXT_VIEW[self]


_NEXT_VIEW = {
    View.SORTED: View.FAVORITES,
    View.FAVORITES: View.ALL,
    View.ALL: View.SORTED,
}

CommandSet = dict[View, list[str]]


def build_command_set(raw_history: Sequence[str], favorites: Sequence[str]) -> CommandSet:
    """→ Unfiltered lists for every view"""
    return {
        View.SORTED: rank(raw_history),
        View.FAVORITES: list(favorites),
        View.ALL: unique(raw_history),
    }


def copy_command_set(commands: CommandSet) -> CommandSet:
    return {view: list(cmds) for view, cmds in commands.items()}


class ViewState:
    """
    The three views over the history, in two independent copies.

    ``restore_point`` is the unfiltered baseline; ``working`` is what searches
    narrow down. Searching always starts again from the baseline, so removing a
    character from the query brings back what the longer query filtered out.
    """

    def __init__(
        self,
        raw_history: Sequence[str],
        load_favorites: Callable[[], list[str]],
        view: View = View.SORTED,
    ):
        self.raw_history = list(raw_history)
        self.load_favorites = load_favorites
        self.view = view
        self.restore_point: CommandSet = {}
        self.working: CommandSet = {}
        self.reload()

    def active_view(self) -> list[str]:
        return self.working[self.view]

    def commands(self, view: View) -> list[str]:
        return self.working[view]

    def set_view(self, view: View) -> None:
        self.view = view

    def toggle_view(self) -> None:
        self.view = self.view.next()

    def restore(self) -> None:
        """→ Resets the active view's working list to its baseline"""
        self.working[self.view] = list(self.restore_point[self.view])

    def replace_active(self, commands: list[str]) -> None:
        self.working[self.view] = commands

    @property
    def favorites(self) -> list[str]:
        # The working copy may be narrowed by an earlier search
        return self.restore_point[View.FAVORITES]

    def is_favorite(self, command: str) -> bool:
        return command in self.favorites

    def add_or_remove_favorite(self, command: str) -> bool:
        """→ Toggles favorite membership, returns True if the command is now a favorite"""
        added = not self.is_favorite(command)
        for commands in (self.working, self.restore_point):
            favorites = commands[View.FAVORITES]
            if added:
                favorites.append(command)
            else:
                favorites[:] = [cmd for cmd in favorites if cmd != command]
        return added

    def delete_command(self, command: str) -> None:
        """→ Removes every occurrence of ``command`` from the raw history and all views"""
        self.raw_history = [cmd for cmd in self.raw_history if cmd != command]
        for commands in (self.working, self.restore_point):
            for view in View:
                commands[view] = [cmd for cmd in commands[view] if cmd != command]

    def reload(self, favorites: Sequence[str] | None = None) -> None:
        """→ Rebuilds the baseline from the raw history and ``favorites``, or the favorites file"""
        if favorites is None:
            favorites = self.load_favorites()
        self.restore_point = build_command_set(self.raw_history, favorites)
        self.working = copy_command_set(self.restore_point)
