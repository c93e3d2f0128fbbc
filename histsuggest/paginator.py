from __future__ import annotations

import math
from enum import Enum
from typing import Sequence


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


class Paginator:
    """
    Page number and highlighted row over a candidate list.

    The list and the page capacity are passed on every call since both change
    under the paginator's feet: the list on every keystroke, the capacity on
    terminal resize. Whoever changes the list resets the paginator.
    """

    def __init__(self, page_capacity: int):
        self.page_capacity = page_capacity
        self.page = 1
        self.highlighted = 0

    @property
    def page_capacity(self) -> int:
        return self._page_capacity

    @page_capacity.setter
    def page_capacity(self, value: int) -> None:
        value = max(1, value)
        # Page numbers mean something else after a resize
        if value != getattr(self, "_page_capacity", value):
            self.reset()
        self._page_capacity = value

    def reset(self) -> None:
        self.page = 1
        self.highlighted = 0

    def total_pages(self, commands: Sequence[str]) -> int:
        return math.ceil(len(commands) / self.page_capacity)

    def page_contents(self, commands: Sequence[str], page: int | None = None) -> list[str]:
        page = self.page if page is None else page
        start = (page - 1) * self.page_capacity
        return list(commands[start : start + self.page_capacity])

    def page_size(self, commands: Sequence[str]) -> int:
        return len(self.page_contents(commands))

    def turn_page(self, commands: Sequence[str], direction: Direction) -> None:
        """
        Moves one page forward or backward, wrapping around both ends.

        Pages are 1-based, so the arithmetic happens on ``page - 1``. Python's
        ``%`` already has the sign of the divisor: from page 1 of 4 going back,
        ``-1 % 4 == 3`` lands on page 4. With no pages at all there is nothing
        to wrap around and the page stays 1.
        """
        pages = self.total_pages(commands)
        if pages == 0:
            self.page = 1
            return
        self.page = (self.page - 1 + direction.value) % pages + 1

    def move_highlighted(self, commands: Sequence[str], direction: Direction) -> None:
        size = self.page_size(commands)
        if size == 0:
            return
        highlighted = (self.highlighted + direction.value) % size
        if direction is Direction.FORWARD and highlighted == 0:
            self.turn_page(commands, Direction.FORWARD)
            self.highlighted = 0
        elif direction is Direction.BACKWARD and highlighted == size - 1:
            self.turn_page(commands, Direction.BACKWARD)
            self.highlighted = self.page_size(commands) - 1
        else:
            self.highlighted = highlighted

    def retain_selection(self, commands: Sequence[str]) -> None:
        """→ Keeps the pointer on a row when the highlighted entry is about to disappear"""
        if self.highlighted == self.page_size(commands) - 1:
            self.highlighted = max(0, self.highlighted - 1)

    def step_back_past_end(self, commands: Sequence[str]) -> None:
        """→ After a removal emptied the last page, moves to the new last row"""
        pages = self.total_pages(commands)
        if pages and self.page > pages:
            self.page = pages
            self.highlighted = self.page_size(commands) - 1

    def selected(self, commands: Sequence[str]) -> str | None:
        contents = self.page_contents(commands)
        if 0 <= self.highlighted < len(contents):
            return contents[self.highlighted]
        return None

    def display_page(self, commands: Sequence[str]) -> int:
        return self.page if self.total_pages(commands) else 0
