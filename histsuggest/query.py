from __future__ import annotations

from rich.cells import cell_len

from histsuggest.paginator import Direction


class QueryEditor:
    """
    Single-line query buffer with a cursor counted in characters.

    Editing and moving the cursor are separate steps; a keystroke that types a
    character calls ``insert_char`` and then ``move_cursor``.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.text)

    def byte_offset(self, index: int) -> int:
        """→ UTF-8 byte offset of the character at ``index``"""
        return sum(len(ch.encode("utf-8")) for ch in self.text[:index])

    def insert_char(self, ch: str) -> None:
        offset = self.byte_offset(self.cursor)
        raw = self.text.encode("utf-8")
        self.text = (raw[:offset] + ch.encode("utf-8") + raw[offset:]).decode("utf-8")

    def remove_char(self) -> None:
        """→ Backspace: removes the character before the cursor"""
        if self.cursor == 0:
            return
        start = self.byte_offset(self.cursor - 1)
        end = self.byte_offset(self.cursor)
        raw = self.text.encode("utf-8")
        self.text = (raw[:start] + raw[end:]).decode("utf-8")

    def move_cursor(self, direction: Direction) -> None:
        self.cursor = min(max(self.cursor + direction.value, 0), len(self.text))

    def move_to_end(self) -> None:
        self.cursor = len(self.text)

    def text_width(self) -> int:
        """→ Terminal cells taken by the text before the cursor"""
        return cell_len(self.text[: self.cursor])

    def cursor_column(self, prompt: str, separator: str = " ") -> int:
        return cell_len(prompt) + cell_len(separator) + self.text_width()
