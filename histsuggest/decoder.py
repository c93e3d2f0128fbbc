"""
Decoders that turn a shell's on-disk history into a list of commands.

bash writes one command per line. zsh "metafies" bytes it considers special:
each one is written as ``ZSH_META`` followed by the original byte XOR 0x20,
and with ``EXTENDED_HISTORY`` every entry starts with ``: <epoch>:<duration>;``.
"""

from __future__ import annotations

import re
from enum import Enum

ZSH_META = 0x83
ZSH_TIMESTAMP_RE = re.compile(r"^: \d{10}:\d;")


class Shell(Enum):
    BASH = "bash"
    ZSH = "zsh"

    @classmethod
    def from_name(cls, name: str) -> Shell | None:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def history_filename(self) -> str:
        return f".{self.value}_history"


def split_lines(raw: bytes) -> list[bytes]:
    """→ Splits raw history bytes on newline, without the trailing empty line"""
    lines = raw.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return lines


def decode_plain(raw: bytes) -> list[str]:
    """→ bash: every line is one command"""
    return [line.decode("utf-8", errors="replace") for line in split_lines(raw)]


def unmetafy(raw: bytes) -> bytes:
    """→ zsh: drops every Meta byte and XORs the byte after it with 0x20

    >>> unmetafy(b"abc\\x83\\x44ef")
    b'abcdef'
    """
    out = bytearray()
    it = iter(raw)
    for byte in it:
        if byte == ZSH_META:
            # A trailing Meta with nothing after it is dropped
            nxt = next(it, None)
            if nxt is not None:
                out.append(nxt ^ 0x20)
        else:
            out.append(byte)
    return bytes(out)


def remove_timestamp(line: str) -> str:
    """→ Strips the ``: 1330648651:0;`` prefix of an extended history entry"""
    return ZSH_TIMESTAMP_RE.sub("", line, count=1)


def decode_zsh(raw: bytes) -> list[str]:
    return [remove_timestamp(line) for line in decode_plain(unmetafy(raw))]


DECODERS = {
    Shell.BASH: decode_plain,
    Shell.ZSH: decode_zsh,
}


def decode_history(shell: Shell, raw: bytes) -> list[str]:
    return DECODERS[shell](raw)


def decode_line(shell: Shell, raw_line: bytes) -> str:
    """→ Decodes a single raw line the way ``decode_history`` would"""
    decoded = decode_history(shell, raw_line)
    return decoded[0] if decoded else ""
