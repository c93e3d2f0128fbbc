from __future__ import annotations

import fcntl
import sys
import termios
from datetime import datetime
from pathlib import Path

from histsuggest.config import Config, StorageError
from histsuggest.decoder import decode_history, decode_line, decode_plain, split_lines

# ============================================================================
# HISTORY FILE
# ============================================================================


def read_bytes(path: Path) -> bytes:
    """→ File I/O: Reads a history or favorites file, a missing file reads as empty"""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return b""
    except OSError as e:
        raise StorageError(path, e) from e


def load_history(config: Config) -> list[str]:
    return decode_history(config.shell, read_bytes(config.history_path))


def remove_from_history_file(config: Config, command: str) -> int:
    """→ Rewrites the history file without any entry decoding to ``command``

    Lines are kept as raw bytes so untouched entries keep their timestamps and
    metafied bytes. Returns the number of removed lines.
    """
    path = config.history_path
    original = read_bytes(path)
    kept = [line for line in split_lines(original) if decode_line(config.shell, line) != command]
    removed = len(split_lines(original)) - len(kept)
    if removed:
        backup_and_write(path, b"".join(line + b"\n" for line in kept), original)
    return removed


def backup_and_write(path: Path, new_contents: bytes, original: bytes) -> Path:
    """→ File I/O: Saves a backup next to ``path`` and writes the new contents"""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    backup_path = path.parent / f"{path.name}.histsuggest.{timestamp}"
    try:
        backup_path.write_bytes(original)
    except OSError as e:
        raise StorageError(backup_path, e) from e
    try:
        path.write_bytes(new_contents)
    except OSError as e:
        raise StorageError(path, e) from e
    return backup_path


# ============================================================================
# FAVORITES FILE
# ============================================================================


def read_favorites(path: Path) -> list[str]:
    """→ One favorite per line, split on newline only like the history itself"""
    return decode_plain(read_bytes(path))


def write_favorites(path: Path, favorites: list[str]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes("\n".join(favorites).encode("utf-8"))
    except OSError as e:
        raise StorageError(path, e) from e


# ============================================================================
# COMMAND REPLAY
# ============================================================================


def echo(command: str, fd: int | None = None) -> bool:
    """→ Pushes ``command`` into the terminal's input queue

    Falls back to printing it on stdout when the kernel refuses TIOCSTI
    (Linux >= 6.2 with ``dev.tty.legacy_tiocsti = 0``). Returns True if the
    command was injected.
    """
    fd = sys.stdin.fileno() if fd is None else fd
    try:
        for byte in command.encode("utf-8"):
            fcntl.ioctl(fd, termios.TIOCSTI, bytes([byte]))
    except OSError:
        sys.stdout.write(command)
        sys.stdout.flush()
        return False
    return True
