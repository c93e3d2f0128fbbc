from __future__ import annotations

import os
import socket
import sys
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.theme import Theme

from histsuggest.decoder import Shell
from histsuggest.search import SearchMode
from histsuggest.views import View

# ============================================================================
# CONFIGURATION & CONSTANTS
# ============================================================================

CUSTOM_THEME = Theme({
    "title": "bold #C678DD",
    "context": "#5C6370",
    "info": "#61AFEF",
    "success": "#98C379",
    "warning": "#E5C07B",
    "error": "#E06C75",
})

console = Console(stderr=True, theme=CUSTOM_THEME)

# Top bar, help label and status bar
CHROME_ROWS = 3

FAVORITES_DIR = Path(".config") / "histsuggest"

SHELL_CONFIGS = {
    Shell.BASH: """\
# append new history items to .bash_history
shopt -s histappend
# don't put duplicate lines or lines starting with space in the history
HISTCONTROL=ignoreboth
# increase history file size
HISTFILESIZE=10000
# increase history size
HISTSIZE=${HISTFILESIZE}
# synchronize history between bash sessions
PROMPT_COMMAND="history -a; history -n; ${PROMPT_COMMAND}"
# if this is interactive shell, then bind histsuggest to Ctrl-r
if [[ $- =~ .*i.* ]]; then bind '"\\C-r": "\\C-a histsuggest -- \\C-j"'; fi""",
    Shell.ZSH: """\
# add new history entries as they are typed, with timestamps
setopt incappendhistory extendedhistory
# don't put lines starting with space in the history
setopt histignorespace
# bind histsuggest to Ctrl-r
bindkey -s '\\C-r' '\\C-a histsuggest -- \\C-j'""",
}


class HistSuggestError(Exception):
    """Base class for everything histsuggest raises on purpose."""


class UnsupportedShellError(HistSuggestError):
    def __init__(self, shell: str):
        super().__init__(f"{shell} is not supported yet. Available options: bash, zsh")
        self.shell = shell


class StorageError(HistSuggestError):
    """A history or favorites file could not be read or written."""

    def __init__(self, path: Path, reason: OSError):
        super().__init__(f"{path}: {reason.strerror or reason}")
        self.path = path
        self.reason = reason


@dataclass
class Config:
    """Everything the session needs from the outside world, captured once at startup."""

    shell: Shell
    history_path: Path
    favorites_path: Path
    prompt: str
    search_mode: SearchMode = SearchMode.EXACT
    case_sensitive: bool = False
    view: View = View.SORTED
    verbose: bool = False

    @classmethod
    def from_environment(
        cls,
        shell: str | None = None,
        env: dict[str, str] | None = None,
        home: Path | None = None,
        **overrides,
    ) -> Config:
        """→ Resolves shell, history file, favorites file and prompt from the environment"""
        env = dict(os.environ if env is None else env)
        home = home or Path.home()
        name = shell or Path(env.get("SHELL", "")).name
        parsed = Shell.from_name(name)
        if parsed is None:
            raise UnsupportedShellError(name or "<unknown shell>")

        if histfile := env.get("HISTFILE"):
            history_path = Path(histfile).expanduser()
        else:
            history_path = home / parsed.history_filename

        return cls(
            shell=parsed,
            history_path=history_path,
            favorites_path=home / FAVORITES_DIR / f".{parsed.value}_favorites",
            prompt=shell_prompt(env),
            **overrides,
        )


def shell_prompt(env: dict[str, str]) -> str:
    user = env.get("USER") or env.get("LOGNAME") or "user"
    return f"{user}@{socket.gethostname()}$"


# ============================================================================
# CONSOLE OUTPUT
# ============================================================================


def console_print(string="", *args, **kwargs) -> None:
    """→ Safe console printing with fallback"""
    try:
        console.print(string, *args, **kwargs)
    except Exception:
        print(string, *args, file=sys.stderr)


def debug(config: Config, message: str) -> None:
    if config.verbose:
        console_print(f"[context]{message}[/context]")
