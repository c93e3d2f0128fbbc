"""
Command-line entry point.

    histsuggest [QUERY]              open the suggest box, optionally pre-filtered
    histsuggest --show-config zsh    print the shell snippet that binds Ctrl-R

The chosen command is pushed into the terminal's input queue; ENTER also
appends a newline so the shell runs it right away, TAB only pastes it.
"""

from __future__ import annotations

import argparse
import shutil

from histsuggest import __version__
from histsuggest.config import (
    CHROME_ROWS,
    SHELL_CONFIGS,
    Config,
    HistSuggestError,
    console_print,
    debug,
)
from histsuggest.decoder import Shell
from histsuggest.search import SearchMode
from histsuggest.session import Session
from histsuggest.storage import echo
from histsuggest.views import View


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="histsuggest", description="History suggest box for bash and zsh"
    )
    ap.add_argument("query", nargs="*", help="Initial search query")
    ap.add_argument("--show-config", metavar="SHELL", help="Print the shell configuration and exit")
    ap.add_argument("--shell", choices=[s.value for s in Shell], help="Override $SHELL")
    ap.add_argument(
        "--search-mode",
        choices=[m.value for m in SearchMode],
        default=SearchMode.EXACT.value,
        help="Initial search mode",
    )
    ap.add_argument(
        "--view", choices=[v.value for v in View], default=View.SORTED.value, help="Initial view"
    )
    ap.add_argument("--case-sensitive", action="store_true", help="Start case sensitive")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print diagnostics to stderr")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def show_config(name: str) -> int:
    shell = Shell.from_name(name)
    if shell is None:
        console_print(f"[error]{name} is not supported. Available options: bash, zsh[/error]")
        return 1
    print(SHELL_CONFIGS[shell])
    return 0


def main(argv: list[str] | None = None) -> int:
    """→ Main: Loads the history, runs the suggest box and replays the selection"""
    args = build_parser().parse_args(argv)

    if args.show_config:
        return show_config(args.show_config)

    try:
        config = Config.from_environment(
            shell=args.shell,
            search_mode=SearchMode(args.search_mode),
            view=View(args.view),
            case_sensitive=args.case_sensitive,
            verbose=args.verbose,
        )
        debug(config, f"Shell: {config.shell.value}, favorites: {config.favorites_path}")
        rows = shutil.get_terminal_size().lines - CHROME_ROWS
        session = Session.from_config(config, rows, query=" ".join(args.query))
    except HistSuggestError as e:
        console_print(f"[error]Error: {e}[/error]")
        return 1

    # Imported late so --show-config stays fast
    from histsuggest.ui import HistorySearchApp

    selection = HistorySearchApp(session).run()
    if selection:
        echo(selection)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
