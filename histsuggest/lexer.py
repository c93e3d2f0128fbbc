# ============================================================================
# COMMAND LEXER
# ============================================================================

from __future__ import annotations

import re
from typing import Iterable

from pygments.lexer import RegexLexer, include
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    Token,
)
from rich.style import Style
from rich.text import Text as RichText

# Define custom token types so Rich and Pygments know about them
Name.Argument = Token.Name.Argument
Name.Variable.Magic = Token.Name.Variable.Magic


class CommandLexer(RegexLexer):
    """
    Lexer for a single history entry.

    Only tells apart what is worth colouring in a one-line command: the command
    word, its flags and arguments, quoting, variables and operators. Use like so:
    ```python
    text = highlight_command("git push --force", matches=[0, 1, 2])
    ```
    """

    name = "Shell history entry"
    aliases = ["history"]

    tokens = {
        "_base": [
            (r"\\.", String.Escape),
            (r"\$\(", String.Interpol, "substitution"),
            (r"\$\{[^}]*\}", Name.Variable.Magic),
            (r"\$[a-zA-Z0-9_@*#?$!~-]+", Name.Variable),
            (r"'[^']*'?", String.Single),
            (r'"(\\.|[^"\\])*"?', String.Double),
        ],
        "root": [
            (r"\s+", Text),
            (r"#.*$", Comment),
            (r"(<<<|<<-?|>>?|<&|>&)?[0-9]*[<>]", Operator),
            (r"\|\|?|&&|&", Operator),
            (r"[;()\[\]{}]", Punctuation),
            (r"\b(if|then|else|fi|for|while|do|done|case|esac|in|function)\b", Keyword.Reserved),
            (r"\b(sudo|exec|time|nohup|env)\b", Keyword),
            include("_base"),
            (r"[a-zA-Z0-9_./~+-]+", Name.Function, "arguments"),
        ],
        "arguments": [
            (r"[|]", Operator, "#pop"),
            (r"[;&]", Punctuation, "#pop"),
            (r"\s+", Text),
            (r"(?:--?|\+)[a-zA-Z0-9][\w-]*", Name.Attribute),
            (r"=", Operator),
            (r"\b[0-9]+\b", Number.Integer),
            include("_base"),
            (r"[^=\s;&|(){}<>\[\]$'\"\\]+", Name.Argument),
            (r".", Text),
        ],
        "substitution": [
            (r"\)", String.Interpol, "#pop"),
            include("root"),
        ],
    }

    flags = re.MULTILINE


class MonokaiProTheme:
    """Monokai Pro colours for command tokens."""

    _RED = "#ff6188"
    _GREEN = "#a9dc76"
    _YELLOW = "#ffd866"
    _ORANGE = "#fc9867"
    _PURPLE = "#ab9df2"
    _CYAN = "#78dce8"
    _WHITE = "#fcfcfa"
    _COMMENT_GRAY = "#727072"

    default_style = Style(color=_WHITE)

    styles = {
        Name.Function: Style(color=_GREEN, bold=True),  # git, curl
        Name.Attribute: Style(color=_ORANGE),  # --long, -l
        Name.Argument: Style(color=_PURPLE),  # a filename
        Name.Variable.Magic: Style(color=_PURPLE),  # ${PATH}
        Name.Variable: Style(color=_WHITE),
        Number: Style(color=_CYAN),
        Text: Style(color=_WHITE),
        Comment: Style(color=_COMMENT_GRAY, italic=True),
        Keyword: Style(color=_RED, bold=True),
        Operator: Style(color=_RED),
        Punctuation: Style(color=_WHITE),
        String: Style(color=_YELLOW),
        String.Escape: Style(color=_PURPLE),
        String.Interpol: Style(color=_PURPLE, bold=True),
    }

    @classmethod
    def get_style_for_token(cls, t):
        while t not in cls.styles and t.parent is not None:
            t = t.parent
        return cls.styles.get(t, cls.default_style)


MATCH_STYLE = Style(color="#ff5f5f", bold=True, underline=True)

_lexer = CommandLexer(stripnl=False, ensurenl=False)


def syntax_text(command: str) -> RichText:
    """→ The command as rich Text, coloured by token"""
    tokens = list(_lexer.get_tokens(command))
    # Pygments normalizes \r\n and \r to \n; match indices need the exact text
    if "".join(value for _, value in tokens) != command:
        return RichText(command, no_wrap=True, overflow="crop")
    text = RichText(no_wrap=True, overflow="crop")
    for token_type, value in tokens:
        text.append(value, style=MonokaiProTheme.get_style_for_token(token_type))
    return text


def highlight_command(
    command: str, matches: Iterable[int] = (), syntax: bool = True
) -> RichText:
    """→ Command text with the matched characters painted over the syntax colours"""
    text = syntax_text(command) if syntax else RichText(command, no_wrap=True, overflow="crop")
    for idx in matches:
        if 0 <= idx < len(command):
            text.stylize(MATCH_STYLE, idx, idx + 1)
    return text
