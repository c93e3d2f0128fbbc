"""
Filtering of candidate commands by the query.

Exact and Regex modes share one compiled pattern (Exact escapes the query
first). Fuzzy mode is a subsequence match in the spirit of skim: every query
character has to appear in order, consecutive runs and word starts score
higher. An invalid regex never fails a search, it just filters nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

# ============================================================================
# SEARCH MODES
# ============================================================================


class SearchMode(Enum):
    EXACT = "exact"
    REGEX = "regex"
    FUZZY = "fuzzy"

    def next(self) -> SearchMode:
        return _NEXT_MODE[self]


_NEXT_MODE = {
    SearchMode.EXACT: SearchMode.REGEX,
    SearchMode.REGEX: SearchMode.FUZZY,
    SearchMode.FUZZY: SearchMode.EXACT,
}

# Fuzzy scoring weights
SCORE_MATCH = 16
BONUS_CONSECUTIVE = 8
BONUS_WORD_START = 8
PENALTY_GAP = 1
WORD_SEPARATORS = frozenset(" /-_.:=;|&'\"()[]{}~")


# ============================================================================
# FUZZY MATCHER
# ============================================================================


@dataclass(frozen=True)
class FuzzyMatch:
    score: int
    indices: tuple[int, ...]


class FuzzyMatcher:
    """Subsequence matcher reporting a score and the matched character positions."""

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive

    def _fold(self, text: str) -> str:
        return text if self.case_sensitive else text.lower()

    def fuzzy_indices(self, candidate: str, query: str) -> FuzzyMatch | None:
        if not query:
            return FuzzyMatch(0, ())
        text = self._fold(candidate)
        pattern = self._fold(query)

        # Leftmost match first, then walk back from its end to tighten the span
        end = self._forward_end(text, pattern)
        if end is None:
            return None
        start = self._backward_start(text, pattern, end)
        indices = self._forward_indices(text, pattern, start)
        return FuzzyMatch(self._score(text, indices), tuple(indices))

    def fuzzy_match(self, candidate: str, query: str) -> int | None:
        found = self.fuzzy_indices(candidate, query)
        return None if found is None else found.score

    @staticmethod
    def _forward_end(text: str, pattern: str) -> int | None:
        pos = 0
        for ch in pattern:
            pos = text.find(ch, pos)
            if pos == -1:
                return None
            pos += 1
        return pos - 1

    @staticmethod
    def _backward_start(text: str, pattern: str, end: int) -> int:
        pos = end + 1
        for ch in reversed(pattern):
            pos = text.rfind(ch, 0, pos)
        return pos

    @staticmethod
    def _forward_indices(text: str, pattern: str, start: int) -> list[int]:
        indices = []
        pos = start
        for ch in pattern:
            pos = text.find(ch, pos)
            indices.append(pos)
            pos += 1
        return indices

    @staticmethod
    def _score(text: str, indices: list[int]) -> int:
        score = 0
        previous = None
        for idx in indices:
            score += SCORE_MATCH
            if idx == 0 or text[idx - 1] in WORD_SEPARATORS:
                score += BONUS_WORD_START
            if previous is not None:
                if idx == previous + 1:
                    score += BONUS_CONSECUTIVE
                else:
                    score -= PENALTY_GAP * (idx - previous - 1)
            previous = idx
        return score


# ============================================================================
# SEARCH ENGINE
# ============================================================================


def create_search_regex(query: str, mode: SearchMode, case_sensitive: bool) -> re.Pattern | None:
    """→ Compiled pattern for Exact/Regex modes, or None if the query isn't a valid regex"""
    pattern = re.escape(query) if mode is SearchMode.EXACT else query
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error:
        return None


def filter_commands(
    candidates: Sequence[str], query: str, mode: SearchMode, case_sensitive: bool
) -> list[str]:
    """→ Candidates matching the query, in their original order"""
    if mode is SearchMode.FUZZY:
        matcher = FuzzyMatcher(case_sensitive)
        return [cmd for cmd in candidates if matcher.fuzzy_indices(cmd, query) is not None]

    regex = create_search_regex(query, mode, case_sensitive)
    if regex is None:
        return list(candidates)
    return [cmd for cmd in candidates if regex.search(cmd)]


def match_indices(command: str, query: str, mode: SearchMode, case_sensitive: bool) -> list[int]:
    """→ Character positions of ``command`` to paint as matched"""
    if not query:
        return []
    if mode is SearchMode.FUZZY:
        found = FuzzyMatcher(case_sensitive).fuzzy_indices(command, query)
        return list(found.indices) if found else []

    regex = create_search_regex(query, mode, case_sensitive)
    if regex is None:
        return []
    return [i for m in regex.finditer(command) for i in range(m.start(), m.end())]
