from __future__ import annotations

from collections import Counter
from typing import Hashable, Sequence, TypeVar

T = TypeVar("T", bound=Hashable)


def frequency_map(commands: Sequence[T]) -> Counter[T]:
    return Counter(commands)


def position_map(commands: Sequence[T]) -> dict[T, int]:
    """→ Last index at which each distinct command occurs"""
    return {cmd: pos for pos, cmd in enumerate(commands)}


def rank(commands: Sequence[T]) -> list[T]:
    """→ Distinct commands, most frequent first, most recent first among equals

    >>> rank([3, 2, 4, 6, 2, 4, 3, 3, 4, 5, 6, 3, 2, 4, 5, 5, 3])
    [3, 4, 5, 2, 6]
    """
    frequencies = frequency_map(commands)
    positions = position_map(commands)
    by_recency = sorted(positions, key=positions.__getitem__, reverse=True)
    # sorted() is stable, so recency survives as the tie-break
    return sorted(by_recency, key=frequencies.__getitem__, reverse=True)


def unique(commands: Sequence[T]) -> list[T]:
    """→ Distinct commands in order of first occurrence"""
    return list(dict.fromkeys(commands))
