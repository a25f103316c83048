# alliance_wars/services/fuzzy_matcher.py
"""
Typo-tolerant matching for chat input.

A candidate is accepted when its similarity (1 - distance / longest length)
reaches the threshold AND the raw edit distance stays within `max_distance`.
The relative threshold keeps one- and two-letter tokens from matching
unrelated words; the absolute cap stops long words from absorbing big typos.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from alliance_wars.models.enums import ADMIN_COMMANDS, CanonicalCommand

logger = logging.getLogger("alliance_wars.services.fuzzy_matcher")  # Logger for this module

T = TypeVar("T")

DEFAULT_THRESHOLD = 0.7
DEFAULT_MAX_DISTANCE = 3

# Spelling -> canonical command, in enumeration order (ties go to the earliest entry)
COMMAND_ALIASES: List[Tuple[str, CanonicalCommand]] = [
    ("language", CanonicalCommand.CONFIG),
]

def build_vocabulary(include_admin: bool = False) -> List[Tuple[str, CanonicalCommand]]:
    vocabulary = [
        (command.value, command)
        for command in CanonicalCommand
        if include_admin or command not in ADMIN_COMMANDS
    ]
    return vocabulary + COMMAND_ALIASES


def levenshtein_distance(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    if len(a) < len(b):
        a, b = b, a

    previous_row = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current_row = [i]
        for j, char_b in enumerate(b, start=1):
            insert_cost = current_row[j - 1] + 1
            delete_cost = previous_row[j] + 1
            replace_cost = previous_row[j - 1] + (char_a != char_b)
            current_row.append(min(insert_cost, delete_cost, replace_cost))
        previous_row = current_row
    return previous_row[-1]


def similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def best_fuzzy_match(
    query: str,
    candidates: Iterable[Tuple[str, T]],
    threshold: float = DEFAULT_THRESHOLD,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> Optional[T]:
    """
    Returns the value of the best-scoring candidate label, or None.
    Labels are compared case-insensitively; an exact match always wins.
    """
    query = query.strip().lower()
    if not query:
        return None

    best_value: Optional[T] = None
    best_score = -1.0
    for label, value in candidates:
        label = label.strip().lower()
        if label == query:
            return value
        distance = levenshtein_distance(query, label)
        if distance > max_distance:
            continue
        score = similarity(query, label)
        # Strictly greater: on ties the first candidate stays
        if score >= threshold and score > best_score:
            best_value, best_score = value, score
    return best_value


def match_command(
    raw_token: str,
    vocabulary: Optional[Sequence[Tuple[str, CanonicalCommand]]] = None,
    threshold: float = DEFAULT_THRESHOLD,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> Optional[CanonicalCommand]:
    """Resolves a typed command word to its canonical command, or None when nothing is close enough."""
    if vocabulary is None:
        vocabulary = build_vocabulary(include_admin=False)
    command = best_fuzzy_match(raw_token, vocabulary, threshold=threshold, max_distance=max_distance)
    if command is not None and raw_token.lower() != command.value:
        logger.debug(f"Fuzzy matched '{raw_token}' to '{command.value}'")
    return command
