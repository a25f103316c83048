# tests/services/test_fuzzy_matcher.py
import pytest

from alliance_wars.models.enums import CanonicalCommand
from alliance_wars.services.fuzzy_matcher import (
    best_fuzzy_match,
    build_vocabulary,
    levenshtein_distance,
    match_command,
    similarity,
)

@pytest.mark.parametrize("a, b, expected", [
    ("attack", "attack", 0),
    ("atack", "attack", 1),
    ("", "abc", 3),
    ("kitten", "sitting", 3),
    ("defend", "dfeend", 2),
])
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected
    assert levenshtein_distance(b, a) == expected

def test_similarity_bounds():
    assert similarity("", "") == 1.0
    assert similarity("abc", "abc") == 1.0
    assert similarity("abc", "xyz") == 0.0

@pytest.mark.parametrize("typed, expected", [
    ("attack", CanonicalCommand.ATTACK),
    ("ATTACK", CanonicalCommand.ATTACK),
    ("atack", CanonicalCommand.ATTACK),
    ("colect", CanonicalCommand.COLLECT),
    ("regster", CanonicalCommand.REGISTER),
    ("staus", CanonicalCommand.STATUS),
    ("language", CanonicalCommand.CONFIG),
])
def test_match_command_tolerates_typos(typed, expected):
    assert match_command(typed) == expected

@pytest.mark.parametrize("typed", ["xyz123", "a", "at", "", "hello world"])
def test_match_command_rejects_far_tokens(typed):
    assert match_command(typed) is None

def test_admin_commands_only_in_admin_vocabulary():
    assert match_command("give") is None
    assert match_command("give", build_vocabulary(include_admin=True)) == CanonicalCommand.GIVE
    assert match_command("create_game", build_vocabulary(include_admin=True)) == CanonicalCommand.CREATE_GAME

def test_long_words_respect_absolute_distance_cap():
    # similarity 0.6 would pass a lower threshold, but distance 4 is over the cap
    assert best_fuzzy_match("abcdefghij", [("abcdwxyzij", 1)], threshold=0.5, max_distance=3) is None

def test_exact_match_wins_over_earlier_close_candidates():
    candidates = [("bobby", "first"), ("bob", "exact")]
    assert best_fuzzy_match("bob", candidates) == "exact"

def test_ties_keep_first_candidate():
    candidates = [("alice", "first"), ("alicf", "second")]
    assert best_fuzzy_match("alicx", candidates) == "first"
