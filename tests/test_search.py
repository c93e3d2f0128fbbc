import pytest

from histsuggest.search import (
    FuzzyMatcher,
    SearchMode,
    create_search_regex,
    filter_commands,
    match_indices,
)


class TestFilter:
    @pytest.mark.parametrize(
        "query, mode, case_sensitive, expected",
        [
            ("cat", SearchMode.EXACT, False, ["cat spam", "cat SPAM"]),
            ("spam", SearchMode.EXACT, False, ["cat spam", "cat SPAM", "grep -r spam ."]),
            ("SPAM", SearchMode.EXACT, True, ["cat SPAM"]),
            (
                "[0-9]+",
                SearchMode.REGEX,
                False,
                [
                    "git rebase -i HEAD~2",
                    "ping -c 10 www.google.com",
                    "xfce4-panel -r",
                    "make -j4",
                ],
            ),
            ("šp", SearchMode.FUZZY, False, ["echo šampion"]),
            ("hwk", SearchMode.FUZZY, False, ["nano .github/workflows/build.yml", "cd /home/bwk/"]),
        ],
    )
    def test_search(self, fake_history, query, mode, case_sensitive, expected):
        assert filter_commands(fake_history, query, mode, case_sensitive) == expected

    def test_exact_escapes_metacharacters(self):
        commands = ["print(1)", "printf x", "echo print"]
        assert filter_commands(commands, "print(", SearchMode.EXACT, False) == ["print(1)"]
        assert filter_commands(commands, ".", SearchMode.EXACT, False) == []

    def test_invalid_regex_is_noop(self, fake_history):
        assert filter_commands(fake_history, "print(", SearchMode.REGEX, False) == fake_history

    @pytest.mark.parametrize("mode", [SearchMode.EXACT, SearchMode.REGEX, SearchMode.FUZZY])
    def test_empty_query_matches_everything(self, fake_history, mode):
        assert filter_commands(fake_history, "", mode, False) == fake_history

    @pytest.mark.parametrize(
        "query, mode",
        [("git", SearchMode.EXACT), ("^c[a-z]+", SearchMode.REGEX), ("gt", SearchMode.FUZZY)],
    )
    def test_idempotent(self, fake_history, query, mode):
        once = filter_commands(fake_history, query, mode, False)
        assert filter_commands(once, query, mode, False) == once

    def test_order_preserved(self):
        commands = ["z git", "a git", "m git"]
        assert filter_commands(commands, "git", SearchMode.EXACT, False) == commands

    def test_empty_candidates(self):
        assert filter_commands([], "x", SearchMode.FUZZY, False) == []

    def test_fuzzy_case_sensitive(self):
        commands = ["Make all", "make all"]
        assert filter_commands(commands, "Ma", SearchMode.FUZZY, True) == ["Make all"]
        assert filter_commands(commands, "Ma", SearchMode.FUZZY, False) == commands


class TestCreateSearchRegex:
    @pytest.mark.parametrize(
        "mode, case_sensitive, expected",
        [
            (SearchMode.EXACT, False, r"print\("),
            (SearchMode.EXACT, True, r"print\("),
        ],
    )
    def test_exact_pattern(self, mode, case_sensitive, expected):
        assert create_search_regex("print(", mode, case_sensitive).pattern == expected

    def test_invalid_regex(self):
        assert create_search_regex("print(", SearchMode.REGEX, False) is None


class TestMatchIndices:
    @pytest.mark.parametrize(
        "command, query, expected",
        [
            ("cat spam", "cat", [0, 1, 2]),
            ("make -j4", "[0-9]+", [7]),
            ("ping -c 10 www.google.com", "[0-9]+", [8, 9]),
        ],
    )
    def test_regex(self, command, query, expected):
        assert match_indices(command, query, SearchMode.REGEX, False) == expected

    def test_exact_every_occurrence(self):
        assert match_indices("ab ab", "AB", SearchMode.EXACT, False) == [0, 1, 3, 4]

    def test_invalid_regex(self):
        assert match_indices("print(1)", "print(", SearchMode.REGEX, False) == []

    def test_empty_query(self):
        assert match_indices("ls", "", SearchMode.EXACT, False) == []

    def test_fuzzy(self):
        assert match_indices("cd /home/bwk/", "hwk", SearchMode.FUZZY, False) == [4, 10, 11]


class TestFuzzyMatcher:
    def test_no_match(self):
        assert FuzzyMatcher().fuzzy_indices("lsusb", "xyz") is None

    def test_indices_are_ordered(self):
        found = FuzzyMatcher().fuzzy_indices("git checkout -b tests", "gco")
        assert found is not None
        assert list(found.indices) == sorted(found.indices)

    def test_tightest_span(self):
        # the leftmost "a" would give a longer span than needed
        found = FuzzyMatcher().fuzzy_indices("a xx ab", "ab")
        assert found.indices == (5, 6)

    def test_consecutive_scores_higher(self):
        matcher = FuzzyMatcher()
        assert matcher.fuzzy_match("abc", "abc") > matcher.fuzzy_match("a_b_c", "abc")

    def test_empty_query(self):
        assert FuzzyMatcher().fuzzy_match("anything", "") == 0


class TestSearchMode:
    def test_cycle(self):
        assert SearchMode.EXACT.next() is SearchMode.REGEX
        assert SearchMode.REGEX.next() is SearchMode.FUZZY
        assert SearchMode.FUZZY.next() is SearchMode.EXACT
