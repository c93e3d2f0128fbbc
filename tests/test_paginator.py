import pytest

from histsuggest.paginator import Direction, Paginator


@pytest.fixture
def pager():
    return Paginator(page_capacity=7)


class TestPages:
    @pytest.mark.parametrize(
        "page, expected",
        [
            (
                1,
                [
                    "cat spam",
                    "cat SPAM",
                    "git add .",
                    "git add . --dry-run",
                    "git push origin master",
                    "git rebase -i HEAD~2",
                    "git checkout -b tests",
                ],
            ),
            (
                4,
                [
                    "make -j4",
                    "gpg --card-status",
                    "echo šampion",
                    "nano .github/workflows/build.yml",
                    "cd /home/bwk/",
                ],
            ),
            (5, []),
        ],
    )
    def test_page_contents(self, pager, fake_history, page, expected):
        pager.page = page
        assert pager.page_contents(fake_history) == expected

    def test_page_size(self, pager, fake_history):
        assert pager.page_size(fake_history) == 7

    def test_total_pages(self, pager, fake_history):
        assert pager.total_pages(fake_history) == 4

    def test_total_pages_empty(self, pager):
        assert pager.total_pages([]) == 0

    def test_capacity_never_below_one(self):
        assert Paginator(page_capacity=0).page_capacity == 1


class TestTurnPage:
    @pytest.mark.parametrize(
        "current, expected, direction",
        [
            (1, 2, Direction.FORWARD),
            (2, 3, Direction.FORWARD),
            (3, 4, Direction.FORWARD),
            (4, 1, Direction.FORWARD),
            (4, 3, Direction.BACKWARD),
            (3, 2, Direction.BACKWARD),
            (2, 1, Direction.BACKWARD),
            (1, 4, Direction.BACKWARD),
        ],
    )
    def test_wraparound(self, pager, fake_history, current, expected, direction):
        pager.page = current
        pager.turn_page(fake_history, direction)
        assert pager.page == expected

    @pytest.mark.parametrize("direction", [Direction.FORWARD, Direction.BACKWARD])
    def test_no_pages(self, pager, direction):
        pager.turn_page([], direction)
        assert pager.page == 1


class TestMoveHighlighted:
    def test_down_within_page(self, pager, fake_history):
        pager.move_highlighted(fake_history, Direction.FORWARD)
        assert (pager.page, pager.highlighted) == (1, 1)

    def test_down_from_last_row_goes_to_next_page(self, pager, fake_history):
        pager.highlighted = 6
        pager.move_highlighted(fake_history, Direction.FORWARD)
        assert (pager.page, pager.highlighted) == (2, 0)

    def test_down_from_last_row_of_final_page_wraps(self, pager, fake_history):
        pager.page, pager.highlighted = 4, 4
        pager.move_highlighted(fake_history, Direction.FORWARD)
        assert (pager.page, pager.highlighted) == (1, 0)

    def test_up_from_first_row_lands_on_last_row_of_previous_page(self, pager, fake_history):
        pager.page = 2
        pager.move_highlighted(fake_history, Direction.BACKWARD)
        assert (pager.page, pager.highlighted) == (1, 6)

    def test_up_from_first_page_wraps_to_shorter_last_page(self, pager, fake_history):
        pager.move_highlighted(fake_history, Direction.BACKWARD)
        assert (pager.page, pager.highlighted) == (4, 4)

    def test_empty_is_noop(self, pager):
        pager.move_highlighted([], Direction.FORWARD)
        assert (pager.page, pager.highlighted) == (1, 0)

    def test_single_entry(self, pager):
        pager.move_highlighted(["ls"], Direction.FORWARD)
        assert (pager.page, pager.highlighted) == (1, 0)
        pager.move_highlighted(["ls"], Direction.BACKWARD)
        assert (pager.page, pager.highlighted) == (1, 0)


class TestRetainSelection:
    def test_last_row_moves_up(self, pager, fake_history):
        pager.highlighted = 6
        pager.retain_selection(fake_history)
        assert pager.highlighted == 5

    def test_other_rows_unchanged(self, pager, fake_history):
        pager.highlighted = 3
        pager.retain_selection(fake_history)
        assert pager.highlighted == 3

    def test_never_negative(self, pager):
        pager.retain_selection(["only"])
        assert pager.highlighted == 0


class TestSelected:
    def test_selected(self, pager, fake_history):
        pager.page, pager.highlighted = 2, 1
        assert pager.selected(fake_history) == "ping -c 10 www.google.com"

    def test_nothing_selected(self, pager):
        assert pager.selected([]) is None

    def test_display_page(self, pager, fake_history):
        assert pager.display_page(fake_history) == 1
        assert pager.display_page([]) == 0


class TestPageStateInvariant:
    @staticmethod
    def apply(pager, commands, step):
        if step.startswith("resize"):
            pager.page_capacity = int(step.split()[1])
        elif step == "down":
            pager.move_highlighted(commands, Direction.FORWARD)
        elif step == "up":
            pager.move_highlighted(commands, Direction.BACKWARD)
        elif step == "remove":
            selected = pager.selected(commands)
            pager.retain_selection(commands)
            commands.remove(selected)
            pager.step_back_past_end(commands)

    @pytest.mark.parametrize(
        "steps",
        [
            ["resize 3"] + ["down"] * 4 + ["remove", "resize 4", "up", "remove", "remove"],
            ["resize 4", "up"] + ["remove"] * 3 + ["down", "remove"],
            ["down"] * 9 + ["resize 2", "up"] + ["remove"] * 3 + ["resize 20", "down", "down"],
            ["resize 1", "up"] + ["remove"] * 9 + ["down"] * 3 + ["up"] * 2,
        ],
    )
    def test_highlight_stays_on_a_row(self, steps):
        commands = [f"cmd {i}" for i in range(10)]
        pager = Paginator(page_capacity=5)
        for step in steps:
            self.apply(pager, commands, step)
            assert 1 <= pager.page <= pager.total_pages(commands)
            assert 0 <= pager.highlighted < pager.page_size(commands)

    def test_resize_resets(self, pager):
        pager.page, pager.highlighted = 4, 4
        pager.page_capacity = 10
        assert (pager.page, pager.highlighted) == (1, 0)

    def test_same_capacity_keeps_position(self, pager):
        pager.page, pager.highlighted = 2, 3
        pager.page_capacity = 7
        assert (pager.page, pager.highlighted) == (2, 3)

    def test_step_back_past_end(self, pager):
        pager.page, pager.highlighted = 2, 0
        pager.step_back_past_end(["cmd"] * 7)
        assert (pager.page, pager.highlighted) == (1, 6)
