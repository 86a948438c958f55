"""Tests for the selector state and the option menus."""

import pytest
import readchar

from clytia.errors import Cancelled, NoOptionsError
from clytia.selector import (
    Choice,
    CursorPolicy,
    MultiChoice,
    OptionsMenu,
    SelectorState,
    confirm,
)

UP = readchar.key.UP
DOWN = readchar.key.DOWN
SPACE = " "
ENTER = "\r"
ESC = "\x1b"


def _state(labels, policy=CursorPolicy.WRAP):
    return SelectorState([Choice.of(label) for label in labels], policy)


class TestSelectorState:
    @pytest.mark.parametrize("presses", range(8))
    def test_down_wraps(self, presses):
        state = _state(["A", "B", "C"])
        for _ in range(presses):
            state.move_down()
        assert state.cursor == presses % 3

    @pytest.mark.parametrize("presses", range(8))
    def test_down_clamps(self, presses):
        state = _state(["A", "B", "C"], CursorPolicy.CLAMP)
        for _ in range(presses):
            state.move_down()
        assert state.cursor == min(presses, 2)

    def test_up_from_first_wraps_to_last(self):
        state = _state(["A", "B", "C"])
        state.move_up()
        assert state.cursor == 2

    def test_up_from_first_clamps(self):
        state = _state(["A", "B", "C"], CursorPolicy.CLAMP)
        state.move_up()
        assert state.cursor == 0

    def test_up_decrements_down_increments(self):
        state = _state(["A", "B", "C"])
        state.move_down()
        assert state.cursor == 1
        state.move_up()
        assert state.cursor == 0

    def test_double_toggle_restores_selection(self):
        state = _state(["A", "B"])
        state.choices[1].selected = True
        state.move_down()

        state.toggle()
        state.toggle()

        assert state.choices[1].selected is True
        assert state.choices[0].selected is False

    def test_toggle_all(self):
        state = _state(["A", "B", "C"])
        state.toggle_all()
        assert state.selected_values() == ["A", "B", "C"]
        state.toggle_all()
        assert state.selected_values() == []

    def test_home_and_end(self):
        state = _state(["A", "B", "C"])
        state.end()
        assert state.cursor == 2
        state.home()
        assert state.cursor == 0

    def test_initial_cursor_is_clamped(self):
        state = SelectorState([Choice.of("A"), Choice.of("B")], cursor=10)
        assert state.cursor == 1

    def test_empty_state_is_inert(self):
        state = _state([])
        state.move_down()
        state.toggle()
        assert state.cursor == 0
        assert state.current is None
        assert state.selected_values() == []


class TestMultiChoice:
    def test_down_down_toggle_confirm_selects_third(self, make_terminal):
        terminal, buf = make_terminal(keys=[DOWN, DOWN, SPACE, ENTER])
        menu = MultiChoice(terminal, ["A", "B", "C"])

        assert menu.show() == ["C"]
        assert menu.state.cursor == 2
        assert "[X] C" in buf.getvalue()

    def test_up_then_down_returns_to_first(self, make_terminal):
        terminal, _ = make_terminal(keys=[DOWN, UP, SPACE, ENTER])
        assert MultiChoice(terminal, ["A", "B", "C"]).show() == ["A"]

    def test_up_from_top_wraps_to_bottom(self, make_terminal):
        terminal, _ = make_terminal(keys=[UP, SPACE, ENTER])
        assert MultiChoice(terminal, ["A", "B", "C"]).show() == ["C"]

    def test_up_from_top_clamps(self, make_terminal):
        terminal, _ = make_terminal(keys=[UP, SPACE, ENTER])
        menu = MultiChoice(terminal, ["A", "B", "C"], policy=CursorPolicy.CLAMP)
        assert menu.show() == ["A"]

    @pytest.mark.parametrize("presses", range(7))
    def test_down_n_times_matches_policy(self, make_terminal, presses):
        keys = [DOWN] * presses + [SPACE, ENTER]

        terminal, _ = make_terminal(keys=keys)
        wrap = MultiChoice(terminal, ["A", "B", "C"])
        wrap.show()
        assert wrap.state.cursor == presses % 3

        terminal, _ = make_terminal(keys=keys)
        clamp = MultiChoice(terminal, ["A", "B", "C"], policy=CursorPolicy.CLAMP)
        clamp.show()
        assert clamp.state.cursor == min(presses, 2)

    def test_initial_selection_is_kept(self, make_terminal):
        terminal, _ = make_terminal(keys=[ENTER])
        menu = MultiChoice(terminal, ["A", "B", "C"], selected=[True, False, True])
        assert menu.show() == ["A", "C"]

    def test_results_in_list_order(self, make_terminal):
        terminal, _ = make_terminal(keys=[DOWN, DOWN, SPACE, UP, UP, SPACE, ENTER])
        assert MultiChoice(terminal, ["A", "B", "C"]).show() == ["A", "C"]

    def test_toggle_all_key(self, make_terminal):
        terminal, _ = make_terminal(keys=["a", ENTER])
        assert MultiChoice(terminal, ["A", "B"]).show() == ["A", "B"]

    def test_unbound_keys_are_ignored(self, make_terminal):
        terminal, _ = make_terminal(keys=["x", "z", ENTER])
        assert MultiChoice(terminal, ["A", "B"]).show() == []

    def test_values_need_not_be_strings(self, make_terminal):
        terminal, _ = make_terminal(keys=[SPACE, ENTER])
        options = [Choice(value=1, label="one"), Choice(value=2, label="two")]
        assert MultiChoice(terminal, options).show() == [1]

    def test_caller_choices_are_not_mutated(self, make_terminal):
        terminal, _ = make_terminal(keys=[SPACE, DOWN, SPACE, ENTER])
        options = [Choice(value="a", label="A", selected=True), Choice(value="b", label="B")]

        assert MultiChoice(terminal, options).show() == ["b"]
        assert options[0].selected is True
        assert options[1].selected is False

    def test_selected_flags_apply_to_choice_objects(self, make_terminal):
        terminal, _ = make_terminal(keys=[ENTER])
        options = [Choice(value="a", label="A"), Choice(value="b", label="B")]
        assert MultiChoice(terminal, options, selected=[False, True]).show() == ["b"]

    def test_escape_cancels(self, make_terminal):
        terminal, _ = make_terminal(keys=[DOWN, ESC])
        with pytest.raises(Cancelled):
            MultiChoice(terminal, ["A", "B"]).show()

    def test_interrupt_cancels_and_restores_cursor(self, make_terminal):
        terminal, buf = make_terminal(keys=[KeyboardInterrupt])
        with pytest.raises(Cancelled):
            MultiChoice(terminal, ["A", "B"]).show()
        assert buf.getvalue().endswith("\x1b[?25h")

    def test_empty_options_returns_without_reading(self, make_terminal):
        terminal, _ = make_terminal(keys=[])
        assert MultiChoice(terminal, []).show() == []

    def test_selected_length_must_match(self, make_terminal):
        terminal, _ = make_terminal()
        with pytest.raises(ValueError):
            MultiChoice(terminal, ["A", "B"], selected=[True])

    def test_long_list_scrolls(self, make_terminal):
        terminal, _ = make_terminal(height=10)
        menu = MultiChoice(terminal, [f"item {i}" for i in range(50)])
        menu.state.end()

        lines = [text.plain for text in menu.render().renderables]

        assert "  ↑ 44 more" in lines
        assert "[ ] item 49" in lines
        assert "[ ] item 0" not in lines


class TestOptionsMenu:
    def test_down_enter_picks_second(self, make_terminal):
        terminal, buf = make_terminal(keys=[DOWN, ENTER])
        assert OptionsMenu(terminal, ["cats", "dogs", "both"]).show() == "dogs"
        assert "=> dogs" in buf.getvalue()

    def test_space_does_not_select(self, make_terminal):
        terminal, _ = make_terminal(keys=[SPACE, DOWN, ENTER])
        assert OptionsMenu(terminal, ["cats", "dogs"]).show() == "dogs"

    def test_empty_options_raises(self, make_terminal):
        terminal, _ = make_terminal()
        with pytest.raises(NoOptionsError):
            OptionsMenu(terminal, []).show()

    def test_cancel(self, make_terminal):
        terminal, _ = make_terminal(keys=["q"])
        with pytest.raises(Cancelled):
            OptionsMenu(terminal, ["cats"]).show()


class TestConfirm:
    def test_default_no(self, make_terminal):
        terminal, _ = make_terminal(keys=[ENTER])
        assert confirm(terminal, "Proceed?") is False

    def test_default_yes(self, make_terminal):
        terminal, _ = make_terminal(keys=[ENTER])
        assert confirm(terminal, "Proceed?", default=True) is True

    def test_move_to_yes(self, make_terminal):
        terminal, _ = make_terminal(keys=[UP, ENTER])
        assert confirm(terminal, "Proceed?") is True
