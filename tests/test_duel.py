"""
Test suite for turn management.

Covers the per-turn state machine, rack handling, passing,
completion and result export.
"""

import json

import pytest

from crossduel.environment import Duel, GameConfig, LetterBag, StaticWordSource, ALPHABET
from crossduel.environment.sources import WordSource
from crossduel.engine import WordSourceUnavailable


def fill_all_except(duel, *skip):
    session = duel.session
    for word in session.words:
        for cell in word.cells:
            if cell not in skip:
                session.filled[tuple(cell)] = session.solution.letter_at(cell)


def give_rack(duel, letters, player=None):
    index = duel.session.current_player_index if player is None else player
    duel.session.players[index].rack = list(letters)


@pytest.fixture
def duel():
    return Duel.create(seed=42)


class FailingSource(WordSource):
    def fetch(self):
        raise WordSourceUnavailable("offline")


class BrokenSource(WordSource):
    def fetch(self):
        raise RuntimeError("boom")

    def hint_for(self, word):
        raise RuntimeError("boom")


class TestLetterBag:
    """Test cases for rack dealing."""

    def test_deal_rack(self):
        rack = LetterBag(seed=1).deal_rack()
        assert len(rack) == 5
        assert all(letter in ALPHABET for letter in rack)

    def test_seeded_reproducible(self):
        assert LetterBag(seed=3).draw(20) == LetterBag(seed=3).draw(20)

    def test_negative_draw(self):
        with pytest.raises(ValueError):
            LetterBag().draw(-1)


class TestSetup:
    """Test cases for creating a duel."""

    def test_defaults(self, duel):
        assert duel.session.strategy == "fixed"
        assert duel.phase == "AWAITING_PLACEMENTS"
        assert duel.session.current_player_index == 0
        assert [len(p.rack) for p in duel.session.players] == [5, 5]
        assert [p.score for p in duel.session.players] == [0, 0]

    def test_seeded_racks(self):
        first = Duel.create(seed=7)
        second = Duel.create(seed=7)
        assert [p.rack for p in first.session.players] == [p.rack for p in second.session.players]

    def test_rack_size_from_config(self):
        duel = Duel.create(config=GameConfig(rack_size=3))
        assert [len(p.rack) for p in duel.session.players] == [3, 3]

    def test_dynamic_with_static_source(self):
        duel = Duel.create(config=GameConfig(strategy="dynamic", seed=5), word_source=StaticWordSource())
        assert duel.session.strategy == "dynamic"
        assert len(duel.session.words) == 14

    def test_dynamic_with_failing_source_falls_back(self):
        duel = Duel.create(config=GameConfig(strategy="dynamic"), word_source=FailingSource())
        assert duel.session.strategy == "fixed"

    def test_dynamic_with_broken_source_falls_back(self):
        """Unexpected errors from a word source never abort game start."""
        duel = Duel.create(config=GameConfig(strategy="dynamic"), word_source=BrokenSource())
        assert duel.session.strategy == "fixed"
        assert duel.phase == "AWAITING_PLACEMENTS"

    def test_config_fields_as_keywords(self):
        duel = Duel.create(strategy="dynamic", source="bank", seed=1)
        assert duel.config.source == "bank"
        assert duel.config.seed == 1
        assert duel.session.strategy == "dynamic"
        assert len(duel.session.words) == 14

    def test_setup_clears_board(self):
        duel = Duel.create(seed=4)
        give_rack(duel, "SEE")
        for col in (1, 2, 3):
            duel.place_letter(0, (7, col))
        duel.submit_move()
        assert duel.session.completed_words

        duel.setup()
        assert duel.session.filled == {}
        assert duel.session.completed_words == set()
        assert [p.score for p in duel.session.players] == [0, 0]
        assert duel.get_view().completed_slots == []


class TestPlacing:
    """Test cases for placing and withdrawing letters."""

    def test_place_removes_from_rack(self, duel):
        give_rack(duel, "WIND")
        placement = duel.place_letter(1, (6, 2))
        assert placement.letter == "I"
        assert placement.rack_index == 1
        assert tuple(placement.target) == (6, 2)
        assert duel.current_player.rack == ["W", "N", "D"]
        assert len(duel.pending) == 1

    def test_place_on_pending_cell_replaces(self, duel):
        give_rack(duel, "WX")
        duel.place_letter(1, (6, 1))
        duel.place_letter(0, (6, 1))
        assert [p.letter for p in duel.pending] == ["W"]
        assert duel.current_player.rack == ["X"]

    def test_bad_rack_index(self, duel):
        with pytest.raises(ValueError):
            duel.place_letter(9, (1, 1))

    def test_off_grid(self, duel):
        with pytest.raises(ValueError):
            duel.place_letter(0, (9, 1))

    def test_withdraw(self, duel):
        give_rack(duel, "WIND")
        duel.place_letter(0, (6, 1))
        assert duel.withdraw_letter((6, 1)) == "W"
        assert duel.pending == []
        assert duel.current_player.rack == ["I", "N", "D", "W"]

    def test_withdraw_nothing(self, duel):
        with pytest.raises(ValueError):
            duel.withdraw_letter((6, 1))

    def test_view_shows_pending(self, duel):
        give_rack(duel, "W")
        duel.place_letter(0, (6, 1))
        cell = duel.get_view().cell(6, 1)
        assert cell.letter == "W"
        assert cell.pending is True


class TestSubmit:
    """Test cases for the submit state machine."""

    def test_empty_submit(self, duel):
        result = duel.submit_move()
        assert result.reason == "NO_LETTERS_PLACED"
        assert duel.phase == "AWAITING_PLACEMENTS"
        assert duel.session.current_player_index == 0

    def test_accepted_advances_turn(self, duel):
        give_rack(duel, "WINDX")
        for col in range(1, 5):
            duel.place_letter(0, (6, col))
        result = duel.submit_move()
        assert result.accepted is True
        assert result.score_delta == 4
        assert duel.session.players[0].score == 4
        assert duel.session.current_player_index == 1
        assert duel.pending == []
        assert duel.session.filled[(6, 1)] == "W"
        assert duel.current_turn == 1

    def test_wrong_letters_show_error(self, duel):
        give_rack(duel, "WXZ")
        duel.place_letter(0, (6, 1))
        duel.place_letter(0, (6, 2))
        result = duel.submit_move()
        assert result.reason == "WRONG_LETTERS"
        assert duel.phase == "SHOWING_ERROR"
        assert duel.session.current_player_index == 0
        with pytest.raises(ValueError):
            duel.place_letter(0, (6, 3))
        with pytest.raises(ValueError):
            duel.submit_move()

    def test_revert_keeps_correct_letters(self, duel):
        give_rack(duel, "WXZ")
        duel.place_letter(0, (6, 1))
        duel.place_letter(0, (6, 2))
        duel.submit_move()

        cleared = duel.revert_mismatches()
        assert cleared == [(6, 2)]
        assert [tuple(p.target) for p in duel.pending] == [(6, 1)]
        assert duel.current_player.rack == ["Z", "X"]
        assert duel.phase == "AWAITING_PLACEMENTS"
        assert duel.session.current_player_index == 0
        assert duel.session.filled == {}

    def test_revert_only_after_rejection(self, duel):
        with pytest.raises(ValueError):
            duel.revert_mismatches()

    def test_wait_and_revert_uses_delay(self, duel):
        give_rack(duel, "X")
        duel.place_letter(0, (6, 1))
        duel.submit_move()

        waited = []
        duel.wait_and_revert(sleep=waited.append)
        assert waited == [3.0]
        assert duel.phase == "AWAITING_PLACEMENTS"

    def test_refill_when_next_rack_empty(self, duel):
        give_rack(duel, "", player=1)
        give_rack(duel, "W")
        duel.place_letter(0, (6, 1))
        duel.submit_move()
        assert len(duel.session.players[1].rack) == 5
        assert duel.turn_history[-1].refilled is True

    def test_own_empty_rack_waits_for_turn(self, duel):
        """A rack emptied by a move is refilled only when that player is next."""
        give_rack(duel, "W")
        duel.place_letter(0, (6, 1))
        duel.submit_move()
        assert duel.session.players[0].rack == []

        duel.pass_turn()
        assert len(duel.session.players[0].rack) == 5

    def test_turn_history(self, duel):
        give_rack(duel, "WX")
        duel.place_letter(1, (6, 2))
        duel.submit_move()
        duel.revert_mismatches()
        duel.place_letter(0, (6, 1))
        duel.submit_move()
        assert [t.result.accepted for t in duel.turn_history] == [False, True]
        assert duel.turn_history[-1].rack_after == ["X"]


class TestPass:
    """Test cases for passing."""

    def test_pass_returns_pending(self, duel):
        give_rack(duel, "WI")
        duel.place_letter(0, (6, 1))
        turn = duel.pass_turn()
        assert turn.action == "PASS"
        assert duel.session.players[0].rack == ["I", "W"]
        assert duel.session.current_player_index == 1
        assert duel.pending == []


class TestCompletion:
    """Test cases for finishing a duel."""

    def test_last_word_completes_duel(self, duel):
        fill_all_except(duel, (1, 1))
        for word in duel.session.words:
            if (1, 1) not in word.cells:
                duel.session.completed_words.add(word.word_id)

        give_rack(duel, "T")
        duel.place_letter(0, (1, 1))
        result = duel.submit_move()

        assert result.score_delta == 10
        assert duel.is_complete
        assert duel.winner_index() == 0
        with pytest.raises(ValueError):
            duel.pass_turn()

        summary = duel.get_result()
        assert summary.winner == "p1"
        assert summary.is_draw is False
        assert summary.solution[6] == ".WIND...."
        assert "H:TRAUM@1,1" in summary.completed_words


class TestResults:
    """Test cases for state and result export."""

    def test_result_hides_solution_while_playing(self, duel):
        result = duel.get_result()
        assert result.solution is None
        assert result.is_complete is False
        assert result.scores == {"p1": 0, "p2": 0}
        assert result.player_names == {"p1": "Player 1", "p2": "Player 2"}

    def test_save_result(self, duel, tmp_path):
        give_rack(duel, "SEE")
        for col in (1, 2, 3):
            duel.place_letter(0, (7, col))
        duel.submit_move()

        path = tmp_path / "out" / "duel.json"
        duel.save_result(path)
        data = json.loads(path.read_text())
        assert data["scores"] == {"p1": 3, "p2": 0}
        assert data["completed_words"] == ["H7"]
        assert data["total_turns"] == 1
        assert data["solution"] is None

    def test_get_state(self, duel):
        state = duel.get_state()
        assert state["phase"] == "AWAITING_PLACEMENTS"
        assert state["current_player"] == 0
        assert len(state["racks"]) == 2
