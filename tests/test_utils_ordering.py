"""
Tests for rank ordering helpers in utils/ordering.py

Covers reorder application, delete renumbering, insertion, drag-and-drop
permutations, and board filtering/sorting.
"""
import pytest

from exceptions import InvariantViolation, ValidationException
from models.player import ReorderItem
from utils.ordering import (
    FilterOptions,
    SortOption,
    apply_reorder,
    check_dense_order,
    filter_and_sort_players,
    insert_at_order,
    move_player,
    renumber_after_delete,
)
from tests.factories import PlayerFactory


def orders_by_id(players):
    return {p.id: p.order for p in players}


class TestCheckDenseOrder:
    """Tests for the dense-order invariant check."""

    def test_dense_passes(self):
        check_dense_order(PlayerFactory.board(4))

    def test_empty_passes(self):
        check_dense_order([])

    def test_gap_fails(self):
        players = [PlayerFactory.create(id=1, order=1), PlayerFactory.create(id=2, order=3)]
        with pytest.raises(InvariantViolation, match="not dense"):
            check_dense_order(players)

    def test_duplicate_fails(self):
        players = [PlayerFactory.create(id=1, order=1), PlayerFactory.create(id=2, order=1)]
        with pytest.raises(InvariantViolation, match="Duplicate"):
            check_dense_order(players)


class TestApplyReorder:
    """Tests for apply_reorder()."""

    def test_full_permutation(self):
        players = PlayerFactory.board(3)
        result = apply_reorder(players, [
            ReorderItem(id=1, order=3), ReorderItem(id=2, order=1), ReorderItem(id=3, order=2)
        ])
        assert [p.id for p in result] == [2, 3, 1]
        assert orders_by_id(result) == {1: 3, 2: 1, 3: 2}

    def test_swap_leaves_others_alone(self):
        players = PlayerFactory.board(4)
        result = apply_reorder(players, [ReorderItem(id=1, order=2), ReorderItem(id=2, order=1)])
        assert orders_by_id(result) == {1: 2, 2: 1, 3: 3, 4: 4}

    def test_inputs_not_mutated(self):
        players = PlayerFactory.board(2)
        apply_reorder(players, [ReorderItem(id=1, order=2), ReorderItem(id=2, order=1)])
        assert orders_by_id(players) == {1: 1, 2: 2}

    def test_unknown_ids_ignored(self):
        players = PlayerFactory.board(2)
        result = apply_reorder(players, [
            ReorderItem(id=1, order=2), ReorderItem(id=2, order=1), ReorderItem(id=99, order=3)
        ])
        assert orders_by_id(result) == {1: 2, 2: 1}

    def test_duplicate_target_rejected(self):
        players = PlayerFactory.board(3)
        with pytest.raises(InvariantViolation):
            apply_reorder(players, [ReorderItem(id=1, order=2), ReorderItem(id=3, order=2)])

    def test_partial_request_that_breaks_density_rejected(self):
        """Moving one player without moving the displaced one leaves a duplicate."""
        players = PlayerFactory.board(3)
        with pytest.raises(InvariantViolation):
            apply_reorder(players, [ReorderItem(id=3, order=1)])

    def test_order_below_one_rejected(self):
        with pytest.raises(ValidationException):
            apply_reorder(PlayerFactory.board(2), [ReorderItem(id=1, order=0)])


class TestRenumberAfterDelete:
    """Tests for renumber_after_delete()."""

    def test_only_higher_orders_shift(self):
        players = [p for p in PlayerFactory.board(5) if p.id != 3]
        result = renumber_after_delete(players, 3)
        assert orders_by_id(result) == {1: 1, 2: 2, 4: 3, 5: 4}
        check_dense_order(result)

    def test_delete_last(self):
        players = PlayerFactory.board(3)[:2]
        assert orders_by_id(renumber_after_delete(players, 3)) == {1: 1, 2: 2}


class TestInsertAtOrder:
    """Tests for insert_at_order()."""

    def test_insert_at_top(self):
        result = insert_at_order(PlayerFactory.board(3), 1)
        assert orders_by_id(result) == {1: 2, 2: 3, 3: 4}

    def test_insert_at_end(self):
        result = insert_at_order(PlayerFactory.board(3), 4)
        assert orders_by_id(result) == {1: 1, 2: 2, 3: 3}

    @pytest.mark.parametrize("order", [0, 5])
    def test_out_of_range(self, order):
        with pytest.raises(ValidationException):
            insert_at_order(PlayerFactory.board(3), order)


class TestMovePlayer:
    """Tests for drag-and-drop permutations."""

    def test_move_down(self):
        items = move_player(PlayerFactory.board(4), player_id=1, new_order=3)
        assert [(i.id, i.order) for i in items] == [(2, 1), (3, 2), (1, 3), (4, 4)]

    def test_move_up(self):
        items = move_player(PlayerFactory.board(4), player_id=4, new_order=1)
        assert [i.id for i in sorted(items, key=lambda i: i.order)] == [4, 1, 2, 3]

    def test_permutation_applies_cleanly(self):
        players = PlayerFactory.board(5)
        result = apply_reorder(players, move_player(players, 2, 5))
        assert [p.id for p in result] == [1, 3, 4, 5, 2]

    def test_unknown_player(self):
        with pytest.raises(ValidationException):
            move_player(PlayerFactory.board(2), player_id=9, new_order=1)

    def test_out_of_range(self):
        with pytest.raises(ValidationException):
            move_player(PlayerFactory.board(2), player_id=1, new_order=3)


class TestFilterAndSort:
    """Tests for filter_and_sort_players()."""

    @pytest.fixture
    def players(self):
        return [
            PlayerFactory.caleb_williams(),
            PlayerFactory.marvin_harrison(),
            PlayerFactory.brock_bowers(),
            PlayerFactory.create(id=4, name="Xavier Worthy", position="WR", school="Texas", grade=82, tier=2, order=4),
        ]

    def test_defaults_sort_by_rank(self, players):
        assert [p.id for p in filter_and_sort_players(reversed(players))] == [1, 2, 3, 4]

    def test_position_filter_case_insensitive(self, players):
        result = filter_and_sort_players(players, FilterOptions(position="wr"))
        assert [p.id for p in result] == [2, 4]

    def test_tier_filter(self, players):
        result = filter_and_sort_players(players, FilterOptions(tier="2"))
        assert [p.id for p in result] == [3, 4]

    def test_search_matches_name_or_school(self, players):
        assert [p.id for p in filter_and_sort_players(players, FilterOptions(search="georgia"))] == [3]
        assert [p.id for p in filter_and_sort_players(players, FilterOptions(search="WILL"))] == [1]

    def test_grade_sorts_best_first(self, players):
        result = filter_and_sort_players(players, sort=SortOption(field="grade"))
        assert [p.grade for p in result] == [95, 94, 88, 82]
        desc = filter_and_sort_players(players, sort=SortOption(field="grade", direction="desc"))
        assert [p.grade for p in desc] == [95, 94, 88, 82]

    def test_name_desc(self, players):
        result = filter_and_sort_players(players, sort=SortOption(field="name", direction="desc"))
        assert result[0].name == "Xavier Worthy"
        assert result[-1].name == "Brock Bowers"

    def test_bad_sort_field(self, players):
        with pytest.raises(ValidationException):
            filter_and_sort_players(players, sort=SortOption(field="speed"))

    def test_bad_tier_filter(self, players):
        with pytest.raises(ValidationException):
            filter_and_sort_players(players, FilterOptions(tier="top"))
