"""
Tests for LiveDraftService

Covers the clock, draft/undo, trades affecting who picks, board views and
league import.
"""
import pytest

from exceptions import (
    DraftException,
    PlayerNotFoundError,
    TeamNotFoundError,
    TradeException,
    ValidationException,
)
from models.sleeper import ImportedPick, ImportedProspect, LeagueImport
from services.live_draft_service import LiveDraftService
from utils.draft_helpers import DraftMode
from utils.ordering import FilterOptions, SortOption
from tests.factories import StoreFactory, TeamFactory


@pytest.fixture
def draft() -> LiveDraftService:
    """Four teams, two rounds, linear order, ten players on the board."""
    return LiveDraftService(StoreFactory.create(10), team_count=4, round_count=2, mode='linear')


class TestDraftSettings:
    """Test settings and configure()."""

    def test_defaults_from_config(self):
        service = LiveDraftService(StoreFactory.create(1))
        assert service.team_count == 12
        assert service.round_count == 4
        assert service.mode == DraftMode.LINEAR
        assert service.total_picks == 48

    def test_unknown_mode(self):
        with pytest.raises(ValidationException, match="Unknown draft mode"):
            LiveDraftService(StoreFactory.create(1), mode='auction')

    @pytest.mark.parametrize("counts", [{'team_count': 0}, {'round_count': 0}])
    def test_explicit_zero_counts_rejected(self, counts):
        with pytest.raises(ValidationException, match="must be at least 1"):
            LiveDraftService(StoreFactory.create(1), **counts)

    def test_configure_resets_picks_and_trades(self, draft):
        draft.draft_player(1)
        draft.trade_picks(1, 2, [5], [6])
        draft.rename_team(1, 'Gridiron Gurus')

        state = draft.configure(team_count=6, mode='snake')

        assert state['team_count'] == 6
        assert state['mode'] == 'snake'
        assert state['picks_made'] == 0
        assert state['current_pick'] == 1
        assert draft.trade_ledger.traded_picks == {}
        assert draft.get_team(1).name == 'Gridiron Gurus'
        assert draft.get_team(6).name == 'Team 6'

    def test_configure_rejects_zero_teams(self, draft):
        with pytest.raises(ValidationException):
            draft.configure(team_count=0)
        assert draft.team_count == 4


class TestDraftClock:
    """Test who is on the clock."""

    def test_linear_order(self, draft):
        on_clock = []
        for player_id in range(1, 6):
            on_clock.append(draft.team_on_clock().id)
            draft.draft_player(player_id)
        assert on_clock == [1, 2, 3, 4, 1]

    def test_snake_order(self, draft):
        draft.configure(mode='snake')
        on_clock = []
        for player_id in range(1, 7):
            on_clock.append(draft.team_on_clock().id)
            draft.draft_player(player_id)
        assert on_clock == [1, 2, 3, 4, 4, 3]

    def test_traded_pick_changes_team_on_clock(self, draft):
        draft.trade_picks(1, 3, [1], [7])

        assert draft.team_on_clock().id == 3
        record = draft.draft_player(1)
        assert record.team_id == 3
        assert draft.owner_of_pick(7) == 1

    def test_state_snapshot(self, draft):
        state = draft.state()
        assert state['current_round'] == 1
        assert state['team_on_clock']['id'] == 1
        assert state['last_pick'] is None
        assert state['is_complete'] is False

    def test_complete_draft(self, draft):
        for player_id in range(1, 9):
            draft.draft_player(player_id)

        assert draft.is_complete
        assert draft.team_on_clock() is None
        assert draft.state()['current_round'] is None
        with pytest.raises(DraftException, match="Draft is complete"):
            draft.draft_player(9)


class TestDraftAndUndo:
    """Test selections and undo."""

    def test_draft_removes_player_from_available(self, draft):
        draft.draft_player(3)
        assert 3 not in [p.id for p in draft.available_players()]
        assert len(draft.available_players()) == 9

    def test_draft_unknown_player(self, draft):
        with pytest.raises(PlayerNotFoundError):
            draft.draft_player(99)
        assert draft.current_pick == 1

    def test_draft_already_taken(self, draft):
        draft.draft_player(1)
        with pytest.raises(DraftException, match="already been drafted"):
            draft.draft_player(1)

    def test_undo_restores_state(self, draft):
        draft.draft_player(1)
        before = draft.state()
        draft.draft_player(2)

        undone = draft.undo_last_pick()

        assert undone.player_id == 2
        assert draft.state() == before
        assert 2 in [p.id for p in draft.available_players()]

    def test_undo_empty(self, draft):
        with pytest.raises(DraftException, match="No picks to undo"):
            draft.undo_last_pick()

    def test_available_players_filters(self, draft):
        draft.player_store.update_player(4, {'position': 'QB'})
        draft.player_store.update_player(6, {'position': 'QB', 'grade': 90})

        result = draft.available_players(FilterOptions(position='qb'), SortOption(field='grade'))
        assert [p.id for p in result] == [6, 4]


class TestTeams:
    """Test team lookups and renames."""

    def test_rename_team(self, draft):
        assert draft.rename_team(2, '  Dynasty Dawgs ').name == 'Dynasty Dawgs'

    def test_rename_blank(self, draft):
        with pytest.raises(ValidationException):
            draft.rename_team(2, '   ')
        assert draft.get_team(2).name == 'Team 2'

    def test_unknown_team(self, draft):
        with pytest.raises(TeamNotFoundError):
            draft.team_picks(9)

    def test_team_picks(self, draft):
        draft.draft_player(1)
        draft.draft_player(2)
        draft.draft_player(3)
        draft.draft_player(4)
        draft.draft_player(5)
        assert [r.player_id for r in draft.team_picks(1)] == [1, 5]


class TestTradesAndBoard:
    """Test trades and the derived board."""

    def test_used_pick_cannot_be_traded(self, draft):
        draft.draft_player(1)
        with pytest.raises(TradeException, match="already been used"):
            draft.trade_picks(1, 2, [1], [2])

    def test_board_reflects_trades_and_picks(self, draft):
        draft.trade_picks(1, 2, [5], [2])
        draft.draft_player(7)

        board = draft.draft_board()
        assert len(board) == 2
        first = board[0].picks[0]
        assert first.player.id == 7
        assert first.is_active is False
        assert board[0].picks[1].owning_team_id == 1
        assert board[0].picks[1].is_active is True
        assert board[1].picks[0].owning_team_id == 2
        assert board[1].picks[0].is_traded

    def test_team_owned_picks(self, draft):
        draft.trade_picks(1, 2, [5], [2])

        owned = draft.team_owned_picks(1)
        assert [(p.pick_number, p.status) for p in owned] == [(1, 'owned'), (2, 'traded-for')]
        assert [p.pick_number for p in draft.team_owned_picks(2)] == [5, 6]


def make_league(**overrides) -> LeagueImport:
    data = {
        'league_id': '1180257270885261312',
        'league_name': 'Dynasty Degens',
        'teams': TeamFactory.league(3),
        'prospects': [
            ImportedProspect(sleeper_player_id='11566', name='Caleb Williams', position='QB', school='USC', grade=80, tier=3),
            ImportedProspect(sleeper_player_id='11628', name='Marvin Harrison', position='WR', school='Ohio State', grade=76, tier=3),
            ImportedProspect(sleeper_player_id='11604', name='Brock Bowers', position='TE', school='Georgia', grade=72, tier=3),
        ],
        'draft_history': [
            ImportedPick(pick_number=2, round=1, team_id=2, sleeper_player_id='11604'),
            ImportedPick(pick_number=1, round=1, team_id=1, sleeper_player_id='11628'),
        ],
        'rounds': 3,
    }
    data.update(overrides)
    return LeagueImport(**data)


class TestLoadLeague:
    """Test replacing the draft with a league import."""

    def test_load_league(self, draft):
        state = draft.load_league(make_league())

        assert state['team_count'] == 3
        assert state['round_count'] == 3
        assert state['current_pick'] == 3
        assert state['picks_made'] == 2
        assert state['league_id'] == '1180257270885261312'
        assert [p.name for p in draft.player_store.list_players()] == [
            'Caleb Williams', 'Marvin Harrison', 'Brock Bowers'
        ]
        assert [p.name for p in draft.available_players()] == ['Caleb Williams']
        assert draft.team_picks(2)[0].player.name == 'Brock Bowers'

    @pytest.mark.parametrize("history,error,match", [
        ([ImportedPick(pick_number=1, round=1, team_id=1, sleeper_player_id='9999')],
         ValidationException, "unknown player"),
        ([ImportedPick(pick_number=1, round=1, team_id=4, sleeper_player_id='11566')],
         ValidationException, "unknown team 4"),
        ([ImportedPick(pick_number=10, round=4, team_id=1, sleeper_player_id='11566')],
         ValidationException, "outside the draft"),
        ([ImportedPick(pick_number=1, round=1, team_id=1, sleeper_player_id='11566'),
          ImportedPick(pick_number=2, round=1, team_id=2, sleeper_player_id='11566')],
         DraftException, "same player"),
        ([ImportedPick(pick_number=2, round=1, team_id=1, sleeper_player_id='11566'),
          ImportedPick(pick_number=2, round=1, team_id=2, sleeper_player_id='11628')],
         DraftException, "repeat a pick number"),
    ])
    def test_rejected_history_changes_nothing(self, draft, history, error, match):
        draft.draft_player(1)
        draft.trade_picks(1, 2, [5], [6])
        names_before = [p.name for p in draft.player_store.list_players()]

        with pytest.raises(error, match=match):
            draft.load_league(make_league(draft_history=history))

        assert draft.team_count == 4
        assert draft.round_count == 2
        assert [p.name for p in draft.player_store.list_players()] == names_before
        assert draft.current_pick == 2
        assert draft.trade_ledger.traded_picks == {5: 2, 6: 1}
        assert draft.league_id is None

    def test_teams_must_be_dense(self, draft):
        with pytest.raises(ValidationException):
            draft.load_league(make_league(teams=[TeamFactory.create(id=1), TeamFactory.create(id=3)]))

    def test_no_teams(self, draft):
        with pytest.raises(ValidationException, match="no teams"):
            draft.load_league(make_league(teams=[]))
