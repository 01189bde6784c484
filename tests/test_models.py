"""
Tests for Pydantic models

Validates model creation, validation, and serialization.
"""
import pytest
from pydantic import ValidationError

from models import (
    BoardSlot,
    DraftRound,
    PickTrade,
    Player,
    PlayerCreate,
    PlayerUpdate,
    Position,
    ReorderItem,
    Team,
)
from models.sleeper import ImportedProspect, LeagueImport, SleeperDraft, SleeperPlayer
from tests.factories import PickRecordFactory, PlayerFactory


class TestPlayerModel:
    """Test Player model functionality."""

    def test_player_creation_with_defaults(self):
        """Grade, tier, school and notes default when omitted."""
        player = Player(id=1, name="Xavier Worthy", position="WR", order=1)

        assert player.grade == 75
        assert player.tier == 3
        assert player.school == ""
        assert player.notes == ""
        assert player.rank == 1

    def test_position_is_normalized(self):
        """Positions are upper-cased and stored as plain strings."""
        player = Player(id=1, name="Test", position=" qb ", order=1)
        assert player.position == "QB"
        assert player.position == Position.QB.value

    def test_unknown_position_rejected(self):
        """Only the twelve board positions are accepted."""
        with pytest.raises(ValidationError):
            Player(id=1, name="Test", position="FB", order=1)

    @pytest.mark.parametrize("grade", [-1, 101])
    def test_grade_range(self, grade):
        """Grade must be within 0-100."""
        with pytest.raises(ValidationError):
            Player(id=1, name="Test", position="QB", grade=grade, order=1)

    @pytest.mark.parametrize("tier", [0, 6])
    def test_tier_range(self, tier):
        """Tier must be within 1-5."""
        with pytest.raises(ValidationError):
            Player(id=1, name="Test", position="QB", tier=tier, order=1)

    def test_order_must_be_positive(self):
        """Rank is 1-based."""
        with pytest.raises(ValidationError):
            Player(id=1, name="Test", position="QB", order=0)

    def test_blank_name_rejected(self):
        """Whitespace-only names are rejected and names are stripped."""
        with pytest.raises(ValidationError):
            Player(id=1, name="   ", position="QB", order=1)
        assert Player(id=1, name="  Bo Nix ", position="QB", order=1).name == "Bo Nix"

    def test_none_notes_become_empty(self):
        """Null notes from JSON are stored as empty strings."""
        player = Player(id=1, name="Test", position="QB", order=1, notes=None)
        assert player.notes == ""

    def test_validate_assignment(self):
        """Assignments are validated too."""
        player = PlayerFactory.create()
        with pytest.raises(ValidationError):
            player.grade = 150

    def test_from_api_data(self):
        """Test creating player from API data."""
        player = Player.from_api_data({
            'id': 7, 'name': 'Rome Odunze', 'position': 'WR', 'school': 'Washington',
            'grade': 91, 'tier': 1, 'notes': '', 'order': 3
        })
        assert player.id == 7
        assert player.order == 3

    def test_from_api_data_empty(self):
        """Empty payloads are rejected."""
        with pytest.raises(ValueError):
            Player.from_api_data({})

    def test_str(self):
        player = PlayerFactory.caleb_williams()
        assert str(player) == "#1 Caleb Williams (QB)"


class TestPlayerPayloads:
    """Test create/update/reorder payload models."""

    def test_create_without_order(self):
        payload = PlayerCreate(name="Test", position="rb")
        assert payload.order is None
        assert payload.position == "RB"

    def test_create_ignores_extra_fields(self):
        payload = PlayerCreate(name="Test", position="RB", id=99, unknown="x")
        assert "id" not in payload.model_dump()

    def test_update_changes_only_supplied_fields(self):
        update = PlayerUpdate(grade=80, notes="Fast")
        assert update.changes() == {'grade': 80, 'notes': 'Fast'}

    def test_update_ignores_id_and_order(self):
        update = PlayerUpdate.model_validate({'id': 5, 'order': 2, 'tier': 1})
        assert update.changes() == {'tier': 1}

    def test_update_validates_ranges(self):
        with pytest.raises(ValidationError):
            PlayerUpdate(tier=9)

    def test_reorder_item(self):
        item = ReorderItem.model_validate({'id': 3, 'order': 1})
        assert (item.id, item.order) == (3, 1)


class TestTeamModel:
    """Test Team model."""

    def test_default_team(self):
        team = Team.default(4)
        assert team.id == 4
        assert team.name == "Team 4"
        assert team.roster_id is None

    def test_team_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Team(id=0, name="Nobody")

    def test_team_name_required(self):
        with pytest.raises(ValidationError):
            Team(id=1, name="  ")


class TestDraftPickModels:
    """Test PickRecord and board models."""

    def test_pick_record_player_id(self):
        record = PickRecordFactory.create(player=PlayerFactory.brock_bowers())
        assert record.player_id == 3
        assert "Brock Bowers" in str(record)

    def test_board_slot_traded_and_selected(self):
        slot = BoardSlot(
            round=1, pick_number=5, position=5,
            original_team_id=5, owning_team_id=2,
            player=PlayerFactory.create()
        )
        assert slot.is_traded is True
        assert slot.is_selected is True

        data = slot.to_dict()
        assert data['is_traded'] is True
        assert data['is_selected'] is True
        assert data['owning_team_id'] == 2

    def test_board_slot_untouched(self):
        slot = BoardSlot(round=1, pick_number=1, position=1, original_team_id=1, owning_team_id=1)
        assert slot.is_traded is False
        assert slot.is_selected is False
        assert slot.to_dict()['player'] is None

    def test_draft_round_to_dict(self):
        slot = BoardSlot(round=2, pick_number=3, position=1, original_team_id=2, owning_team_id=2)
        data = DraftRound(round=2, picks=[slot]).to_dict()
        assert data['round'] == 2
        assert data['picks'][0]['pick_number'] == 3


class TestPickTradeModel:
    """Test PickTrade model."""

    def test_description(self):
        trade = PickTrade(from_team_id=1, to_team_id=2, from_picks=[5], to_picks=[9, 12])
        assert trade.pick_count == 3
        assert trade.description == "Team 1 sends #5 to Team 2 for #9, #12"
        assert str(trade) == trade.description


class TestSleeperModels:
    """Test Sleeper payload models."""

    def test_player_full_name_and_rookie(self):
        player = SleeperPlayer.from_api_data({
            'player_id': '11565', 'first_name': 'Jayden', 'last_name': 'Daniels',
            'position': 'QB', 'years_exp': 0, 'college': 'LSU', 'search_rank': 12
        })
        assert player.full_name == "Jayden Daniels"
        assert player.is_rookie is True

    def test_player_null_names(self):
        player = SleeperPlayer(player_id='DAL', first_name=None, last_name=None, position='DEF')
        assert player.full_name == ""

    def test_draft_rounds_and_status(self):
        draft = SleeperDraft(draft_id='d1', status='pre_draft', settings={'rounds': 5})
        assert draft.rounds == 5
        assert draft.has_started is False
        assert SleeperDraft(draft_id='d2', status='drafting').has_started is True
        assert SleeperDraft(draft_id='d3').rounds is None

    def test_prospect_to_player_fields(self):
        prospect = ImportedProspect(
            sleeper_player_id='1', name='Brock Bowers', position='TE', grade=72, tier=3
        )
        fields = prospect.to_player_fields()
        assert 'sleeper_player_id' not in fields
        assert fields['school'] == 'Unknown'

    def test_league_import_defaults(self):
        league = LeagueImport(league_id='L1', teams=[Team.default(1)], prospects=[], rounds=4)
        assert league.draft_history == []
        assert league.league_name == ""
