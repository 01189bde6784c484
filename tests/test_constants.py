"""
Tests for application constants

Validates that static league data is internally consistent.
"""
from constants import (
    CSV_HEADERS,
    MAX_GRADE,
    MAX_TIER,
    MIN_GRADE,
    MIN_TIER,
    POSITIONS,
    SAMPLE_PROSPECTS,
    SLEEPER_DEFAULT_GRADES,
    SLEEPER_POSITION_PRIORITY,
    SLEEPER_ROOKIE_POSITIONS,
    TIERS,
)
from models.player import Position


class TestPositions:
    """Test position lists."""

    def test_positions_match_model_enum(self):
        assert POSITIONS == [p.value for p in Position]

    def test_sleeper_positions_are_board_positions(self):
        assert set(SLEEPER_ROOKIE_POSITIONS) <= set(POSITIONS)
        assert set(SLEEPER_POSITION_PRIORITY) == set(SLEEPER_ROOKIE_POSITIONS)
        assert set(SLEEPER_DEFAULT_GRADES) == set(SLEEPER_ROOKIE_POSITIONS)


class TestRanges:
    """Test grade and tier bounds."""

    def test_tiers(self):
        assert [t['id'] for t in TIERS] == list(range(MIN_TIER, MAX_TIER + 1))
        assert TIERS[0]['name'] == 'Tier 1'

    def test_sleeper_grades_in_range(self):
        assert all(MIN_GRADE <= g <= MAX_GRADE for g in SLEEPER_DEFAULT_GRADES.values())


class TestSampleProspects:
    """Test the seed data."""

    def test_sample_prospects_valid(self):
        assert len(SAMPLE_PROSPECTS) == 8
        for prospect in SAMPLE_PROSPECTS:
            assert prospect['position'] in POSITIONS
            assert MIN_GRADE <= prospect['grade'] <= MAX_GRADE
            assert MIN_TIER <= prospect['tier'] <= MAX_TIER

    def test_csv_headers(self):
        assert CSV_HEADERS[0] == 'Rank'
        assert len(CSV_HEADERS) == 7
