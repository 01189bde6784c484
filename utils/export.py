"""
CSV export for the draft board

The header row is written plain; every data value is double-quoted with
embedded quotes doubled, so notes containing commas, quotes or newlines
survive a round trip through parse_players_csv().
"""
import csv
import io
from typing import Any, Dict, Iterable, List

from constants import CSV_HEADERS
from exceptions import ValidationException
from models.player import Player


def export_players_csv(players: Iterable[Player]) -> str:
    """
    Render players as CSV text sorted by rank.

    Args:
        players: Players to export (any order)

    Returns:
        CSV text, rows separated by newlines
    """
    buffer = io.StringIO()
    header_writer = csv.writer(buffer, lineterminator='\n')
    row_writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')

    header_writer.writerow(CSV_HEADERS)
    for player in sorted(players, key=lambda p: p.order):
        row_writer.writerow([
            str(player.order),
            player.name,
            player.position,
            player.school,
            str(player.grade),
            str(player.tier),
            player.notes,
        ])

    return buffer.getvalue()


def parse_players_csv(text: str) -> List[Dict[str, Any]]:
    """
    Read CSV produced by export_players_csv() back into player field dicts.

    Returns:
        One dict per row with order/name/position/school/grade/tier/notes,
        numeric fields converted to int

    Raises:
        ValidationException: If the header is wrong or a numeric field is not a number
    """
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames != CSV_HEADERS:
        raise ValidationException(f"Unexpected CSV header: {reader.fieldnames}")

    rows = []
    for line_num, row in enumerate(reader, start=2):
        try:
            rows.append({
                'order': int(row['Rank']),
                'name': row['Name'],
                'position': row['Position'],
                'school': row['School'],
                'grade': int(row['Grade']),
                'tier': int(row['Tier']),
                'notes': row['Notes'],
            })
        except (TypeError, ValueError) as e:
            raise ValidationException(f"Invalid CSV row at line {line_num}: {e}")
    return rows
