"""
Application constants for the Rookie Draft Board

Tunable values live in config.py. Everything here is static league data.
"""

# Football Positions (static)
POSITIONS = ['QB', 'RB', 'WR', 'TE', 'OL', 'DL', 'LB', 'CB', 'S', 'K', 'P', 'DEF']

# Tiers (static)
MIN_TIER = 1
MAX_TIER = 5
TIERS = [{'id': tier, 'name': f'Tier {tier}'} for tier in range(MIN_TIER, MAX_TIER + 1)]

# Grade bounds
MIN_GRADE = 0
MAX_GRADE = 100

# Sleeper import (rookies at fantasy skill positions only)
SLEEPER_ROOKIE_POSITIONS = ['QB', 'RB', 'WR', 'TE']
SLEEPER_POSITION_PRIORITY = {'QB': 1, 'RB': 2, 'WR': 3, 'TE': 4}
SLEEPER_DEFAULT_GRADES = {'QB': 80, 'RB': 78, 'WR': 76, 'TE': 72}
SLEEPER_FALLBACK_GRADE = 75
SLEEPER_DEFAULT_TIER = 3
SLEEPER_DEFAULT_ROUNDS = 4

# Export
CSV_HEADERS = ['Rank', 'Name', 'Position', 'School', 'Grade', 'Tier', 'Notes']
CSV_FILENAME = 'draft_board.csv'

# Sample prospects used to seed an empty board
SAMPLE_PROSPECTS = [
    {"name": "Caleb Williams", "position": "QB", "school": "USC", "grade": 95, "tier": 1,
     "notes": "Outstanding arm talent with mobility to extend plays. Natural leader with high football IQ."},
    {"name": "Marvin Harrison Jr.", "position": "WR", "school": "Ohio State", "grade": 94, "tier": 1,
     "notes": "Elite size-speed combination with exceptional route-running skills."},
    {"name": "Jayden Daniels", "position": "QB", "school": "LSU", "grade": 91, "tier": 2,
     "notes": "Dynamic dual-threat QB with improved passing accuracy."},
    {"name": "Malik Nabers", "position": "WR", "school": "LSU", "grade": 89, "tier": 2,
     "notes": "Explosive playmaker with excellent after-the-catch ability."},
    {"name": "Brock Bowers", "position": "TE", "school": "Georgia", "grade": 86, "tier": 3,
     "notes": "Athletic tight end with receiver-like skills."},
    {"name": "Rome Odunze", "position": "WR", "school": "Washington", "grade": 83, "tier": 3,
     "notes": "Great size and reliable hands. Polished route-runner."},
    {"name": "Drake Maye", "position": "QB", "school": "North Carolina", "grade": 79, "tier": 4,
     "notes": "Good arm talent but needs more consistency."},
    {"name": "Jonathon Brooks", "position": "RB", "school": "Texas", "grade": 72, "tier": 5,
     "notes": "Solid all-around back with good vision."},
]
