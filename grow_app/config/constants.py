# grow_app/config/constants.py

"""
Centralized configuration of the quantitative parameters used by the store
and the tree renderer.
"""

from typing import Dict, Final, List

# =====================================================================
# Progress
# =====================================================================
PROGRESS_MIN: Final[int] = 0
PROGRESS_MAX: Final[int] = 100
# RATIONALE: Goal progress is an integer percentage.

# =====================================================================
# Trunk (driven by habits)
# =====================================================================
TRUNK_BASE_WIDTH: Final[int] = 20
TRUNK_MAX_WIDTH: Final[int] = 120
TRUNK_WIDTH_PER_STREAK_DAY: Final[int] = 3
TRUNK_WIDTH_PER_COMPLETED_HABIT: Final[int] = 8
# RATIONALE: Streaks grow the trunk slowly, today's completions give a visible bump.

TRUNK_MIN_HEIGHT: Final[int] = 150
TRUNK_HEIGHT_PER_ROOT_GOAL: Final[int] = 30
TRUNK_HEIGHT_PER_COMPLETED_HABIT: Final[int] = 15

# =====================================================================
# Branches (driven by goals)
# =====================================================================
BRANCH_FIRST_OFFSET: Final[int] = 40
BRANCH_SPACING: Final[int] = 60
BRANCH_MIN_LENGTH: Final[int] = 50
BRANCH_MAX_LENGTH: Final[int] = 140
BRANCH_LENGTH_TAPER_PER_LEVEL: Final[int] = 25
BRANCH_BASE_ANGLE: Final[float] = 25.0
BRANCH_ANGLE_PER_LEVEL: Final[float] = 5.0
BRANCH_ANGLE_VARIATION: Final[float] = 5.0
BRANCH_SPREAD_FACTOR: Final[float] = 10.0
BRANCH_BASE_THICKNESS: Final[int] = 10
BRANCH_THICKNESS_TAPER_PER_LEVEL: Final[int] = 2
MAX_BRANCH_LEVEL: Final[int] = 3
# RATIONALE: Subgoals deeper than MAX_BRANCH_LEVEL are not drawn; the branch
# thickness would reach zero shortly after.

# =====================================================================
# Leaves (driven by tasks) and roots (driven by challenges)
# =====================================================================
LEAF_FIRST_OFFSET: Final[int] = 20
LEAF_SPACING: Final[int] = 25
LEAF_BASE_LIFT: Final[int] = 10
LEAF_STAGGER: Final[int] = 5
ROOT_ANGLE_STEP: Final[float] = -15.0

# =====================================================================
# Daily challenge catalogue
# =====================================================================
CHALLENGE_IDEAS: Final[List[Dict[str, str]]] = [
    {
        "title": "Mindful Breathing",
        "description": "Take 5 minutes to focus only on your breath, counting each inhale and exhale.",
    },
    {
        "title": "Gratitude Reflection",
        "description": "Write down three things you are grateful for today.",
    },
    {
        "title": "Digital Detox",
        "description": "Spend one hour completely disconnected from all digital devices.",
    },
    {
        "title": "Self-Compassion",
        "description": "Write down three positive things about yourself that you appreciate.",
    },
    {
        "title": "Nature Connection",
        "description": "Spend at least 15 minutes outside connecting with nature, observing details you normally miss.",
    },
]
