"""
UncompliGrow - personal growth tracking visualized as a tree.

This package provides:
- Habits with daily completion and streaks (the trunk)
- Hierarchical goals whose progress follows their tasks (branches and leaves)
- One-time wellness challenges (the roots)
- A FastAPI backend over an in-memory store and a Streamlit front end
"""

__version__ = "1.0.0"

from grow_app.growth.store import GrowthStore
from grow_app.growth.tree_layout import TreeLayoutEngine

# Define public API
__all__ = [
    'GrowthStore',
    'TreeLayoutEngine',
]
