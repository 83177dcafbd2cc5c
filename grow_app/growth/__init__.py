"""
Growth domain: entities, the in-memory store and the tree layout.
"""

from grow_app.growth.models import Habit, Task, Goal, Challenge
from grow_app.growth.store import GrowthStore
from grow_app.growth.tree_layout import TreeLayoutEngine, TreeLayout

__all__ = ['Habit', 'Task', 'Goal', 'Challenge', 'GrowthStore', 'TreeLayoutEngine', 'TreeLayout']
