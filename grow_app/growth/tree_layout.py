# grow_app/growth/tree_layout.py

"""
Deterministic layout of the growth tree.

Habits shape the trunk, root goals become branches split between the left and
right side of the trunk, subgoals become sub-branches (down to
MAX_BRANCH_LEVEL), tasks become leaves and challenges become roots. Every
value is derived from the inputs alone so the same store state always yields
the same picture.
"""

import logging
import math
from typing import Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from grow_app.config import constants as c
from grow_app.growth.models import Challenge, Goal, Habit, Task

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]


class LeafLayout(BaseModel):
    task_id: str
    title: str
    completed: bool
    offset: float   # distance along the branch from its outer end
    top: float      # vertical position relative to the branch


class BranchLayout(BaseModel):
    goal_id: str
    title: str
    side: Side
    level: int
    index: int
    total_on_side: int
    progress: int
    length: float
    angle: float
    thickness: float
    top: Optional[float] = None   # only set for branches attached to the trunk
    leaves: List[LeafLayout] = Field(default_factory=list)
    children: List["BranchLayout"] = Field(default_factory=list)


class RootLayout(BaseModel):
    challenge_id: str
    title: str
    completed: bool
    index: int
    angle: float


class TreeLayout(BaseModel):
    trunk_width: float
    trunk_height: float
    left: List[BranchLayout] = Field(default_factory=list)
    right: List[BranchLayout] = Field(default_factory=list)
    roots: List[RootLayout] = Field(default_factory=list)
    hidden_goal_ids: List[str] = Field(default_factory=list)


BranchLayout.model_rebuild()


class TreeLayoutEngine:
    """Computes a TreeLayout from habits, goals (with tasks) and challenges."""

    def __init__(self, max_level: int = c.MAX_BRANCH_LEVEL):
        self.max_level = max_level

    # --- Trunk ---
    @staticmethod
    def trunk_width(habits: Sequence[Habit]) -> float:
        total_streaks = sum(h.streak for h in habits)
        completed_habits = sum(1 for h in habits if h.completed)
        streak_factor = min(c.TRUNK_BASE_WIDTH + total_streaks * c.TRUNK_WIDTH_PER_STREAK_DAY, c.TRUNK_MAX_WIDTH)
        completion_bonus = completed_habits * c.TRUNK_WIDTH_PER_COMPLETED_HABIT
        return min(streak_factor + completion_bonus, c.TRUNK_MAX_WIDTH)

    @staticmethod
    def trunk_height(habits: Sequence[Habit], root_goal_count: int) -> float:
        completed_habits = sum(1 for h in habits if h.completed)
        return (
            c.TRUNK_MIN_HEIGHT
            + root_goal_count * c.TRUNK_HEIGHT_PER_ROOT_GOAL
            + completed_habits * c.TRUNK_HEIGHT_PER_COMPLETED_HABIT
        )

    # --- Branches ---
    @staticmethod
    def branch_length(progress: int, level: int) -> float:
        max_length = c.BRANCH_MAX_LENGTH - level * c.BRANCH_LENGTH_TAPER_PER_LEVEL
        return c.BRANCH_MIN_LENGTH + (max_length - c.BRANCH_MIN_LENGTH) * (progress / 100)

    @staticmethod
    def branch_angle(is_left: bool, level: int, index: int, total_on_side: int) -> float:
        base_angle = c.BRANCH_BASE_ANGLE if is_left else -c.BRANCH_BASE_ANGLE
        level_factor = level * c.BRANCH_ANGLE_PER_LEVEL
        variation = ((index % 3) - 1) * c.BRANCH_ANGLE_VARIATION
        position_offset = ((index / total_on_side) - 0.5) * c.BRANCH_SPREAD_FACTOR if total_on_side else 0.0
        return base_angle + position_offset + (level_factor if is_left else -level_factor) + variation

    @staticmethod
    def branch_thickness(level: int) -> float:
        return c.BRANCH_BASE_THICKNESS - level * c.BRANCH_THICKNESS_TAPER_PER_LEVEL

    @staticmethod
    def leaf(task: Task, idx: int, is_left: bool, thickness: float) -> LeafLayout:
        if is_left:
            top = -(c.LEAF_BASE_LIFT + (idx % 2) * c.LEAF_STAGGER)
        else:
            top = thickness
        return LeafLayout(
            task_id=task.id,
            title=task.title,
            completed=task.completed,
            offset=c.LEAF_FIRST_OFFSET + idx * c.LEAF_SPACING,
            top=top,
        )

    def _branch(
        self,
        goal: Goal,
        children_of: Dict[str, List[Goal]],
        is_left: bool,
        level: int,
        index: int,
        total_on_side: int,
        visited: set,
        hidden: List[str],
    ) -> BranchLayout:
        visited.add(goal.id)
        thickness = self.branch_thickness(level)
        branch = BranchLayout(
            goal_id=goal.id,
            title=goal.title,
            side="left" if is_left else "right",
            level=level,
            index=index,
            total_on_side=total_on_side,
            progress=goal.progress,
            length=self.branch_length(goal.progress, level),
            angle=self.branch_angle(is_left, level, index, total_on_side),
            thickness=thickness,
            leaves=[self.leaf(task, idx, is_left, thickness) for idx, task in enumerate(goal.tasks)],
        )

        subgoals = [g for g in children_of.get(goal.id, []) if g.id not in visited]
        if not subgoals:
            return branch
        if level >= self.max_level:
            for subgoal in subgoals:
                hidden.extend(self._subtree_ids(subgoal, children_of, visited))
            return branch
        for idx, subgoal in enumerate(subgoals):
            branch.children.append(
                self._branch(subgoal, children_of, is_left, level + 1, idx, len(subgoals), visited, hidden)
            )
        return branch

    @staticmethod
    def _subtree_ids(goal: Goal, children_of: Dict[str, List[Goal]], visited: set) -> List[str]:
        ids = []
        stack = [goal]
        while stack:
            current = stack.pop()
            if current.id in visited:
                continue
            visited.add(current.id)
            ids.append(current.id)
            stack.extend(reversed(children_of.get(current.id, [])))
        return ids

    # --- Roots ---
    @staticmethod
    def root_angle(index: int, count: int) -> float:
        return (index - count / 2 + 0.5) * c.ROOT_ANGLE_STEP

    # --- Whole tree ---
    def build(self, habits: Sequence[Habit], goals: Sequence[Goal], challenges: Sequence[Challenge]) -> TreeLayout:
        children_of: Dict[str, List[Goal]] = {}
        for goal in goals:
            if goal.parent_id:
                children_of.setdefault(goal.parent_id, []).append(goal)
        root_goals = [g for g in goals if not g.parent_id]

        split = math.ceil(len(root_goals) / 2)
        left_goals, right_goals = root_goals[:split], root_goals[split:]

        visited: set = set()
        hidden: List[str] = []
        layout = TreeLayout(
            trunk_width=self.trunk_width(habits),
            trunk_height=self.trunk_height(habits, len(root_goals)),
        )
        for is_left, side_goals, target in ((True, left_goals, layout.left), (False, right_goals, layout.right)):
            for index, goal in enumerate(side_goals):
                branch = self._branch(goal, children_of, is_left, 0, index, len(side_goals), visited, hidden)
                branch.top = c.BRANCH_FIRST_OFFSET + index * c.BRANCH_SPACING
                target.append(branch)

        layout.roots = [
            RootLayout(
                challenge_id=challenge.id,
                title=challenge.title,
                completed=challenge.completed,
                index=i,
                angle=self.root_angle(i, len(challenges)),
            )
            for i, challenge in enumerate(challenges)
        ]
        layout.hidden_goal_ids = hidden
        logger.debug(
            "Tree layout built: %d left / %d right branches, %d roots, %d hidden goals.",
            len(layout.left), len(layout.right), len(layout.roots), len(hidden),
        )
        return layout
