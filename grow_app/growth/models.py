# grow_app/growth/models.py

import logging
from typing import List, Optional

from grow_app.core.utils import clamp_percent

logger = logging.getLogger(__name__)


class Habit:
    """
    A recurring daily action tracked with a streak counter.

    Attributes:
        id (str): Unique identifier.
        title (str): What the habit is.
        streak (int): Consecutive completions, never negative.
        completed (bool): Whether the habit is done for today.
    """

    def __init__(self, id: str, title: str, streak: int = 0, completed: bool = False):
        self.id = id
        self.title = title
        self.streak = max(0, int(streak))
        self.completed = completed

    def __repr__(self) -> str:
        return f"Habit(id='{self.id}', title='{self.title}', streak={self.streak}, completed={self.completed})"

    def toggle(self):
        """Flips today's completion and moves the streak with it."""
        self.completed = not self.completed
        if self.completed:
            self.streak += 1
        else:
            self.streak = max(0, self.streak - 1)
        logger.info("Habit '%s' (id: %s) completed=%s, streak=%d.", self.title, self.id, self.completed, self.streak)

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "streak": self.streak, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        if not data or "id" not in data or "title" not in data:
            raise ValueError(f"Cannot create Habit: Missing 'id' or 'title'. Data: {data}")
        return cls(
            id=data["id"],
            title=data["title"],
            streak=data.get("streak", 0),
            completed=bool(data.get("completed", False)),
        )


class Task:
    """A leaf-level action attached to exactly one goal."""

    def __init__(self, id: str, title: str, goal_id: str, completed: bool = False):
        self.id = id
        self.title = title
        self.goal_id = goal_id
        self.completed = completed

    def __repr__(self) -> str:
        return f"Task(id='{self.id}', title='{self.title}', goal_id='{self.goal_id}', completed={self.completed})"

    def toggle(self):
        self.completed = not self.completed

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "completed": self.completed, "goal_id": self.goal_id}

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        if not data or "id" not in data or "title" not in data or "goal_id" not in data:
            raise ValueError(f"Cannot create Task: Missing 'id', 'title' or 'goal_id'. Data: {data}")
        return cls(
            id=data["id"],
            title=data["title"],
            goal_id=data["goal_id"],
            completed=bool(data.get("completed", False)),
        )


class Goal:
    """
    A hierarchical objective composed of tasks and subgoals.

    Only id, title, progress and parent_id are stored. `subgoals` and `tasks`
    are rebuilt by the store from the flat lists on every read, and
    `progress` is recomputed whenever one of the goal's tasks changes.

    Attributes:
        id (str): Unique identifier.
        title (str): What the goal is.
        progress (int): Percentage (0-100) of directly attached tasks completed.
        parent_id (Optional[str]): Id of the parent goal, None for a root goal.
        subgoals (List[Goal]): Direct children (derived).
        tasks (List[Task]): Directly attached tasks (derived).
    """

    def __init__(
        self,
        id: str,
        title: str,
        progress: int = 0,
        parent_id: Optional[str] = None,
        subgoals: Optional[List["Goal"]] = None,
        tasks: Optional[List[Task]] = None,
    ):
        self.id = id
        self.title = title
        self.progress = clamp_percent(progress)
        self.parent_id = parent_id
        self.subgoals: List[Goal] = subgoals if subgoals is not None else []
        self.tasks: List[Task] = tasks if tasks is not None else []

    def __repr__(self) -> str:
        return (
            f"Goal(id='{self.id}', title='{self.title}', progress={self.progress}, "
            f"parent_id={self.parent_id!r}, subgoals={len(self.subgoals)}, tasks={len(self.tasks)})"
        )

    @property
    def is_root(self) -> bool:
        return not self.parent_id

    def to_dict(self, _seen: Optional[set] = None) -> dict:
        """Serializes the goal with its derived subgoals and tasks."""
        seen = set() if _seen is None else _seen
        seen.add(self.id)
        subgoals = []
        for child in self.subgoals:
            if child.id in seen:
                logger.warning("Cycle detected below goal '%s' at '%s'; not serializing further.", self.id, child.id)
                continue
            subgoals.append(child.to_dict(seen))
        return {
            "id": self.id,
            "title": self.title,
            "progress": self.progress,
            "parent_id": self.parent_id,
            "subgoals": subgoals,
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        """Builds a stored goal (no derived lists) from a dictionary."""
        if not data or "id" not in data or "title" not in data:
            raise ValueError(f"Cannot create Goal: Missing 'id' or 'title'. Data: {data}")
        return cls(
            id=data["id"],
            title=data["title"],
            progress=data.get("progress", 0),
            parent_id=data.get("parent_id") or None,
        )


class Challenge:
    """A one-time wellness activity. Completion cannot be undone."""

    def __init__(self, id: str, title: str, description: str = "", completed: bool = False):
        self.id = id
        self.title = title
        self.description = description
        self.completed = completed

    def __repr__(self) -> str:
        return f"Challenge(id='{self.id}', title='{self.title}', completed={self.completed})"

    def mark_completed(self):
        if not self.completed:
            self.completed = True
            logger.info("Challenge '%s' (id: %s) completed.", self.title, self.id)

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "description": self.description, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict) -> "Challenge":
        if not data or "id" not in data or "title" not in data:
            raise ValueError(f"Cannot create Challenge: Missing 'id' or 'title'. Data: {data}")
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            completed=bool(data.get("completed", False)),
        )
