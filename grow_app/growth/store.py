# grow_app/growth/store.py

import logging
import random
from typing import Any, Dict, List, Optional

from grow_app.config.constants import CHALLENGE_IDEAS
from grow_app.core.utils import clean_title, new_id, percent_complete
from grow_app.growth.models import Challenge, Goal, Habit, Task

logger = logging.getLogger(__name__)


class GrowthStore:
    """
    In-memory store for habits, goals, tasks and challenges.

    Goals and tasks are kept as flat lists. Parent/child links are derived from
    Goal.parent_id and Task.goal_id whenever goals are read, and a goal's
    progress is recomputed every time one of its tasks is added, toggled or
    removed.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.habits: List[Habit] = []
        self.goals: List[Goal] = []
        self.tasks: List[Task] = []
        self.challenges: List[Challenge] = []
        self.rng = rng or random.Random()

    def __repr__(self) -> str:
        return (
            f"GrowthStore(habits={len(self.habits)}, goals={len(self.goals)}, "
            f"tasks={len(self.tasks)}, challenges={len(self.challenges)})"
        )

    def reset(self):
        self.habits = []
        self.goals = []
        self.tasks = []
        self.challenges = []
        logger.info("Growth store cleared.")

    def load(self, data: Dict[str, List[Dict[str, Any]]]):
        """
        Replaces the store content with the given lists of entity dicts
        (keys: habits, goals, tasks, challenges). Progress is recomputed from
        the tasks, so any stored progress value is ignored.

        Nothing is replaced unless the whole payload is valid.
        """
        habits = [Habit.from_dict(h) for h in data.get("habits", [])]
        goals = [Goal.from_dict(g) for g in data.get("goals", [])]
        parent_of = {g.id: g.parent_id for g in goals}
        for goal in goals:
            if goal.parent_id and goal.parent_id not in parent_of:
                raise ValueError(f"Goal '{goal.id}' references unknown parent '{goal.parent_id}'.")
        for goal in goals:
            seen = {goal.id}
            parent_id = goal.parent_id
            while parent_id:
                if parent_id in seen:
                    raise ValueError(f"Goal '{goal.id}' is part of a parent cycle through '{parent_id}'.")
                seen.add(parent_id)
                parent_id = parent_of.get(parent_id)
        tasks = []
        for task_data in data.get("tasks", []):
            task = Task.from_dict(task_data)
            if task.goal_id not in parent_of:
                raise ValueError(f"Task '{task.id}' references unknown goal '{task.goal_id}'.")
            tasks.append(task)
        challenges = [Challenge.from_dict(c) for c in data.get("challenges", [])]

        self.habits, self.goals, self.tasks, self.challenges = habits, goals, tasks, challenges
        for goal in self.goals:
            self._update_goal_progress(goal.id)
        self._process_goal_relationships()
        logger.info("Growth store loaded: %r", self)

    # ------------------------------------------------------------------
    # Habits
    # ------------------------------------------------------------------
    def get_habits(self) -> List[Habit]:
        return list(self.habits)

    def find_habit(self, habit_id: str) -> Optional[Habit]:
        return next((h for h in self.habits if h.id == habit_id), None)

    def add_habit(self, title: str) -> Habit:
        habit = Habit(id=new_id(), title=clean_title(title))
        self.habits.append(habit)
        logger.info("Added habit '%s' (id: %s).", habit.title, habit.id)
        return habit

    def complete_habit(self, habit_id: str) -> Optional[Habit]:
        """Toggles today's completion of a habit. Returns None if unknown."""
        habit = self.find_habit(habit_id)
        if habit is None:
            logger.warning("Cannot complete habit: Habit '%s' not found.", habit_id)
            return None
        habit.toggle()
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        initial_length = len(self.habits)
        self.habits = [h for h in self.habits if h.id != habit_id]
        removed = len(self.habits) < initial_length
        if not removed:
            logger.warning("Cannot delete habit: Habit '%s' not found.", habit_id)
        return removed

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------
    def _process_goal_relationships(self) -> List[Goal]:
        """Rebuilds every goal's subgoals and tasks from the flat lists."""
        goal_map = {goal.id: goal for goal in self.goals}
        tasks_by_goal: Dict[str, List[Task]] = {}
        for task in self.tasks:
            tasks_by_goal.setdefault(task.goal_id, []).append(task)

        for goal in self.goals:
            goal.subgoals = []
            goal.tasks = tasks_by_goal.get(goal.id, [])
        for goal in self.goals:
            if goal.parent_id:
                parent = goal_map.get(goal.parent_id)
                if parent is not None:
                    parent.subgoals.append(goal)
                else:
                    logger.warning("Goal '%s' has unknown parent '%s'.", goal.id, goal.parent_id)
        return self.goals

    def get_goals(self) -> List[Goal]:
        """All goals, with subgoals and tasks rebuilt."""
        return list(self._process_goal_relationships())

    def get_root_goals(self) -> List[Goal]:
        return [goal for goal in self.get_goals() if goal.is_root]

    def find_goal(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self.goals if g.id == goal_id), None)

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        self._process_goal_relationships()
        return self.find_goal(goal_id)

    def add_goal(self, title: str, parent_id: Optional[str] = None) -> Optional[Goal]:
        """
        Adds a goal, optionally below an existing parent.
        Returns None if the parent does not exist.
        """
        title = clean_title(title)
        parent_id = parent_id or None
        if parent_id and self.find_goal(parent_id) is None:
            logger.warning("Cannot add goal: Parent goal '%s' not found.", parent_id)
            return None
        goal = Goal(id=new_id(), title=title, progress=0, parent_id=parent_id)
        self.goals.append(goal)
        logger.info("Added goal '%s' (id: %s, parent: %s).", goal.title, goal.id, parent_id)
        return goal

    def get_descendant_ids(self, goal_id: str) -> List[str]:
        """Ids of every goal below goal_id, depth-first."""
        descendant_ids: List[str] = []
        visited = {goal_id}

        def _collect(parent_id: str):
            for goal in self.goals:
                if goal.parent_id == parent_id and goal.id not in visited:
                    visited.add(goal.id)
                    descendant_ids.append(goal.id)
                    _collect(goal.id)

        _collect(goal_id)
        return descendant_ids

    def delete_goal(self, goal_id: str) -> bool:
        """
        Removes a goal, all of its descendant goals, and every task attached
        to any removed goal.
        """
        if self.find_goal(goal_id) is None:
            logger.warning("Cannot delete goal: Goal '%s' not found.", goal_id)
            return False
        removed_ids = set(self.get_descendant_ids(goal_id))
        removed_ids.add(goal_id)
        task_count = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.goal_id not in removed_ids]
        self.goals = [g for g in self.goals if g.id not in removed_ids]
        logger.info(
            "Deleted goal '%s' with %d descendant goal(s) and %d task(s).",
            goal_id, len(removed_ids) - 1, task_count - len(self.tasks),
        )
        return True

    def _update_goal_progress(self, goal_id: str):
        goal = self.find_goal(goal_id)
        if goal is None:
            return
        goal_tasks = [t for t in self.tasks if t.goal_id == goal_id]
        completed_count = sum(1 for t in goal_tasks if t.completed)
        old_progress = goal.progress
        goal.progress = percent_complete(completed_count, len(goal_tasks))
        if old_progress != goal.progress:
            logger.debug("Goal '%s' progress %d -> %d.", goal.id, old_progress, goal.progress)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------
    def get_tasks(self, goal_id: Optional[str] = None) -> List[Task]:
        if goal_id is None:
            return list(self.tasks)
        return [t for t in self.tasks if t.goal_id == goal_id]

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def add_task(self, title: str, goal_id: str) -> Optional[Task]:
        """Adds an uncompleted task to a goal. Returns None if the goal does not exist."""
        title = clean_title(title)
        if self.find_goal(goal_id) is None:
            logger.warning("Cannot add task: Goal '%s' not found.", goal_id)
            return None
        task = Task(id=new_id(), title=title, goal_id=goal_id)
        self.tasks.append(task)
        self._update_goal_progress(goal_id)
        logger.info("Added task '%s' (id: %s) to goal '%s'.", task.title, task.id, goal_id)
        return task

    def complete_task(self, task_id: str) -> Optional[Task]:
        """Toggles a task's completion. Returns None if unknown."""
        task = self.find_task(task_id)
        if task is None:
            logger.warning("Cannot complete task: Task '%s' not found.", task_id)
            return None
        task.toggle()
        self._update_goal_progress(task.goal_id)
        return task

    def delete_task(self, task_id: str) -> bool:
        task = self.find_task(task_id)
        if task is None:
            logger.warning("Cannot delete task: Task '%s' not found.", task_id)
            return False
        self.tasks = [t for t in self.tasks if t.id != task_id]
        self._update_goal_progress(task.goal_id)
        return True

    # ------------------------------------------------------------------
    # Challenges
    # ------------------------------------------------------------------
    def get_challenges(self) -> List[Challenge]:
        return list(self.challenges)

    def find_challenge(self, challenge_id: str) -> Optional[Challenge]:
        return next((c for c in self.challenges if c.id == challenge_id), None)

    def add_challenge(self, title: str, description: str = "") -> Challenge:
        challenge = Challenge(id=new_id(), title=clean_title(title), description=(description or "").strip())
        self.challenges.append(challenge)
        logger.info("Added challenge '%s' (id: %s).", challenge.title, challenge.id)
        return challenge

    def complete_challenge(self, challenge_id: str) -> Optional[Challenge]:
        """Marks a challenge completed. Completed challenges stay completed."""
        challenge = self.find_challenge(challenge_id)
        if challenge is None:
            logger.warning("Cannot complete challenge: Challenge '%s' not found.", challenge_id)
            return None
        challenge.mark_completed()
        return challenge

    def delete_challenge(self, challenge_id: str) -> bool:
        initial_length = len(self.challenges)
        self.challenges = [c for c in self.challenges if c.id != challenge_id]
        removed = len(self.challenges) < initial_length
        if not removed:
            logger.warning("Cannot delete challenge: Challenge '%s' not found.", challenge_id)
        return removed

    def generate_daily_challenge(self) -> Challenge:
        """Appends a new uncompleted challenge picked from the idea catalogue."""
        idea = self.rng.choice(CHALLENGE_IDEAS)
        return self.add_challenge(idea["title"], idea["description"])

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------
    def summary(self) -> Dict[str, int]:
        return {
            "habits": len(self.habits),
            "completed_habits": sum(1 for h in self.habits if h.completed),
            "total_streak": sum(h.streak for h in self.habits),
            "goals": len(self.goals),
            "root_goals": sum(1 for g in self.goals if g.is_root),
            "tasks": len(self.tasks),
            "completed_tasks": sum(1 for t in self.tasks if t.completed),
            "challenges": len(self.challenges),
            "completed_challenges": sum(1 for c in self.challenges if c.completed),
        }
