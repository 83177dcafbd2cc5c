# grow_app/growth/seed.py

import logging
import random
from typing import Any, Dict, List, Optional

from grow_app.core.utils import new_id
from grow_app.growth.store import GrowthStore

logger = logging.getLogger(__name__)


def build_demo_data() -> Dict[str, List[Dict[str, Any]]]:
    """
    Demo content shown on a fresh start: four habits, a small goal tree
    ("Read 24 Books This Year" sits below "Write a Book"), their tasks and
    five challenges. Fresh ids are generated on every call.
    """
    write_book, get_fit, learn_spanish, vacation, read_books = (new_id() for _ in range(5))

    habits = [
        {"id": new_id(), "title": "Morning Meditation", "streak": 5, "completed": True},
        {"id": new_id(), "title": "Daily Reading", "streak": 3, "completed": False},
        {"id": new_id(), "title": "Exercise", "streak": 7, "completed": True},
        {"id": new_id(), "title": "Gratitude Journaling", "streak": 1, "completed": False},
    ]

    goals = [
        {"id": write_book, "title": "Write a Book"},
        {"id": get_fit, "title": "Get Fit"},
        {"id": learn_spanish, "title": "Learn Spanish"},
        {"id": vacation, "title": "Plan Dream Vacation"},
        {"id": read_books, "title": "Read 24 Books This Year", "parent_id": write_book},
    ]

    task_specs = [
        ("Research topic", True, write_book),
        ("Create outline", False, write_book),
        ("Write first draft", False, write_book),
        ("Research gym options", True, get_fit),
        ("Buy workout clothes", True, get_fit),
        ("Schedule first session", False, get_fit),
        ("Download learning app", True, learn_spanish),
        ("Complete first lesson", True, learn_spanish),
        ("Practice daily", False, learn_spanish),
        ("Research destinations", True, vacation),
        ("Set budget", False, vacation),
        ("Book flights", False, vacation),
        ("Create reading list", True, read_books),
        ("Join book club", False, read_books),
    ]
    tasks = [
        {"id": new_id(), "title": title, "completed": completed, "goal_id": goal_id}
        for title, completed, goal_id in task_specs
    ]

    challenges = [
        {"id": new_id(), "title": "Morning Gratitude",
         "description": "Write down three things you are grateful for this morning.", "completed": True},
        {"id": new_id(), "title": "Mindful Breathing",
         "description": "Take 5 minutes to focus only on your breath, counting each inhale and exhale.", "completed": False},
        {"id": new_id(), "title": "Digital Detox Hour",
         "description": "Spend one hour today completely disconnected from all digital devices.", "completed": True},
        {"id": new_id(), "title": "Self-Compassion Practice",
         "description": "Write down three positive things about yourself that you appreciate.", "completed": False},
        {"id": new_id(), "title": "Nature Connection",
         "description": "Spend at least 15 minutes outside connecting with nature, observing details you normally miss.", "completed": True},
    ]

    return {"habits": habits, "goals": goals, "tasks": tasks, "challenges": challenges}


def create_store(seed_demo_data: bool = True, rng: Optional[random.Random] = None) -> GrowthStore:
    """Factory used by the DI container."""
    store = GrowthStore(rng=rng)
    if seed_demo_data:
        store.load(build_demo_data())
        logger.info("Seeded growth store with demo data.")
    else:
        logger.info("Starting with an empty growth store.")
    return store
