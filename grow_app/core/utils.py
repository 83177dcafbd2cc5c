# grow_app/core/utils.py

import logging
import uuid

from grow_app.config.constants import PROGRESS_MIN, PROGRESS_MAX

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Random identifier for a new entity."""
    return str(uuid.uuid4())


def clamp_percent(value) -> int:
    """Clamps a value into the 0-100 progress range."""
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        logger.warning("Could not clamp non-numeric value: %s. Returning %d", value, PROGRESS_MIN, exc_info=True)
        return PROGRESS_MIN
    return max(PROGRESS_MIN, min(PROGRESS_MAX, int_value))


def percent_complete(done: int, total: int) -> int:
    """
    Integer percentage of done/total, rounding halves up.
    Returns 0 when total is 0.
    """
    if total <= 0:
        return PROGRESS_MIN
    return clamp_percent((done * 200 + total) // (2 * total))


def clean_title(title) -> str:
    """Strips a title and rejects blank ones."""
    if not isinstance(title, str) or not title.strip():
        raise ValueError("Title must be a non-empty string.")
    return title.strip()
