# grow_app/core/feature_flags.py
import logging
from enum import Enum
from functools import lru_cache

from grow_app.config.settings import settings

logger = logging.getLogger(__name__)


class Feature(Enum):
    """
    Enumeration of controllable features.
    Values are the names of the matching AppSettings attributes.
    """
    TREE_VISUALIZATION = "FEATURE_ENABLE_TREE_VISUALIZATION"
    DAILY_CHALLENGES = "FEATURE_ENABLE_DAILY_CHALLENGES"
    GOAL_GRAPH = "FEATURE_ENABLE_GOAL_GRAPH"


@lru_cache(maxsize=None)
def is_enabled(feature: Feature) -> bool:
    """
    Checks if a specific feature is enabled based on application settings.
    Defaults to False if the flag is missing/invalid.
    """
    if not isinstance(feature, Feature):
        logger.error("Invalid argument type provided to is_enabled: %r", feature)
        return False

    flag_name = feature.value
    enabled = getattr(settings, flag_name, False)

    if not isinstance(enabled, bool):
        is_truthy_string = isinstance(enabled, str) and enabled.lower() in ['true', '1', 'yes', 'on']
        if is_truthy_string:
            enabled = True
        else:
            if enabled not in [False, None, 0, 'false', '0', 'no', 'off', '']:
                logger.warning(
                    "Setting '%s' for feature '%s' is not a standard boolean "
                    "(value: %s, type: %s). Interpreting as False.",
                    flag_name, feature.name, enabled, type(enabled).__name__
                )
            enabled = False

    return enabled
