# grow_app/core/containers.py
import logging

from dependency_injector import containers, providers

from grow_app.config.settings import settings
from grow_app.growth.seed import create_store
from grow_app.growth.tree_layout import TreeLayoutEngine

logger = logging.getLogger(__name__)


class Container(containers.DeclarativeContainer):
    """
    Main Dependency Injection container for the application.
    The store is a process-wide singleton; nothing is persisted.
    """
    wiring_config = containers.WiringConfiguration(
        modules=[
            "grow_app.routers.habits",
            "grow_app.routers.goals",
            "grow_app.routers.tasks",
            "grow_app.routers.challenges",
            "grow_app.routers.tree",
        ]
    )

    # --- Configuration Provider ---
    config = providers.Configuration(strict=False)
    try:
        config.set('SEED_DEMO_DATA', True)
        config.from_pydantic(settings)
        logger.info("DI Container: Configuration loaded successfully from settings.")
    except Exception as config_load_err:
        logger.error(f"DI Container: Failed to load config from Pydantic settings: {config_load_err}", exc_info=True)
        config.override({"SEED_DEMO_DATA": True})

    # --- Services ---
    store = providers.Singleton(
        create_store,
        seed_demo_data=config.SEED_DEMO_DATA,
    )

    tree_layout_engine = providers.Singleton(TreeLayoutEngine)
