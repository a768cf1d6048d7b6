"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config
            is only used for non-database settings.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.families import FamilyService
        from services.categories import CategoryService
        from services.imports import ImportService

        self.families = FamilyService(self.db_manager)
        self.categories = CategoryService(self.db_manager)
        self.imports = ImportService(
            self.db_manager, max_row_count=config.import_max_row_count
        )
