"""Configuration management for famfin.

Reads configuration from ~/.config/famfin.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import tomllib
import tomli_w

DEFAULT_MAX_ROW_COUNT = 100


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    import_max_row_count: int = DEFAULT_MAX_ROW_COUNT
    enable_reset: bool = False

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "famfin"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="famfin.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            import_max_row_count=DEFAULT_MAX_ROW_COUNT,
            enable_reset=False,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "famfin.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional override for the config file location.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    # Load existing config
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "famfin"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "famfin.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    # Imports must allow at least one row
    import_config = data.get("imports", {})
    max_row_count = int(import_config.get("max_row_count", DEFAULT_MAX_ROW_COUNT))
    if max_row_count < 1:
        raise ValueError(
            f"imports.max_row_count must be a positive integer, got {max_row_count}"
        )

    reset_config = data.get("reset", {})
    enable_reset = bool(reset_config.get("enabled", False))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        import_max_row_count=max_row_count,
        enable_reset=enable_reset,
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination path for the TOML file.
    """
    # Ensure config directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert config to TOML structure
    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "imports": {
            "max_row_count": config.import_max_row_count,
        },
        "reset": {
            "enabled": config.enable_reset,
        },
    }

    # Write TOML file
    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
