# region Docstring
"""
chatlink.config.base

Environment detection and application path utilities.

Overview:
- Provides a utility class for detecting the current application environment
    (production, Docker, or development) based on environment variables or
    path-based heuristics.
- Exposes module-level constants for the application root directory and the
    environment type, used by the settings factory to locate YAML files.

Contents:
- Classes:
    - AppEnv:
        Environment detection and path resolution helpers. Provides class
        methods to determine the current environment, the application root
        and the local cache directory (history database, credential store).

- Module-level Constants:
    - APP_ROOT (Path): The resolved root directory of the application.
    - APP_ENV (Literal["prod", "docker", "dev"]): The detected application environment.
    - CACHE_DIR (Path): The directory holding local SQLite stores.

Environment Detection Logic:
- Priority 1: Checks the ENVIRONMENT environment variable for explicit configuration.
- Priority 2: Falls back to path-based detection:
    - Paths starting with "/app" indicate Docker environment.
    - Paths starting with "/srv" indicate production environment.
    - All other paths default to development environment.

Design Notes:
- Environment detection is performed at import time to ensure consistent behavior
    throughout the application lifecycle.
- Path resolution uses absolute paths to avoid ambiguity in different execution contexts.
"""
# endregion
# region Imports
import os
from pathlib import Path
from typing import Literal

# endregion
# region AppEnv Class


class AppEnv:
    """
    Application environment detection utility.

    Attributes:
        ROOT (Path): The root directory of the application. Defaults to the current working directory.
        PROD (Literal["prod"]): Constant representing the production environment.
        DOCKER (Literal["docker"]): Constant representing the Docker environment.
        DEV (Literal["dev"]): Constant representing the development environment.
    """

    ROOT: Path = Path().cwd().resolve()
    PROD: Literal["prod"] = "prod"
    DOCKER: Literal["docker"] = "docker"
    DEV: Literal["dev"] = "dev"

    @classmethod
    def environment(cls) -> Literal["prod", "docker", "dev"]:
        """Determine the current application environment."""
        # Check ENVIRONMENT variable first; validate and return if set
        if os.getenv("ENVIRONMENT") in {cls.PROD, cls.DOCKER, cls.DEV}:
            return os.getenv("ENVIRONMENT")

        # Fallback to path-based detection
        calling_path = Path.cwd().as_posix()
        if calling_path.startswith("/app"):
            return cls.DOCKER
        elif calling_path.startswith("/srv"):
            return cls.PROD
        else:
            return cls.DEV

    @classmethod
    def app_root(cls) -> Path:
        """Get the application root directory."""
        return cls.ROOT

    @classmethod
    def cache_dir(cls) -> Path:
        """Get the local cache directory based on the environment."""
        if cls.environment() == cls.DOCKER:
            return Path("/data").resolve()
        elif cls.environment() == cls.PROD:
            return Path("/srv/chatlink/.cache").resolve()
        else:
            return Path(os.getenv("CHATLINK_CACHE_DIR", cls.ROOT / ".cache")).resolve()


# endregion
# region Module-level Constants

APP_ROOT: Path = AppEnv.app_root()
"""[Path] Root directory of the application."""
APP_ENV: Literal["prod", "docker", "dev"] = AppEnv.environment()
"""[Literal] Environment type."""
CACHE_DIR: Path = AppEnv.cache_dir()
"""[Path] Directory where the local SQLite stores live."""
# endregion


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "CACHE_DIR",
    "AppEnv",
]
