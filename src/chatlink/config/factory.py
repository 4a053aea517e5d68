# region Docstring
"""
chatlink.config.factory
Factory module for creating and managing settings with multi-source configuration support.
Overview:
- Provides a custom Pydantic BaseSettings subclass that supports hierarchical configuration
    loading from YAML files, environment variables, and .env files.
- Implements a cached factory function for settings instantiation across the package.
Contents:
- Constants:
    - T: TypeVar bound to BaseSettings for generic typing support in the factory function.
- Classes:
    - FactoryBaseSettings:
        BaseSettings subclass adding YAML configuration files to the standard
        environment variable loading.
        Configuration Priority (highest to lowest):
            1. Environment variables
            2. .env file values
            3. YAML files (environment-specific config.{env}.yaml)
            4. YAML files (default config.yaml)
            5. Init kwargs
            6. Field defaults
- Functions:
    - get_settings(settings_cls: Type[T]) -> T:
        LRU-cached factory function that instantiates and returns settings objects.
Design notes:
- decode_complex_value returns raw strings when JSON decoding fails rather than
    raising, so plain values in .env files never crash settings loading.
"""
# endregion
# region Imports
import json
from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .base import APP_ENV, APP_ROOT

# endregion
# region FactoryBaseSettings Class
T = TypeVar("T", bound=BaseSettings)


class FactoryBaseSettings(BaseSettings):
    """
    Custom BaseSettings that supports YAML and Env Vars.
    Priority: Env Vars > YAML (Env specific) > YAML (Default) > Defaults
    """

    model_config = SettingsConfigDict(
        env_file=APP_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:

        # Load config.yaml and config.{env}.yaml
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=[APP_ROOT / "config.yaml", APP_ROOT / f"config.{APP_ENV}.yaml"],
        )
        return (
            env_settings,  # Environment variables (highest priority)
            dotenv_settings,  # .env file
            yaml_settings,  # YAML files
            init_settings,  # Init kwargs
        )

    def decode_complex_value(
        self, field_name: str, field: FieldInfo, value: Any
    ) -> Any:
        """
        Return the raw string when a complex value in the environment is not JSON.
        """
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return value


# endregion
# region get_settings Factory Function


@lru_cache
def get_settings(settings_cls: Type[T]) -> T:
    """
    Factory function to load any settings class.
    Results are cached so we don't re-read files every time.
    """
    return settings_cls()


# endregion
