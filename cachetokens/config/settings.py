"""
settings.py

This module provides configuration management for the token replacement
engine.

Features:
- Centralized configuration using Pydantic settings
- Layered sources: arguments, CTR_ environment variables, JSON config file
- Delimiter configuration building with fail-closed validation

Usage:
Import appsettings for the process-wide configuration, or construct `App`
explicitly and hand it to `TokenReplacements`.
"""

from pathlib import Path
from typing import Final
from appdirs import user_config_dir
from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from cachetokens.lib.errors import InvalidConfiguration
from cachetokens.models.dataModel import DelimiterConfig

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("cachetokens", ""))
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the CTR_
    prefix or through the JSON file CONFIG_FILE.

    Attributes:
        automaticModeEnabled: Run substitution from the render hook
        frontendOnlyMode: Skip the render hook on administrative requests
        adminPathPrefix: Path prefix that marks administrative requests
        delimiterStart: Token start delimiter
        delimiterEnd: Token end delimiter
        paramSeparator: Separator between name and parameter fields
        keyValueSeparator: Separator between parameter key and value
        multivalueSeparator: Separator between sub-values of a value
        beQuiet: Suppress detailed logging output

    Note:
        Delimiters are not validated here. A bad config file must not keep
        the process from starting; `delimiterConfig_build` rejects it later
        and automatic mode is switched off.
    """

    automaticModeEnabled: bool = True
    frontendOnlyMode: bool = True
    adminPathPrefix: str = "/admin/"

    delimiterStart: str = "{{"
    delimiterEnd: str = "}}"
    paramSeparator: str = "|"
    keyValueSeparator: str = ":"
    multivalueSeparator: str = ","

    beQuiet: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CTR_",  # Environment variables with this prefix override settings
        case_sensitive=False,
        json_file=CONFIG_FILE,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls),
        )


def delimiterConfig_build(settings: App) -> DelimiterConfig:
    """
    Build the delimiter configuration from application settings.

    Args:
        settings: Application settings

    Returns:
        DelimiterConfig: Validated, immutable delimiter set

    Raises:
        InvalidConfiguration: If a delimiter is empty, too long or
            identical to another one
    """
    try:
        return DelimiterConfig(
            start=settings.delimiterStart,
            end=settings.delimiterEnd,
            paramSeparator=settings.paramSeparator,
            keyValueSeparator=settings.keyValueSeparator,
            multivalueSeparator=settings.multivalueSeparator,
        )
    except ValidationError as e:
        messages: list[str] = [
            f"{'.'.join(str(loc) for loc in err['loc']) or 'delimiters'}: {err['msg']}"
            for err in e.errors()
        ]
        raise InvalidConfiguration("; ".join(messages)) from e


# Create the application settings instance
appsettings: Final[App] = App()
