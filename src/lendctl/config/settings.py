"""LendSettings: one frozen object built from every configuration layer.

Highest priority first:

1. keyword arguments (the CLI flags)
2. ``LENDCTL_*`` environment variables, ``__`` between nested keys
3. tables of the discovered ``lendctl.toml``
4. defaults of the section models
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from lendctl.config.discovery import find_config, read_toml
from lendctl.config.models import PaymentConfig, RegistryConfig

# Parsed lendctl.toml for the settings object under construction.
_toml_tables: ContextVar[dict[str, Any]] = ContextVar("lendctl_toml_tables", default={})


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of an already parsed ``lendctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], tables: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._tables = tables

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class LendSettings(BaseSettings):
    """Settings for one lendctl invocation.

    Attributes:
        ledger_root: Directory that holds ``.lendctl/``. Defaults to the
            directory of the config file, else the working directory.
        config_path: The config file in use, if any.
        caller: Identity the command acts as. Blank means none.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LENDCTL_",
        "env_nested_delimiter": "__",
    }

    ledger_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    caller: str | None = None

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    payment: PaymentConfig = Field(default_factory=PaymentConfig)

    @field_validator("caller", mode="before")
    @classmethod
    def normalize_caller(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_source = TomlSettingsSource(settings_cls, _toml_tables.get())
        return init_settings, env_settings, toml_source

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        ledger_root: Path | None = None,
        **cli_flags: Any,
    ) -> LendSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored. Flags
        given as None are left out so lower layers can supply them.

        Raises:
            click.ClickException: If the config file is not valid TOML.
            pydantic.ValidationError: If a layer holds an invalid value.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(ledger_root)

        if ledger_root is None:
            ledger_root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_tables.set(read_toml(toml_path) if toml_path else {})
        try:
            return cls(
                ledger_root=ledger_root,
                config_path=toml_path,
                **{name: value for name, value in cli_flags.items() if value is not None},
            )
        finally:
            _toml_tables.reset(token)
