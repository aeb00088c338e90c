"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``GUARDEDBUILD_*`` prefix
  3. TOML file    — ``guardedbuild.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from guardedbuild.config.models import OutputConfig

CONFIG_FILENAME = "guardedbuild.toml"
CONFIG_ENV_VAR = "GUARDEDBUILD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for a working directory.

    ``GUARDEDBUILD_CONFIG`` wins when set (None if it names no file).
    Otherwise walks up from *start* (default: cwd) to the filesystem
    root and returns the first ``guardedbuild.toml`` found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path | None) -> dict[str, Any]:
    """Parse *path* as TOML; a missing path yields an empty mapping.

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``guardedbuild.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class GuardedBuildSettings(BaseSettings):
    """Settings for the guardedbuild CLI, frozen after construction.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        presets: Per-kind field values applied before command-line values.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GUARDEDBUILD_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    output: OutputConfig = Field(default_factory=OutputConfig)
    presets: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> GuardedBuildSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* that does not exist is ignored, as if
        no file had been found.  Flags left at False do not override
        env or TOML values.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(cwd)

        overrides = {k: v for k, v in cli_flags.items() if v}
        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    @property
    def wants_json(self) -> bool:
        return self.json_output or self.output.json_output

    @property
    def wants_quiet(self) -> bool:
        return self.quiet or self.output.quiet

