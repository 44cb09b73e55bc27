"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``FOLIO_*`` prefix, ``__`` for nested sections
  3. TOML file: ``folio.toml`` found via ``FOLIO_CONFIG`` or walk-up
  4. Code defaults: baked into the section models

Configuration is loaded once at startup. A missing ``[database]`` section,
an unreadable or malformed file, or an invalid value raises
:class:`ConfigError`.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsError

from folio.config.models import BlogConfig, DatabaseConfig, MessagesConfig, UploadsConfig
from folio.errors import ConfigError

CONFIG_FILENAME = "folio.toml"
CONFIG_ENV_VAR = "FOLIO_CONFIG"


def locate_site_config(start: Path | None = None) -> Path | None:
    """Return the site's ``folio.toml``, or None when there is none.

    ``FOLIO_CONFIG`` wins when set, even if it names a missing file (the
    result is then None). Otherwise directories are searched from *start*
    (default: cwd) upward, so commands run anywhere inside a site tree.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the site's ``folio.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigError(msg) from exc
            except OSError as exc:
                msg = f"Could not read {toml_path}: {exc}"
                raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FolioSettings(BaseSettings):
    """Unified settings for the folio process.

    Attributes:
        site_root: Directory that relative paths (uploads root, SQLite
            file) resolve against. The config file's parent, or CWD.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FOLIO_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    database: DatabaseConfig
    uploads: UploadsConfig = Field(default_factory=UploadsConfig)
    blog: BlogConfig = Field(default_factory=BlogConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)

    @property
    def uploads_root(self) -> Path:
        """Absolute uploads directory."""
        root = Path(self.uploads.root)
        return root if root.is_absolute() else self.site_root / root

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
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> FolioSettings:
        """Construct settings from a CLI invocation or process start.

        Discovers ``folio.toml`` via walk-up (or explicit *config_path*),
        resolves *site_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.

        Raises:
            ConfigError: The explicit config file does not exist, the TOML
                is malformed, or the merged settings fail validation.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise ConfigError(msg)
            toml_path = p
        else:
            toml_path = locate_site_config(site_root)

        resolved_root = site_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                site_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        except ValidationError as exc:
            source = toml_path or "environment"
            msg = f"Invalid configuration ({source}): {_summarize(exc)}"
            raise ConfigError(msg) from exc
        except SettingsError as exc:
            msg = f"Invalid configuration (environment): {exc}"
            raise ConfigError(msg) from exc
        finally:
            _tls.toml_path = None


def _summarize(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``loc: message`` pairs."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
