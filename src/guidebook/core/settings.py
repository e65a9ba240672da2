"""
Guidebook settings.

All fields can be set through ``GUIDEBOOK_*`` environment variables (e.g.
``GUIDEBOOK_CONTENT_DIR=docs``), a ``.env`` file, or a ``guidebook.toml``
file at the project root. A ``[tool.guidebook]`` table in ``pyproject.toml``
is read when there is no ``guidebook.toml``.

Load order (last wins)::

    field defaults  →  guidebook.toml  →  .env  →  real env vars

Example ``guidebook.toml``::

    content_dir = "content"
    required_keys = ["title", "excerpt", "date", "order"]
    edip_exempt_layouts = ["post", "newsletter"]
    disabled_rules = ["I003"]

Tags:
    settings, configuration, pydantic, environment, guidebook
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field, PrivateAttr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from guidebook.core.errors import InvalidConfigError
from guidebook.core.logging import LOG_LEVELS

CONFIG_FILENAME = "guidebook.toml"

DEFAULT_REQUIRED_KEYS = ["title", "subTitle", "excerpt", "featureImage", "date", "order"]
DEFAULT_OPTIONAL_KEYS = ["category", "layout"]

# Values read from the config file for the settings object being built
_file_values: ContextVar[dict[str, Any] | None] = ContextVar("guidebook_file_values", default=None)


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source for ``guidebook.toml`` / ``[tool.guidebook]`` values."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return (_file_values.get() or {}).get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(_file_values.get() or {})


class GuidebookSettings(BaseSettings):
    """Guidebook configuration.

    Fields
    ──────
    content_dir          : Root of the Markdown corpus (relative to project root)
    pattern              : Glob selecting document files under ``content_dir``
    exclude_dirs         : Directory names never descended into
    required_keys        : Front-matter keys every document must carry
    optional_keys        : Additional front-matter keys that are recognised
    edip_exempt_layouts  : Layouts (e.g. newsletter posts) not held to EDIP structure
    site_prefix          : URL prefix stripped from ``/``-rooted links
    static_dirs          : Asset directories for ``/``-rooted links (images)
    check_anchors        : Verify ``#fragment`` links against heading anchors
    check_feature_images : Verify local ``featureImage`` paths exist
    disabled_rules       : Lint codes to suppress (e.g. ``["I003"]``)
    include_infos        : Report info-level diagnostics
    log_level            : Structlog log level
    log_format           : ``auto``, ``console`` or ``json``
    """

    model_config = SettingsConfigDict(
        env_prefix="GUIDEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Content ──────────────────────────────────────────────────
    content_dir: Path = Field(default=Path("content"))
    pattern: str = Field(default="**/*.md")
    exclude_dirs: list[str] = Field(
        default_factory=lambda: [".git", "node_modules", "_site", ".venv", "__pycache__"],
    )

    # ── Front matter ─────────────────────────────────────────────
    required_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_REQUIRED_KEYS))
    optional_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_OPTIONAL_KEYS))
    edip_exempt_layouts: list[str] = Field(default_factory=lambda: ["post", "newsletter"])

    # ── Links ────────────────────────────────────────────────────
    site_prefix: str = Field(default="", description="URL prefix the site is served under")
    static_dirs: list[Path] = Field(default_factory=list)
    check_anchors: bool = Field(default=True)
    check_feature_images: bool = Field(default=True)

    # ── Lint ─────────────────────────────────────────────────────
    disabled_rules: list[str] = Field(default_factory=list)
    include_infos: bool = Field(default=True)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="auto")

    _project_root: Path | None = PrivateAttr(default=None)
    _config_file: Path | None = PrivateAttr(default=None)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources win: init kwargs, env vars, .env, config file
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            ConfigFileSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.upper() not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return value.upper()

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value not in ("auto", "console", "json"):
            raise ValueError("must be one of auto, console, json")
        return value

    @field_validator("disabled_rules")
    @classmethod
    def _normalise_codes(cls, value: list[str]) -> list[str]:
        return [code.strip().upper() for code in value if code.strip()]

    @property
    def project_root(self) -> Path:
        return self._project_root or Path.cwd()

    @property
    def config_file(self) -> Path | None:
        return self._config_file

    @property
    def content_root(self) -> Path:
        """``content_dir`` resolved against the project root."""
        if self.content_dir.is_absolute():
            return self.content_dir
        return (self.project_root / self.content_dir).resolve()

    @property
    def static_roots(self) -> list[Path]:
        return [
            path if path.is_absolute() else (self.project_root / path).resolve()
            for path in self.static_dirs
        ]

    @property
    def json_logs(self) -> bool | None:
        if self.log_format == "auto":
            return None
        return self.log_format == "json"


# ── Project root and config file discovery ───────────────────────────────


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order):

    * ``guidebook.toml``
    * ``pyproject.toml``
    * ``.git`` directory

    Falls back to *start* (or cwd) when no marker is found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / CONFIG_FILENAME).is_file():
            return directory
        if (directory / "pyproject.toml").is_file():
            return directory
        if (directory / ".git").exists():
            return directory
    return current


def load_config_file(project_root: Path) -> tuple[dict[str, Any], Path | None]:
    """Read guidebook settings from ``guidebook.toml`` or ``pyproject.toml``.

    Returns the settings mapping and the file it came from (``None`` when
    neither file provides any).

    Raises:
        InvalidConfigError: The file is not valid TOML or names unknown keys.
    """
    candidates = [
        (project_root / CONFIG_FILENAME, ()),
        (project_root / "pyproject.toml", ("tool", "guidebook")),
    ]
    for path, table in candidates:
        if not path.is_file():
            continue
        try:
            data: Any = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigError(
                "config_file", str(path), f"Invalid TOML in {path}: {exc}"
            ).with_context(path=str(path)) from exc
        for key in table:
            data = data.get(key, {}) if isinstance(data, dict) else {}
        if not data:
            continue
        unknown = sorted(set(data) - set(GuidebookSettings.model_fields))
        if unknown:
            raise InvalidConfigError(
                unknown[0],
                data[unknown[0]],
                f"Unknown setting(s) in {path.name}: {', '.join(unknown)}",
            ).with_context(path=str(path))
        return data, path
    return {}, None


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, GuidebookSettings] = {}


def get_settings(
    *,
    project_root: Path | None = None,
    _force_reload: bool = False,
) -> GuidebookSettings:
    """Load, validate, and cache a :class:`GuidebookSettings` instance.

    Parameters
    ----------
    project_root:
        Override the auto-detected project root.
    _force_reload:
        Bypass cache and reload from disk.

    Raises
    ------
    InvalidConfigError
        If the config file or any environment value fails validation.
    """
    root = (project_root or find_project_root()).resolve()
    cache_key = str(root)

    if not _force_reload and cache_key in _settings_cache:
        return _settings_cache[cache_key]

    file_values, config_file = load_config_file(root)

    token = _file_values.set(file_values)
    try:
        settings = GuidebookSettings(_env_file=root / ".env")  # type: ignore[call-arg]
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "settings"
        raise InvalidConfigError(
            field, first.get("input"), f"Invalid setting {field}: {first['msg']}"
        ) from exc
    finally:
        _file_values.reset(token)

    settings._project_root = root
    settings._config_file = config_file

    _settings_cache[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_OPTIONAL_KEYS",
    "DEFAULT_REQUIRED_KEYS",
    "GuidebookSettings",
    "clear_settings_cache",
    "find_project_root",
    "get_settings",
    "load_config_file",
]
