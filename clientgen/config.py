"""Generator configuration: ``clientgen.toml``, ``pyproject.toml`` and environment."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError
from .orchestrator import UNRECOGNIZED_POLICIES

CONFIG_FILE_NAMES = ("clientgen.toml", "pyproject.toml")
ENV_PREFIX = "CLIENTGEN_"
LANGUAGES = ("javascript", "php")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GeneratorConfig:
    """Settings of one generation run."""

    language: str = "javascript"
    api_name: str = "api"
    client_name: Optional[str] = None
    output_dir: Path = field(default_factory=lambda: Path("build"))
    vendor_prefix: str = ""
    package_name: Optional[str] = None
    common_package: Optional[str] = None
    on_unrecognized: str = "warn"
    log_level: str = "INFO"
    base_url: Optional[str] = None
    version: str = "1.0.0"

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        self.log_level = str(self.log_level).upper()
        self.validate()

    def validate(self) -> None:
        if self.language not in LANGUAGES:
            raise ConfigurationError(
                f"language must be one of {', '.join(LANGUAGES)}, got {self.language!r}",
                key="language",
            )
        if not self.api_name:
            raise ConfigurationError("api_name must not be empty", key="api_name")
        if self.on_unrecognized not in UNRECOGNIZED_POLICIES:
            raise ConfigurationError(
                f"on_unrecognized must be one of {', '.join(UNRECOGNIZED_POLICIES)}",
                key="on_unrecognized",
            )
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level {self.log_level!r}", key="log_level")

    @property
    def target_dir(self) -> Path:
        """Directory the generated tree is written to."""
        return self.output_dir / self.api_name

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Copy with every non-``None`` override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(values) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigurationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        return replace(self, **values)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigurationError(f"Config file not found: {explicit}", key="config")
        return explicit
    for candidate in CONFIG_FILE_NAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def _read_toml_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}", key="config") from exc
    if path.name == "pyproject.toml":
        return data.get("tool", {}).get("clientgen", {})
    return data.get("clientgen", data)


def _environment_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for config_field in fields(GeneratorConfig):
        value = environ.get(ENV_PREFIX + config_field.name.upper())
        if value:
            overrides[config_field.name] = value
    return overrides


def load_config(
    path: Optional[Path] = None,
    root: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GeneratorConfig:
    """
    Resolve the generator configuration.

    File values come from ``path`` or the first of ``clientgen.toml`` /
    ``pyproject.toml`` (its ``[tool.clientgen]`` table) under ``root``;
    ``CLIENTGEN_<SETTING>`` environment variables override them.
    """
    root = (root or Path.cwd()).resolve()
    config_path = locate_config_file(root, path)
    data: Dict[str, Any] = _read_toml_config(config_path) if config_path else {}

    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown setting(s) in {config_path}: {', '.join(unknown)}")

    if "output_dir" in data and config_path is not None:
        output_dir = Path(data["output_dir"])
        if not output_dir.is_absolute():
            data["output_dir"] = config_path.parent / output_dir
    data.update(_environment_overrides(os.environ if environ is None else environ))
    return GeneratorConfig(**data)
