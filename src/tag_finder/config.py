"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath

MAX_THREAD_COUNT_CAP = 256

DEFAULT_EXCLUDE_DIRS = (
    "node_modules",
    "dist",
    "build",
    ".git",
    ".vscode",
    ".idea",
    "target",
)
DEFAULT_INCLUDE_EXTENSIONS = ("html", "js", "jsx", "ts", "tsx", "php")
DEFAULT_CSS_EXTENSIONS = ("css", "scss")
CONFIG_FILE_NAMES = (
    "tag-finder.toml",
    ".tag-finder.toml",
    "config/tag-finder.toml",
)


def normalize_extension(extension: str) -> str:
    """Return an extension without its leading dot, lower-cased."""
    return extension.strip().lstrip(".").lower()


def path_extension(path: PurePath | str) -> str:
    """Return the normalized extension of a path, or an empty string."""
    return normalize_extension(PurePath(path).suffix)


@dataclass(slots=True, frozen=True)
class FilterRules:
    """Directory exclusions and extension inclusions for one scan."""

    exclude_dirs: frozenset[str]
    include_extensions: frozenset[str]
    css_extensions: frozenset[str]

    @classmethod
    def build(
        cls,
        exclude_dirs: Iterable[str],
        include_extensions: Iterable[str],
        css_extensions: Iterable[str],
    ) -> FilterRules:
        """Build rules with normalized extensions."""
        return cls(
            exclude_dirs=frozenset(exclude_dirs),
            include_extensions=frozenset(normalize_extension(ext) for ext in include_extensions),
            css_extensions=frozenset(normalize_extension(ext) for ext in css_extensions),
        )

    @property
    def scanned_extensions(self) -> frozenset[str]:
        return self.include_extensions | self.css_extensions

    def should_exclude_dir(self, name: str) -> bool:
        """Return True when a directory name is excluded (exact match)."""
        return name in self.exclude_dirs

    def is_css_file(self, path: PurePath | str) -> bool:
        return path_extension(path) in self.css_extensions


@dataclass(slots=True, frozen=True)
class ExecutionOptions:
    """Worker pool sizing and progress toggle shared by all components."""

    thread_count: int | None = None
    progress_enabled: bool = True

    def resolved_thread_count(self) -> int:
        """Return the explicit thread count or the available parallelism."""
        if self.thread_count is not None:
            return self.thread_count
        return os.cpu_count() or 1


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Fully merged configuration."""

    rules: FilterRules
    execution: ExecutionOptions
    source: Path | None = None

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for tool responses."""
        return {
            "source": str(self.source) if self.source is not None else None,
            "scan": {
                "exclude_dirs": sorted(self.rules.exclude_dirs),
                "include_extensions": sorted(self.rules.include_extensions),
                "css_extensions": sorted(self.rules.css_extensions),
            },
            "execution": {
                "thread_count": self.execution.thread_count,
                "progress": self.execution.progress_enabled,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    thread_count: int | None = None
    progress_enabled: bool | None = None


def default_filter_rules() -> FilterRules:
    return FilterRules.build(
        exclude_dirs=DEFAULT_EXCLUDE_DIRS,
        include_extensions=DEFAULT_INCLUDE_EXTENSIONS,
        css_extensions=DEFAULT_CSS_EXTENSIONS,
    )


def default_config() -> AppConfig:
    """Build the built-in default configuration."""
    return AppConfig(rules=default_filter_rules(), execution=ExecutionOptions())


def find_config_file(base_dir: Path) -> Path | None:
    """Return the first known config file under base_dir, if any."""
    for name in CONFIG_FILE_NAMES:
        candidate = base_dir / name
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> dict[str, object]:
    """Load a tag-finder TOML file."""
    with path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def merge_config(
    base: AppConfig,
    payload: dict[str, object],
    overrides: CliOverrides,
    source: Path | None = None,
) -> AppConfig:
    """Merge defaults, config file, then CLI/startup overrides."""
    scan_payload = _get_table(payload, "scan")
    execution_payload = _get_table(payload, "execution")

    exclude_dirs: Iterable[str] = base.rules.exclude_dirs
    if "exclude_dirs" in scan_payload:
        exclude_dirs = _tuple_of_strings(scan_payload["exclude_dirs"], "scan", "exclude_dirs")
    include_extensions: Iterable[str] = base.rules.include_extensions
    if "include_extensions" in scan_payload:
        include_extensions = _tuple_of_strings(
            scan_payload["include_extensions"], "scan", "include_extensions"
        )
    css_extensions: Iterable[str] = base.rules.css_extensions
    if "css_extensions" in scan_payload:
        css_extensions = _tuple_of_strings(
            scan_payload["css_extensions"], "scan", "css_extensions"
        )

    thread_count = _optional_positive_int_with_cap(
        execution_payload.get("thread_count"),
        "execution.thread_count",
        base.execution.thread_count,
        MAX_THREAD_COUNT_CAP,
    )
    progress_enabled = base.execution.progress_enabled
    if "progress" in execution_payload:
        raw_progress = execution_payload["progress"]
        if not isinstance(raw_progress, bool):
            raise ValueError("Config field 'execution.progress' must be a boolean.")
        progress_enabled = raw_progress

    merged = AppConfig(
        rules=FilterRules.build(
            exclude_dirs=exclude_dirs,
            include_extensions=include_extensions,
            css_extensions=css_extensions,
        ),
        execution=ExecutionOptions(
            thread_count=thread_count,
            progress_enabled=progress_enabled,
        ),
        source=source,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: AppConfig, overrides: CliOverrides) -> AppConfig:
    """Apply startup overrides at highest precedence."""
    thread_count = _optional_positive_int_with_cap(
        overrides.thread_count,
        "overrides.thread_count",
        config.execution.thread_count,
        MAX_THREAD_COUNT_CAP,
    )
    progress_enabled = (
        overrides.progress_enabled
        if overrides.progress_enabled is not None
        else config.execution.progress_enabled
    )
    return AppConfig(
        rules=config.rules,
        execution=ExecutionOptions(thread_count=thread_count, progress_enabled=progress_enabled),
        source=config.source,
    )


def load_effective_config(
    base_dir: Path,
    config_path: Path | None = None,
    overrides: CliOverrides | None = None,
) -> AppConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    if config_path is not None:
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        source: Path | None = config_path
    else:
        source = find_config_file(base_dir)
    payload = load_config_file(source) if source is not None else {}
    return merge_config(default_config(), payload, overrides or CliOverrides(), source=source)


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int | None,
    cap: int | None,
) -> int | None:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value
