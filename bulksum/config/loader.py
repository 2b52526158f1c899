"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigError, SourceNotFoundError
from .models import ProjectConfig, SourceConfig

DEFAULT_CONFIG_PATH = Path("bulk-summarize.yaml")


class Config:
    """Configuration manager.

    Holds the config path and any command-line overrides. An instance is
    passed to every pipeline operation instead of module-level path state.
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        output_dir: Optional[Path] = None,
    ) -> None:
        """Initialize config manager."""
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.output_dir_override = Path(output_dir) if output_dir else None
        self._config: Optional[ProjectConfig] = None

    @property
    def config(self) -> ProjectConfig:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def output_root(self) -> Path:
        """Root directory holding one subdirectory per source."""
        if self.output_dir_override is not None:
            return self.output_dir_override.expanduser()
        return Path(self.config.settings.output_dir).expanduser()

    def get_source_dir(self, source_id: str) -> Path:
        """Directory owned by a single source."""
        return self.output_root / source_id

    def get_llm_config(self) -> Dict[str, Any]:
        """Get LLM configuration dict."""
        llm_config = self.config.llm.model_dump()

        # Handle API key from environment if specified
        if llm_config.get("api_key_env") and not llm_config.get("api_key"):
            api_key = os.environ.get(llm_config["api_key_env"])
            if api_key:
                llm_config["api_key"] = api_key

        return llm_config

    def get_source(self, source_id: str) -> SourceConfig:
        """Source with exactly this id, enabled or not."""
        for source in self.config.sources:
            if source.id == source_id:
                return source
        raise SourceNotFoundError(f"No source with id: {source_id}")

    def select_sources(
        self,
        source_filter: Optional[str] = None,
        include_disabled: bool = False,
    ) -> List[SourceConfig]:
        """Sources matching a filter by exact id, id fragment or name fragment."""
        sources = self.config.sources
        if not include_disabled:
            sources = [s for s in sources if s.enabled]

        if not source_filter:
            return list(sources)

        exact = [s for s in sources if s.id == source_filter]
        if exact:
            return exact

        needle = source_filter.lower()
        matched = [
            s for s in sources
            if needle in s.id.lower() or needle in s.name.lower()
        ]
        if not matched:
            raise SourceNotFoundError(f"No source found matching: {source_filter}")
        return matched


def format_validation_errors(error: ValidationError) -> List[str]:
    """One line per violated field, as dotted path and message."""
    lines = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"])
        lines.append(f"{path}: {issue['msg']}" if path else issue["msg"])
    return lines


def load_config(config_path: Path) -> ProjectConfig:
    """Load configuration from a YAML (or JSON) file."""
    if not config_path.exists():
        raise ConfigError(
            f"Config not found: {config_path}",
            ["Run 'bulk-summarize init' to create a starter config"],
        )

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {config_path}", [str(e)])

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"Invalid config: {config_path}", ["top level must be a mapping"])

    try:
        return ProjectConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {config_path}", format_validation_errors(e))


def save_config(config: ProjectConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.model_dump(mode="json", exclude_none=True),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
