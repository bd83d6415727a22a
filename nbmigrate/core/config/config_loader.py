"""Migration settings.

Settings come from a YAML file (``nbmigrate.yaml``) validated by
pydantic models. The file is found through ``--config``, the
``NBMIGRATE_CONFIG`` environment variable (``.env`` files are honoured)
or the current directory, in that order. No file means defaults.

Example::

    source_imports:
      - native-base
      - "@legacy/ui"
    token_import: "@nordlys/tokens"
    targets:
      Button:
        module: "@nordlys/core"
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..constants import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_SOURCE_IMPORTS,
    DEFAULT_TARGETS,
    PRIMITIVES_MODULE,
)
from ..exceptions import ConfigError

logger = logging.getLogger(__name__)


class ComponentTarget(BaseModel):
    """Where one legacy component's replacement is imported from."""
    module: str = Field(..., description="Module path of the target component", min_length=1)
    name: Optional[str] = Field(None, description="Target export name when it differs from the legacy one")
    types: List[str] = Field(default_factory=list, description="Prop types that move with the component")


def _default_targets() -> Dict[str, ComponentTarget]:
    return {name: ComponentTarget(**target) for name, target in DEFAULT_TARGETS.items()}


class MigrationSettings(BaseModel):
    """Settings for one migration run."""
    source_imports: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SOURCE_IMPORTS),
        description="Legacy import paths to migrate",
        min_length=1,
    )
    targets: Dict[str, ComponentTarget] = Field(
        default_factory=_default_targets,
        description="Per-component target modules, merged over the defaults",
    )
    components: Optional[List[str]] = Field(
        None, description="Only migrate these legacy components (all when unset)"
    )
    token_import: Optional[str] = Field(
        None, description="Module exporting space/radius/color token helpers"
    )
    fallback_import: Optional[str] = Field(
        None, description="Where legacy specifiers without a rewriter are moved"
    )
    primitives_import: str = Field(PRIMITIVES_MODULE, description="Module providing View and StyleSheet")
    prune_unused: bool = Field(True, description="Remove bindings left unused after rewriting")

    @field_validator("targets", mode="after")
    @classmethod
    def _merge_default_targets(cls, value: Dict[str, ComponentTarget]) -> Dict[str, ComponentTarget]:
        merged = _default_targets()
        merged.update(value)
        return merged

    def is_legacy_path(self, path: str) -> bool:
        return path in self.source_imports

    def is_enabled(self, component: str) -> bool:
        return self.components is None or component in self.components

    def target_for(self, component: str) -> Optional[ComponentTarget]:
        return self.targets.get(component)

    def target_name(self, component: str) -> str:
        """Export name of the target component (the tag used in output)."""
        target = self.targets.get(component)
        if target is None or not target.name:
            return component
        return target.name


def get_config_path(explicit: Optional[str] = None) -> Optional[Path]:
    """Resolve the configuration file to load.

    Args:
        explicit: Path given on the command line

    Returns:
        Path to the file, or None when no configuration exists
    """
    if explicit:
        return Path(explicit)

    load_dotenv()
    from_env = os.getenv(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)

    local = Path.cwd() / DEFAULT_CONFIG_FILE
    if local.exists():
        return local
    return None


def load_settings(path: Optional[str] = None) -> MigrationSettings:
    """Load and validate migration settings.

    Args:
        path: Explicit configuration file; resolved with get_config_path()

    Returns:
        Validated MigrationSettings (defaults when no file is found)

    Raises:
        ConfigError: If the file cannot be read or fails validation
    """
    config_path = get_config_path(path)
    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return MigrationSettings()

    try:
        with open(config_path, "r") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read configuration: {e}", str(config_path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", str(config_path)) from e

    if not isinstance(raw, dict):
        raise ConfigError("top level must be a mapping", str(config_path))

    try:
        settings = MigrationSettings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid settings: {e}", str(config_path)) from e

    logger.info("Loaded settings from %s (legacy paths: %s)", config_path, ", ".join(settings.source_imports))
    return settings
