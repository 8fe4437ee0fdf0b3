"""Project configuration.

Loads per-app settings from `entrygen.yaml` at the project root:

    apps:
      todo:
        type: web
        caseSensitive: false
        entry: index.js
        backendEntry: server.js
        host: localhost
        port: 8080
        backendPort: 3000
        custom:
          apiUrl: https://api.example.com

The generator also writes the discovered component table back into
ProjectConfig.vue_components after every pass.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    APP_TYPES,
    CONFIG_FILE_NAME,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENVIRONMENTS,
    NETWORK_CONFIG_KEYS,
    TEMP_DIR_NAME,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class ProjectConfig:
    """Settings of one app of a project for one environment."""

    project_dir: str
    temp_dir: str
    app_name: str
    type: str = "web"  # "web" | "mobile" | "desktop"
    env: str = "dev"  # "dev" | "test" | "prod"
    case_sensitive: bool = False
    entry: Optional[str] = None  # Frontend entry override, relative to src/
    backend_entry: Optional[str] = None  # Backend entry override, relative to src/
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    backend_port: Optional[int] = None
    custom: Dict[str, Any] = field(default_factory=dict)
    # Written by the generator: {absolute component path: ComponentInfo}
    vue_components: Dict[str, Any] = field(default_factory=dict)

    @property
    def src_dir(self) -> str:
        return os.path.join(self.project_dir, "src")

    def src_path(self, relative: Optional[str]) -> Optional[str]:
        """Absolute path of a file under src/, or None."""
        if not relative:
            return None
        return os.path.join(self.src_dir, relative)


def code_config(config: ProjectConfig) -> Dict[str, Any]:
    """Configuration values that generated code may see.

    Only the keys under `custom` plus the network addressing keys are
    exposed. Generated entries can end up in public bundles, so nothing
    else from the project configuration is passed through.
    """
    conf = dict(config.custom)
    network = {
        "host": config.host,
        "port": config.port,
        "backendPort": config.backend_port,
    }
    for key in NETWORK_CONFIG_KEYS:
        conf[key] = network[key]
    return conf


def load_config(
    project_dir: str,
    app_name: Optional[str] = None,
    env: str = "dev",
    config_file: str = CONFIG_FILE_NAME,
) -> ProjectConfig:
    """Load the configuration of one app from the project's YAML file.

    Args:
        project_dir: Project root directory
        app_name: App to load; the first app in the file when None
        env: Environment name
        config_file: Config file name relative to project_dir

    Returns:
        ProjectConfig for the app

    Raises:
        ConfigError: If the file is missing or malformed, or the app,
            type or env are unknown
    """
    project_dir = os.path.abspath(project_dir)
    config_path = Path(project_dir) / config_file

    if env not in ENVIRONMENTS:
        raise ConfigError(f"Unknown env '{env}'. Supported: {list(ENVIRONMENTS)}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {config_path}: {e}") from e

    apps = data.get("apps") if isinstance(data, dict) else None
    if not isinstance(apps, dict) or not apps:
        raise ConfigError(f"{config_file} must define at least one app under 'apps'")

    if app_name is None:
        app_name = next(iter(apps))
    if app_name not in apps:
        raise ConfigError(f"App '{app_name}' is not defined in {config_file}")

    options = apps[app_name] or {}
    if not isinstance(options, dict):
        raise ConfigError(f"Options of app '{app_name}' must be a mapping")

    app_type = options.get("type", "web")
    if app_type not in APP_TYPES:
        raise ConfigError(f"App '{app_name}' has unknown type '{app_type}'. Supported: {list(APP_TYPES)}")

    custom = options.get("custom") or {}
    if not isinstance(custom, dict):
        raise ConfigError(f"'custom' option of app '{app_name}' must be a mapping")

    temp_dir = options.get("tempDir") or os.path.join(project_dir, TEMP_DIR_NAME, app_name, env)

    config = ProjectConfig(
        project_dir=project_dir,
        temp_dir=os.path.abspath(os.path.join(project_dir, temp_dir)),
        app_name=app_name,
        type=app_type,
        env=env,
        case_sensitive=bool(options.get("caseSensitive", False)),
        entry=options.get("entry"),
        backend_entry=options.get("backendEntry"),
        host=options.get("host", DEFAULT_HOST),
        port=options.get("port", DEFAULT_PORT),
        backend_port=options.get("backendPort"),
        custom=custom,
    )
    logger.info(f"Loaded config for app '{app_name}' ({app_type}, {env}) from {config_path}")
    return config
