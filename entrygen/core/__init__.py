"""entrygen core: discovery, metadata extraction and entry generation.

Public API:
    load_config(project_dir, app_name, env) → ProjectConfig
    EntryGenerator(config).generate() → GenerationResult
    WatchController(generator).start()
"""

from .config import ProjectConfig, code_config, load_config
from .errors import (
    ConfigError,
    DiscoveryError,
    EntryGenError,
    EntryWriteError,
    GenerationError,
    RouteCompileError,
)
from .generator import EntryGenerator, GenerationResult
from .metadata import ComponentInfo
from .routing import CompiledRoute, compile_path

__all__ = [
    "ProjectConfig",
    "code_config",
    "load_config",
    "EntryGenerator",
    "GenerationResult",
    "ComponentInfo",
    "CompiledRoute",
    "compile_path",
    "GenerationError",
    "EntryGenError",
    "ConfigError",
    "DiscoveryError",
    "EntryWriteError",
    "RouteCompileError",
]
