"""Entry generation pipeline.

One generation pass runs, in order:

    discover → extract + validate → filter by app → compile routes
             → render entries → write entries → report errors

Every pass starts from scratch and returns a fresh GenerationResult; the
component table it produced is then published to the project config.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, MutableSequence, Optional

from .config import ProjectConfig
from .discovery import discover_components
from .errors import ErrorCollector, GenerationError
from .membership import filter_components
from .metadata import ComponentInfo, extract_component_info
from .rendering import JinjaTemplateRenderer, TemplateRenderer, render_entries
from .routing import CompiledRoute, compile_routes
from .writer import EntryWriter

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    components: Dict[str, ComponentInfo] = field(default_factory=dict)
    routes: List[CompiledRoute] = field(default_factory=list)
    entries: Dict[str, str] = field(default_factory=dict)
    errors: List[GenerationError] = field(default_factory=list)


class EntryGenerator:
    """Generates the frontend and backend entries of one app.

    Attributes:
        config: Project configuration; vue_components is replaced after
            every pass
        error_channel: Externally owned list that receives the errors of
            each pass once the entries are written
    """

    def __init__(
        self,
        config: ProjectConfig,
        renderer: Optional[TemplateRenderer] = None,
        error_channel: Optional[MutableSequence] = None,
        writer: Optional[EntryWriter] = None,
    ):
        self.config = config
        self.error_channel = error_channel
        self._renderer = renderer or JinjaTemplateRenderer()
        self._writer = writer or EntryWriter(config.temp_dir)
        self._errors = ErrorCollector(config.project_dir)
        self._initialized = False
        self.pass_count = 0

    def generate(self) -> GenerationResult:
        """Run one full generation pass.

        Per-file problems are collected, not raised.

        Returns:
            GenerationResult of this pass

        Raises:
            DiscoveryError: If src/ cannot be read
            EntryWriteError: If an entry file cannot be written
        """
        config = self.config
        errors = self._errors
        errors.reset()
        self.pass_count += 1

        discovery = discover_components(config.project_dir)
        for dir_path, reason in discovery.unreadable:
            errors.add(dir_path, f"Cannot read directory: {reason}")

        scanned: Dict[str, ComponentInfo] = {}
        for file_path in discovery.paths:
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                errors.add(file_path, f"Cannot read component file: {e}")
                continue
            scanned[file_path] = extract_component_info(content, file_path, errors)

        components = filter_components(scanned, config.app_name)
        config.vue_components = dict(components)

        routes = compile_routes(components, config.case_sensitive, errors)
        entries = render_entries(config, components, routes, self._renderer)

        self._writer.write(entries, init=not self._initialized)
        self._initialized = True

        if self.error_channel is not None:
            errors.push(self.error_channel)

        logger.info(
            f"Generated {', '.join(entries)} entries for app '{config.app_name}': "
            f"{len(components)} components, {len(routes)} page routes, {len(errors)} errors"
        )
        return GenerationResult(
            components=dict(components),
            routes=routes,
            entries=entries,
            errors=errors.errors,
        )
