"""Entry module rendering.

Renders the frontend entry (imports every active component and registers
page routes) and, for web apps, the backend entry (catch-all guard over
compiled page routes) from Jinja2 templates.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import ProjectConfig, code_config
from .constants import APP_TYPE_WEB, ENTRY_BACKEND, ENTRY_FRONTEND
from .metadata import ComponentInfo
from .routing import CompiledRoute

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateRenderer(Protocol):
    def render(self, template_name: str, data: Dict[str, Any]) -> str:
        ...


class JinjaTemplateRenderer:
    """Renders `<name>.js.jinja2` templates from a directory."""

    def __init__(self, templates_dir: Optional[Path] = None):
        templates_dir = templates_dir or TEMPLATES_DIR
        if not templates_dir.exists():
            logger.error(f"Templates directory not found at {templates_dir}")

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, data: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template(f"{template_name}.js.jinja2")
        return template.render(**data)


def render_entries(
    config: ProjectConfig,
    components: Dict[str, ComponentInfo],
    routes: List[CompiledRoute],
    renderer: TemplateRenderer,
) -> Dict[str, str]:
    """Render entry sources for the current app.

    Args:
        config: Project configuration
        components: Active component table
        routes: Compiled page routes of the active components
        renderer: Template renderer

    Returns:
        {"frontend": source} plus "backend" for web apps
    """
    entries: Dict[str, str] = {}

    if config.type == APP_TYPE_WEB:
        entries[ENTRY_BACKEND] = renderer.render(ENTRY_BACKEND, {
            "env": config.env,
            "app_name": config.app_name,
            "page_paths": [route.regexp for route in routes],
            "entry": config.src_path(config.backend_entry),
            "conf": code_config(config),
        })

    entries[ENTRY_FRONTEND] = renderer.render(ENTRY_FRONTEND, {
        "vue_components": components,
        "entry": config.src_path(config.entry),
        "case_sensitive": bool(config.case_sensitive),
    })

    logger.debug(f"Rendered entries: {sorted(entries)}")
    return entries
