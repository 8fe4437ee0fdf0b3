"""App membership filtering of discovered components."""

from typing import Dict

from .metadata import ComponentInfo


def is_active(info: ComponentInfo, app_name: str) -> bool:
    """A component without apps belongs to every app.

    A component whose `info.apps` listed items belongs only to the valid
    app names among them, so a list of nothing but invalid items matches
    no app at all.
    """
    if info.apps or info.restricted:
        return app_name in info.apps
    return True


def filter_components(
    components: Dict[str, ComponentInfo], app_name: str
) -> Dict[str, ComponentInfo]:
    """Drop components that do not belong to app_name, keeping order."""
    return {
        file_path: info
        for file_path, info in components.items()
        if is_active(info, app_name)
    }
