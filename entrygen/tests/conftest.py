"""Shared fixtures for entrygen tests."""

import os
from pathlib import Path

import pytest

from entrygen.core.config import ProjectConfig


def component_source(script: str) -> str:
    return f"<template>\n  <div></div>\n</template>\n\n<script>\n{script}\n</script>\n"


class ProjectBuilder:
    """Creates component files under a temporary project's src/ dir."""

    def __init__(self, root: Path):
        self.root = root
        self.src = root / "src"
        self.src.mkdir(parents=True, exist_ok=True)

    def component(self, relative: str, script: str = "export default {};") -> str:
        return self.file(relative, component_source(script))

    def file(self, relative: str, content: str) -> str:
        path = self.src / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return str(path)

    def config(self, **overrides) -> ProjectConfig:
        options = {
            "project_dir": str(self.root),
            "temp_dir": os.path.join(str(self.root), ".entrygen", "site", "dev"),
            "app_name": "site",
        }
        options.update(overrides)
        return ProjectConfig(**options)


@pytest.fixture
def project(tmp_path) -> ProjectBuilder:
    return ProjectBuilder(tmp_path / "project")
