"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# Add src directory to Python path for tests
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
tests_path = Path(__file__).parent
sys.path.insert(0, str(tests_path))

from rampante.utils.files import get_command_file, get_scripts_dir, get_stacks_dir  # noqa: E402

DEFINITIONS_MD = """# Stack Definitions

## Available Stacks

### SIMPLE_WEB_APP

- **Description**: A straightforward web application
- **Tags**: web, frontend, simple
- **Priority**: 1
- **Use Cases**:
  - Basic CRUD applications
  - Simple websites

### REACT_SPA

- **Description**: Modern single-page application using React
- **Tags**: web, frontend, react
- **Priority**: 2
- **Use Cases**:
  - Interactive web applications

### CLI_TOOL

- **Description**: Command-line interface tool
- **Tags**: cli, tool, automation, terminal
- **Priority**: 3
- **Use Cases**:
  - Developer tools
  - Automation scripts
"""

STACK_DOCS = {
    "SIMPLE_WEB_APP": """# Simple Web App Stack

## Core Technologies

- **HTML5** - Markup language
- **CSS3** - Styling
- **JavaScript** - Client-side scripting

## Context7 Documentation

- **Express.js** - Web framework
- **SQLite** - Database
""",
    "REACT_SPA": """# React SPA Stack

## Core Technologies

- **React** - UI library
- **TypeScript** - Type safety
- **Vite** - Build tool

## Context7 Documentation

- **React Router** - Client-side routing
- **React Query** - Data fetching
- **Tailwind CSS** - Styling
""",
    "CLI_TOOL": """# CLI Tool Stack

## Core Technologies

- **Deno** - Runtime
- **TypeScript** - Language
""",
}


@dataclass
class TestProject:
    """Test helper to build minimal rampante project structures."""

    root: Path

    @property
    def stacks_dir(self) -> Path:
        return get_stacks_dir(self.root)

    @property
    def command_file(self) -> Path:
        return get_command_file(self.root)

    @property
    def scripts_dir(self) -> Path:
        return get_scripts_dir(self.root)

    def write_catalog(
        self,
        content: str = DEFINITIONS_MD,
        stack_docs: dict[str, str] | None = None,
    ) -> Path:
        self.stacks_dir.mkdir(parents=True, exist_ok=True)
        catalog_path = self.stacks_dir / "DEFINITIONS.md"
        catalog_path.write_text(content, encoding="utf-8")
        docs = STACK_DOCS if stack_docs is None else stack_docs
        for name, doc in docs.items():
            (self.stacks_dir / f"{name}.md").write_text(doc, encoding="utf-8")
        return catalog_path

    def write_command(self, content: str = "Legacy orchestrator") -> Path:
        self.command_file.parent.mkdir(parents=True, exist_ok=True)
        self.command_file.write_text(content, encoding="utf-8")
        return self.command_file


@pytest.fixture
def home_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "fake-home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestProject:
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.delenv("RAMPANTE_TEMPLATES_DIR", raising=False)
    return TestProject(root=root)


@pytest.fixture
def catalog_project(project: TestProject) -> TestProject:
    project.write_catalog()
    return project


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(item.fspath))
        if "tests" not in path.parts:
            continue
        try:
            tests_index = path.parts.index("tests")
        except ValueError:
            continue
        if len(path.parts) <= tests_index + 1:
            continue
        group = path.parts[tests_index + 1]
        if group in {"unit", "cli", "integration"}:
            item.add_marker(getattr(pytest.mark, group))
