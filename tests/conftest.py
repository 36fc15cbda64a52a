"""
Pytest configuration for the LiveText test suite.

Shared fixtures:
- project_root: empty project directory under tmp_path
- write_file: writes UTF-8 files relative to project_root
- registry: in-memory project registry mapping "proj-1" to project_root
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pytest


class DictRegistry:
    """Project registry backed by a plain dict."""

    def __init__(self, projects=None):
        self.projects = dict(projects or {})
        self.lookups = []

    def get_project_path(self, project_id):
        self.lookups.append(project_id)
        return self.projects.get(project_id)


@pytest.fixture
def project_root(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project_root):
    def _write(rel_path, content):
        path = project_root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        return path
    return _write


@pytest.fixture
def read_file(project_root):
    def _read(rel_path):
        with open(project_root / rel_path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()
    return _read


@pytest.fixture
def registry(project_root):
    return DictRegistry({"proj-1": str(project_root)})
