"""
Project Registry

Maps project ids to project root directories.

Usage:
    from livetext.projects import SqlProjectRegistry

    registry = SqlProjectRegistry(db)
    root = registry.get_project_path(project_id)  # None if unknown
"""

from .models import Project
from .service import (
    create_project,
    get_project,
    list_projects,
    delete_project,
    SqlProjectRegistry,
)

__all__ = [
    "Project",
    "create_project",
    "get_project",
    "list_projects",
    "delete_project",
    "SqlProjectRegistry",
]
