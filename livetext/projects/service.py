# FILE: livetext/projects/service.py
"""
Project registry service.

CRUD over the projects table plus SqlProjectRegistry, the adapter the source
edit service uses to resolve a project id to its root directory.
"""
from __future__ import annotations

import logging
import os
from typing import List, Optional

from sqlalchemy.orm import Session

from livetext.projects import models, schemas

logger = logging.getLogger(__name__)


def create_project(db: Session, data: schemas.ProjectCreate) -> models.Project:
    project = models.Project(name=data.name, path=os.path.abspath(data.path))
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("[projects] Registered %s at %s", project.id, project.path)
    return project


def get_project(db: Session, project_id: str) -> Optional[models.Project]:
    return db.query(models.Project).filter(models.Project.id == project_id).first()


def list_projects(db: Session) -> List[models.Project]:
    return db.query(models.Project).order_by(models.Project.created_at.desc()).all()


def delete_project(db: Session, project_id: str) -> bool:
    project = get_project(db, project_id)
    if not project:
        return False
    db.delete(project)
    db.commit()
    return True


class SqlProjectRegistry:
    """Resolves project ids against the projects table."""

    def __init__(self, db: Session):
        self.db = db

    def get_project_path(self, project_id: str) -> Optional[str]:
        project = get_project(self.db, project_id)
        if project is None:
            return None
        return project.path
