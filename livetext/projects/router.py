# FILE: livetext/projects/router.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from livetext.db import get_db
from livetext.projects import service, schemas

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=schemas.ProjectOut, status_code=201)
def create_project(data: schemas.ProjectCreate, db: Session = Depends(get_db)):
    if not data.name.strip() or not data.path.strip():
        raise HTTPException(status_code=400, detail="Project name and path are required")
    return service.create_project(db, data)


@router.get("", response_model=List[schemas.ProjectOut])
def list_projects(db: Session = Depends(get_db)):
    return service.list_projects(db)


@router.get("/{project_id}", response_model=schemas.ProjectOut)
def get_project(project_id: str, db: Session = Depends(get_db)):
    project = service.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: str, db: Session = Depends(get_db)):
    if not service.delete_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return None
