# FILE: livetext/source_edit/schemas.py
"""
Source edit Pydantic schemas.

Wire names follow the inspector UI (camelCase); Python code uses the
snake_case field names.
"""
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    PROJECT_NOT_FOUND = "project_not_found"
    NO_CANDIDATES = "no_candidates"
    NO_MATCH = "no_match"
    UNCHANGED = "unchanged"
    AMBIGUOUS_MATCH = "ambiguous_match"
    IO_ERROR = "io_error"
    INTERNAL = "internal"


class ElementHint(BaseModel):
    """Structural description of the DOM node being edited."""
    model_config = ConfigDict(populate_by_name=True)

    tag: str = ""
    id: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="className")
    selector: Optional[str] = None  # Logged only


class OperationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    files_modified: int = Field(default=0, alias="filesModified")
    modified_files: List[str] = Field(default_factory=list, alias="modifiedFiles")
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = Field(default=None, alias="errorKind")

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "OperationResult":
        return cls(success=False, error=message, error_kind=kind)


# ============== REQUESTS ==============

class ReplaceBySelectorRequest(BaseModel):
    """Fields accept any JSON value; the service validates them and answers
    with an invalid_input result instead of a 422."""
    model_config = ConfigDict(populate_by_name=True)

    project_id: Optional[Any] = Field(default=None, alias="projectId")
    element_info: Optional[Any] = Field(default=None, alias="elementInfo")
    original_text: Optional[Any] = Field(default=None, alias="originalText")
    new_text: Optional[Any] = Field(default=None, alias="newText")


class ReplaceInProjectRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: Optional[Any] = Field(default=None, alias="projectId")
    original_text: Optional[Any] = Field(default=None, alias="originalText")
    new_text: Optional[Any] = Field(default=None, alias="newText")


class ReadBase64Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    file_path: str = Field(alias="filePath")


class ReadBase64Response(BaseModel):
    data: str


class SaveBase64ImageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    file_path: str = Field(alias="filePath")
    base64_data: str = Field(alias="base64Data")


class FileWriteResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    path: Optional[str] = None
    bytes_written: int = Field(default=0, alias="bytesWritten")
    error: Optional[str] = None
