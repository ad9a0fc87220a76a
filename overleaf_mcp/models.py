"""Pydantic models for the Overleaf MCP system.

This module contains the data models shared by the mirror, the section
extractor and the MCP tools, including section records, git operation results
and the response models returned to callers.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import Literal

from pydantic import BaseModel
from pydantic import computed_field

PREVIEW_LENGTH = 100

# === Core Operation Models ===


class OperationStatus(BaseModel):
    """Generic status for mutating operations."""

    success: bool
    message: str
    details: dict[str, Any] | None = None  # e.g. the local path written
    warnings: list[str] = []


# === Document Structure Models ===


class SectionKind(str, Enum):
    """LaTeX sectioning commands, outermost first.

    The order is informational only: sections are never nested under one
    another.
    """

    PART = "part"
    CHAPTER = "chapter"
    SECTION = "section"
    SUBSECTION = "subsection"
    SUBSUBSECTION = "subsubsection"
    PARAGRAPH = "paragraph"
    SUBPARAGRAPH = "subparagraph"


class Section(BaseModel):
    """One heading-delimited span of a document."""

    kind: SectionKind
    title: str
    start_offset: int  # character offset of the heading marker
    content: str
    starred: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def preview(self) -> str:
        """First characters of the content with whitespace collapsed."""
        return " ".join(self.content[:PREVIEW_LENGTH].split())


class SectionOutline(BaseModel):
    """Kind, title and a short preview of a section."""

    kind: SectionKind
    title: str
    preview: str

    @classmethod
    def from_section(cls, section: Section) -> SectionOutline:
        return cls(kind=section.kind, title=section.title, preview=section.preview)


class SectionsList(BaseModel):
    """All sections of a file, in document order."""

    file_path: str
    total_sections: int
    sections: list[Section]


class SectionContent(BaseModel):
    """Full content of a single section."""

    file_path: str
    title: str
    kind: SectionKind
    content: str
    content_length: int


# === File Models ===


class FileListing(BaseModel):
    """Files found in a project mirror."""

    project_id: str
    extension: str | None = None
    total_files: int
    files: list[str]


class FileContent(BaseModel):
    """Text content of a project file."""

    project_id: str
    file_path: str
    size: int  # in characters
    content: str


# === Git Operation Models ===


class CommitResult(BaseModel):
    """Outcome of a commit that did not fail.

    ``noop`` means there was nothing to commit; it is a success, not an error.
    """

    status: Literal["success", "noop"]
    message: str

    @property
    def is_noop(self) -> bool:
        return self.status == "noop"


class PushResult(BaseModel):
    """Outcome of a successful push."""

    message: str


class StatusReport(BaseModel):
    """Working-copy status as reported by git."""

    project_id: str
    status: str


# === Project Models ===


class ProjectInfo(BaseModel):
    """A configured project, without its token."""

    key: str
    name: str
    project_id: str


class ProjectSummary(BaseModel):
    """Overview of a project: its LaTeX files and the outline of the main file."""

    name: str
    project_id: str
    total_tex_files: int
    files: list[str]
    main_file: str | None = None
    total_sections: int = 0
    outline: list[SectionOutline] = []  # first sections of the main file
    remaining_sections: int = 0
