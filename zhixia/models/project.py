"""Project and chapter data models."""
from typing import List, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field

from ..config.constants import DATE_FORMAT


def today() -> str:
    """Current UTC date as a ``YYYY-MM-DD`` string."""
    return datetime.now(timezone.utc).strftime(DATE_FORMAT)


class Chapter(BaseModel):
    """An ordered unit of prose within a project."""

    id: str = Field(description="Chapter id, unique within its project")
    title: str = Field(default="", description="Chapter title")
    content: str = Field(default="", description="Chapter text")
    order: int = Field(description="Zero-based presentation position")

    @property
    def length(self) -> int:
        """Character count of the content."""
        return len(self.content)


class Project(BaseModel):
    """
    A writing project and its chapters.

    ``word_count`` and ``last_modified`` are caches maintained by
    ProjectStore; they are persisted as ``wordCount`` and ``lastModified``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Project id")
    title: str = Field(description="Display title")
    last_modified: str = Field(
        default_factory=today,
        alias="lastModified",
        description="Date of the last mutation (YYYY-MM-DD)"
    )
    word_count: int = Field(
        default=0,
        alias="wordCount",
        description="Sum of chapter content lengths"
    )
    chapters: List[Chapter] = Field(default_factory=list)

    def get_chapter(self, chapter_id: str) -> Optional[Chapter]:
        """Get chapter by id."""
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None

    def to_dict(self) -> dict:
        """Serialize using the persisted (camelCase) field names."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> 'Project':
        """Create from a persisted record."""
        return cls.model_validate(data)


def count_words(chapters: List[Chapter]) -> int:
    """Total character count across chapters."""
    return sum(len(chapter.content) for chapter in chapters)
