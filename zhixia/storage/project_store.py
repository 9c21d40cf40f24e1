"""Durable storage of the full project list."""
import json
import uuid
from typing import Callable, List, Optional, Sequence
from pydantic import ValidationError

from ..config.constants import STORAGE_KEY
from ..models import Project, Chapter, count_words, today
from ..utils.logging import get_logger
from .backends import StorageBackend


def _require_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Project title must not be empty")
    return title


class ProjectStore:
    """
    Single source of truth for all projects.

    Every mutation is one read-modify-write cycle over the whole list
    stored under ``key``. Chapters are only ever replaced wholesale via
    :meth:`replace_chapters`.

    Two stores over the same backend do not coordinate: the last write wins.
    """

    def __init__(
        self,
        backend: StorageBackend,
        key: str = STORAGE_KEY,
        clock: Optional[Callable[[], str]] = None
    ):
        """
        Initialize the store.

        Args:
            backend: Key-value medium the project list is persisted in
            key: Namespace key holding the serialized list
            clock: Returns today's date string (defaults to UTC today)
        """
        self.backend = backend
        self.key = key
        self.clock = clock or today
        self.logger = get_logger("store")

    def list_projects(self) -> List[Project]:
        """
        Load all projects.

        Missing or malformed data yields an empty list; it is never fatal.
        """
        raw = self.backend.load(self.key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [Project.from_dict(item) for item in data]
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            self.logger.warning(f"Discarding malformed data under '{self.key}': {e}")
            return []

    def save_projects(self, projects: Sequence[Project]) -> None:
        """Serialize and persist the full project list."""
        payload = json.dumps([p.to_dict() for p in projects], ensure_ascii=False)
        self.backend.save(self.key, payload)

    def get_project(self, project_id: str) -> Optional[Project]:
        """Get project by id, or None."""
        for project in self.list_projects():
            if project.id == project_id:
                return project
        return None

    def create_project(self, title: str) -> Project:
        """
        Create an empty project and append it to the list.

        Args:
            title: Display title (must not be blank)

        Returns:
            The created project

        Raises:
            ValueError: If title is blank
        """
        project = Project(
            id=str(uuid.uuid4()),
            title=_require_title(title),
            last_modified=self.clock(),
            word_count=0,
            chapters=[]
        )

        projects = self.list_projects()
        projects.append(project)
        self.save_projects(projects)

        self.logger.info(f"Created project {project.id} '{project.title}'")
        return project

    def delete_project(self, project_id: str) -> None:
        """Remove a project. Unknown ids are ignored."""
        projects = self.list_projects()
        remaining = [p for p in projects if p.id != project_id]
        self.save_projects(remaining)

        if len(remaining) == len(projects):
            self.logger.debug(f"delete_project: no project {project_id}")
        else:
            self.logger.info(f"Deleted project {project_id}")

    def rename_project(self, project_id: str, title: str) -> None:
        """
        Change a project's title. Unknown ids are ignored.

        Raises:
            ValueError: If title is blank
        """
        title = _require_title(title)
        projects = self.list_projects()
        for project in projects:
            if project.id == project_id:
                project.title = title
                project.last_modified = self.clock()
                self.logger.info(f"Renamed project {project_id} to '{title}'")
        self.save_projects(projects)

    def replace_chapters(self, project_id: str, chapters: Sequence[Chapter]) -> None:
        """
        Overwrite a project's chapter list and refresh its derived fields.

        This is the only chapter-level mutation; callers compute the new
        full list and submit it in one call. Unknown ids are ignored.

        Args:
            project_id: Target project
            chapters: The complete new chapter list, in order
        """
        projects = self.list_projects()
        for project in projects:
            if project.id == project_id:
                project.chapters = [c.model_copy(deep=True) for c in chapters]
                project.word_count = count_words(project.chapters)
                project.last_modified = self.clock()
                self.logger.debug(
                    f"Replaced chapters of {project_id}: "
                    f"{len(project.chapters)} chapters, {project.word_count} chars"
                )
        self.save_projects(projects)
