"""Editor session: an in-memory working copy of one project's chapters."""
import uuid
from typing import Callable, List, Optional

from ..config.constants import (
    DEFAULT_CHAPTER_TITLE,
    GENERATED_TEXT_SEPARATOR,
    CONFIRM_DELETE_CHAPTER
)
from ..exceptions import ProjectNotFoundError
from ..models import Chapter
from ..storage import ProjectStore
from ..utils.logging import get_logger


def _decline(message: str) -> bool:
    return False


class EditorSession:
    """
    Holds one project's chapters and keeps the store in sync.

    Each mutation updates the working copy first, then submits the complete
    chapter list through :meth:`ProjectStore.replace_chapters`. The working
    copy is a deep copy; nothing is shared with the store's records.
    """

    def __init__(
        self,
        store: ProjectStore,
        project_id: str,
        confirm: Optional[Callable[[str], bool]] = None
    ):
        """
        Open a project for editing.

        Args:
            store: Store the project is loaded from and written back to
            project_id: Project to open
            confirm: Asked before destructive actions; declines when omitted

        Raises:
            ProjectNotFoundError: If the project does not exist
        """
        project = store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        self.logger = get_logger("editor")
        self.store = store
        self.project_id = project_id
        self.project_title = project.title
        self.confirm = confirm or _decline

        self.chapters: List[Chapter] = [c.model_copy(deep=True) for c in project.chapters]
        self.sort_ascending = True
        self.selected_chapter_id: Optional[str] = None

        ordered = self._in_order()
        if ordered:
            self.selected_chapter_id = ordered[0].id

    def _in_order(self) -> List[Chapter]:
        return sorted(self.chapters, key=lambda c: c.order)

    def _find(self, chapter_id: str) -> Optional[Chapter]:
        for chapter in self.chapters:
            if chapter.id == chapter_id:
                return chapter
        return None

    def _submit(self) -> None:
        self.store.replace_chapters(self.project_id, self.chapters)

    @property
    def selected_chapter(self) -> Optional[Chapter]:
        """The chapter shown in the detail view, if any."""
        if self.selected_chapter_id is None:
            return None
        return self._find(self.selected_chapter_id)

    @property
    def display_chapters(self) -> List[Chapter]:
        """Chapters sorted by order in the current display direction."""
        return sorted(self.chapters, key=lambda c: c.order, reverse=not self.sort_ascending)

    def add_chapter(self) -> Chapter:
        """
        Append an empty chapter, select it and persist.

        The default title uses the chapter count at creation time and is
        not renumbered later.
        """
        count = len(self.chapters)
        chapter = Chapter(
            id=str(uuid.uuid4()),
            title=DEFAULT_CHAPTER_TITLE.format(n=count + 1),
            content="",
            order=count
        )
        self.chapters = self.chapters + [chapter]
        self.selected_chapter_id = chapter.id
        self._submit()

        self.logger.info(f"Added chapter {chapter.id} to project {self.project_id}")
        return chapter

    def delete_chapter(self, chapter_id: str) -> bool:
        """
        Delete a chapter after confirmation and renumber the rest.

        Args:
            chapter_id: Chapter to delete

        Returns:
            False if the user declined, True otherwise
        """
        if not self.confirm(CONFIRM_DELETE_CHAPTER):
            self.logger.debug(f"Deletion of chapter {chapter_id} declined")
            return False

        remaining = [c for c in self._in_order() if c.id != chapter_id]
        self.chapters = [
            c.model_copy(update={'order': index}) for index, c in enumerate(remaining)
        ]

        if self.selected_chapter_id == chapter_id:
            self.selected_chapter_id = self.chapters[0].id if self.chapters else None

        self._submit()
        self.logger.info(f"Deleted chapter {chapter_id} from project {self.project_id}")
        return True

    def update_chapter(
        self,
        chapter_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None
    ) -> None:
        """
        Merge new title and/or content into a chapter and persist.

        Every call is a full round-trip to the store; nothing is debounced.
        """
        updates = {}
        if title is not None:
            updates['title'] = title
        if content is not None:
            updates['content'] = content

        self.chapters = [
            c.model_copy(update=updates) if c.id == chapter_id else c
            for c in self.chapters
        ]
        self._submit()

    def toggle_sort_order(self) -> bool:
        """
        Flip the display direction. Order values and storage are untouched.

        Returns:
            The new ``sort_ascending`` value
        """
        self.sort_ascending = not self.sort_ascending
        return self.sort_ascending

    def select_chapter(self, chapter_id: str) -> None:
        """Show a chapter in the detail view. Unknown ids are ignored."""
        if self._find(chapter_id) is not None:
            self.selected_chapter_id = chapter_id

    def apply_generated_text(self, text: str) -> bool:
        """
        Append generated text to the selected chapter, separated by a blank line.

        Returns:
            True if the text was applied
        """
        chapter = self.selected_chapter
        if chapter is None or not text:
            return False

        self.update_chapter(chapter.id, content=chapter.content + GENERATED_TEXT_SEPARATOR + text)
        return True
