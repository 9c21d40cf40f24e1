"""State behind the writing and analysis side panels."""
from typing import Callable, List, Optional, Set

from ..config.constants import DEFAULT_MODEL
from ..editor import EditorSession
from ..models import Chapter
from ..utils.logging import get_logger
from .client import AssistClient
from .templates import (
    PromptTemplate,
    get_writing_model,
    get_analysis_model,
    get_writing_template,
    get_analysis_method
)


class _ResultPanel:
    """Holds a result text that can be copied out."""

    def __init__(self):
        self.logger = get_logger("assist.panels")
        self.result = ""
        self.copied = False

    def copy_result(self, clipboard: Callable[[str], None]) -> bool:
        """
        Hand the current result to a clipboard writer.

        Failures are logged and reported only through ``copied`` staying False.
        """
        self.copied = False
        try:
            clipboard(self.result)
        except Exception as e:
            self.logger.error(f"Failed to copy text: {type(e).__name__}: {e}")
            return False
        self.copied = True
        return True


class WritingPanel(_ResultPanel):
    """Compose a generation request and apply its result to the editor."""

    def __init__(self, client: AssistClient, model_id: str = DEFAULT_MODEL):
        super().__init__()
        self.client = client
        self.model = get_writing_model(model_id)
        self.template: Optional[PromptTemplate] = None
        self.prompt_text = ""
        self.custom_prompt = ""
        self.referenced_chapter_ids: Set[str] = set()

    @property
    def generated_text(self) -> str:
        return self.result

    def select_model(self, model_id: str) -> None:
        self.model = get_writing_model(model_id)

    def select_template(self, template_id: str) -> None:
        """Pick a template; any previously chosen suggested prompt is cleared."""
        self.template = get_writing_template(template_id)
        self.prompt_text = ""

    def select_prompt(self, prompt_text: str) -> None:
        self.prompt_text = prompt_text

    def toggle_reference(self, chapter_id: str) -> bool:
        """Add or remove a chapter from the referenced set. Returns True if now referenced."""
        if chapter_id in self.referenced_chapter_ids:
            self.referenced_chapter_ids.discard(chapter_id)
            return False
        self.referenced_chapter_ids.add(chapter_id)
        return True

    def compose_prompt(self) -> str:
        parts = [p.strip() for p in (self.prompt_text, self.custom_prompt)]
        return "\n".join(p for p in parts if p)

    @property
    def can_generate(self) -> bool:
        return self.template is not None and bool(self.compose_prompt())

    async def run(self) -> Optional[str]:
        """
        Request generated text.

        Returns:
            The generated text, or None if no template or prompt was chosen
        """
        if not self.can_generate:
            return None

        references: List[str] = sorted(self.referenced_chapter_ids)
        self.result = await self.client.generate(self.model.id, self.compose_prompt(), references)
        self.copied = False
        return self.result

    def apply(self, session: EditorSession) -> bool:
        """Append the generated text to the session's selected chapter."""
        if not session.apply_generated_text(self.result):
            return False
        self.result = ""
        return True

    def reset(self) -> None:
        self.result = ""
        self.copied = False
        self.template = None
        self.prompt_text = ""
        self.custom_prompt = ""
        self.referenced_chapter_ids = set()


class AnalysisPanel(_ResultPanel):
    """Run an analysis method against one chapter."""

    def __init__(self, client: AssistClient, model_id: str = DEFAULT_MODEL):
        super().__init__()
        self.client = client
        self.model = get_analysis_model(model_id)
        self.method: Optional[PromptTemplate] = None
        self.prompt_text = ""

    def select_model(self, model_id: str) -> None:
        self.model = get_analysis_model(model_id)

    def select_method(self, method_id: str) -> None:
        self.method = get_analysis_method(method_id)
        self.prompt_text = ""

    def select_prompt(self, prompt_text: str) -> None:
        self.prompt_text = prompt_text

    async def run(self, chapter: Optional[Chapter]) -> Optional[str]:
        """Analyze a chapter; returns None without a request if method, prompt or chapter is missing."""
        if self.method is None or not self.prompt_text.strip() or chapter is None:
            return None

        self.result = await self.client.analyze(
            self.model.id,
            self.prompt_text,
            chapter,
            method_name=self.method.name
        )
        self.copied = False
        return self.result
