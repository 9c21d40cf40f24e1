"""Zhixia - chapter-based writing workspace."""

__version__ = "1.0.0"

from .models import Project, Chapter
from .storage import ProjectStore
from .editor import EditorSession
from .cli import app

__all__ = [
    '__version__',
    'app',
    'Project',
    'Chapter',
    'ProjectStore',
    'EditorSession'
]
