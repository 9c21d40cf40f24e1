from .session import EditorSession

__all__ = ['EditorSession']
