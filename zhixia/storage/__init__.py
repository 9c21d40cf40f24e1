"""Persistence for projects."""
from .backends import StorageBackend, MemoryBackend, JsonFileBackend
from .project_store import ProjectStore

__all__ = ['StorageBackend', 'MemoryBackend', 'JsonFileBackend', 'ProjectStore']
