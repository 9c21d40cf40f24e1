"""Exceptions raised by Zhixia."""


class ZhixiaError(Exception):
    """Base class for Zhixia errors."""


class ProjectNotFoundError(ZhixiaError):
    """Raised when an editor session is opened on a project that does not exist."""

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
