from .project import Project, Chapter, count_words, today

__all__ = ['Project', 'Chapter', 'count_words', 'today']
