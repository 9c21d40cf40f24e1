"""AI assist panels (generation is stubbed)."""

from .client import AssistClient, StubAssistClient
from .panels import WritingPanel, AnalysisPanel
from .templates import (
    ModelOption,
    PromptTemplate,
    WRITING_MODELS,
    ANALYSIS_MODELS,
    WRITING_TEMPLATES,
    ANALYSIS_METHODS,
)

__all__ = [
    'AssistClient',
    'StubAssistClient',
    'WritingPanel',
    'AnalysisPanel',
    'ModelOption',
    'PromptTemplate',
    'WRITING_MODELS',
    'ANALYSIS_MODELS',
    'WRITING_TEMPLATES',
    'ANALYSIS_METHODS',
]
