"""Application constants and defaults."""
from pathlib import Path

# Storage
STORAGE_KEY = "zhixia_projects"
DEFAULT_DATA_DIR = Path.home() / ".zhixia"
DEFAULT_DATA_FILE = DEFAULT_DATA_DIR / "storage.json"
DEFAULT_LOG_DIR = DEFAULT_DATA_DIR / "logs"

# Date format used for Project.last_modified
DATE_FORMAT = "%Y-%m-%d"

# Chapters
DEFAULT_CHAPTER_TITLE = "第{n}章"
GENERATED_TEXT_SEPARATOR = "\n\n"

# AI assist
DEFAULT_MODEL = "gpt-4"
DEFAULT_ASSIST_DELAY = 2.0  # seconds the stub waits before answering

# Confirmation prompts
CONFIRM_DELETE_PROJECT = "确定要删除这个项目吗？"
CONFIRM_DELETE_CHAPTER = "确定要删除这个章节吗？"

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
