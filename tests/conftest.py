"""Pytest configuration and fixtures."""
import shutil
import tempfile
from pathlib import Path
import pytest
from typing import Generator
from dotenv import load_dotenv

from zhixia.storage import MemoryBackend, ProjectStore
from zhixia.utils.logging import setup_logging

# Load .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


FIXED_DATE = "2024-05-01"


@pytest.fixture(scope="session", autouse=True)
def test_logging() -> Generator[None, None, None]:
    """Send logs to a throwaway file instead of ~/.zhixia/logs."""
    log_dir = Path(tempfile.mkdtemp())
    setup_logging(log_file=log_dir / "test.log", level="DEBUG")
    yield
    shutil.rmtree(log_dir, ignore_errors=True)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def backend() -> MemoryBackend:
    """In-memory key-value backend."""
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> ProjectStore:
    """Store with a fixed clock."""
    return ProjectStore(backend, clock=lambda: FIXED_DATE)


@pytest.fixture
def project(store: ProjectStore):
    """An empty project in the store."""
    return store.create_project("My Novel")
