"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from fileserve.config import StoreConfig
from fileserve.main import create_app
from fileserve.repositories.file_repository import FileRepository
from fileserve.repositories.memory_repository import InMemoryFileRepository
from fileserve.services.file_service import FileService


@pytest.fixture
def store_config(tmp_path):
    """
    Store configuration pointing at a fresh directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        StoreConfig whose directory does not exist yet
    """
    return StoreConfig(directory=str(tmp_path / 'store'))


@pytest.fixture
def sqlite_repo(store_config):
    """SQLite-backed repository, closed after the test."""
    repo = FileRepository(store_config)
    yield repo
    repo.close()


@pytest.fixture
def memory_repo():
    """In-memory repository."""
    return InMemoryFileRepository()


@pytest.fixture(params=['sqlite', 'memory'])
def any_repo(request, store_config):
    """
    Each FileStore implementation in turn, for contract tests.
    """
    if request.param == 'sqlite':
        repo = FileRepository(store_config)
    else:
        repo = InMemoryFileRepository()
    yield repo
    repo.close()


@pytest.fixture
def client(store_config):
    """
    Test client for an app backed by a SQLite store in a temp directory.
    """
    with TestClient(create_app(store_config=store_config)) as test_client:
        yield test_client


@pytest.fixture
def memory_client(memory_repo):
    """Test client for an app backed by an in-memory store."""
    app = create_app(file_service=FileService(memory_repo))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'hello.txt'
    file_path.write_bytes(b'hello')
    return file_path
