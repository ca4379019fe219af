import pytest

from docstore_dal.providers.memory import MemoryProvider
from docstore_dal.repository import JsonDocumentRepository
from docstore_dal.types.params import RepositoryParams

TEST_PROJECT_ID = "test-project"
DOCUMENTS = f"projects/{TEST_PROJECT_ID}/databases/(default)/documents"


@pytest.fixture
def store() -> MemoryProvider:
    return MemoryProvider()


@pytest.fixture
def json_repository(store: MemoryProvider) -> JsonDocumentRepository:
    return JsonDocumentRepository(store, RepositoryParams(project_id=TEST_PROJECT_ID, path="users"))
