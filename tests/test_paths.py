import pytest

from docstore_dal import paths
from docstore_dal.types.params import RepositoryParams

DOCUMENTS = "projects/p/databases/(default)/documents"


@pytest.mark.parametrize(
    ("path", "collection", "parent"),
    [
        ("users", "users", ""),
        ("organizations/org1/users", "users", "organizations/org1"),
        ("a/b/c/d/e", "e", "a/b/c/d"),
        ("", "", ""),
    ],
)
def test_collection_id_and_parent_path(path: str, collection: str, parent: str) -> None:
    assert paths.collection_id(path) == collection
    assert paths.parent_path(path) == parent


def test_resource_name_top_level_collection() -> None:
    assert (
        paths.resource_name(DOCUMENTS, "", "users", "u1")
        == "projects/p/databases/(default)/documents/users/u1"
    )


def test_resource_name_nested_collection() -> None:
    assert (
        paths.resource_name(DOCUMENTS, "organizations/org1", "users", "u1")
        == "projects/p/databases/(default)/documents/organizations/org1/users/u1"
    )


def test_parent_resource() -> None:
    assert paths.parent_resource(DOCUMENTS, "") == DOCUMENTS
    assert paths.parent_resource(DOCUMENTS, "organizations/org1") == f"{DOCUMENTS}/organizations/org1"


def test_database_path() -> None:
    assert paths.database_path("p") == "projects/p/databases/(default)"
    assert paths.database_path("p", "other") == "projects/p/databases/other"


def test_repository_params_defaults_to_default_database() -> None:
    params = RepositoryParams(project_id="p", path="organizations/org1/users")

    assert params.database_path == "projects/p/databases/(default)"
    assert params.documents_path == DOCUMENTS
    assert params.collection_id == "users"
    assert params.collection_parent_path == "organizations/org1"
    assert params.parent_resource == f"{DOCUMENTS}/organizations/org1"
    assert params.resource_name("u1") == f"{DOCUMENTS}/organizations/org1/users/u1"


def test_repository_params_explicit_database() -> None:
    params = RepositoryParams(project_id="p", database="projects/p/databases/audit", path="logs")

    assert params.documents_path == "projects/p/databases/audit/documents"
    assert params.resource_name("l1") == "projects/p/databases/audit/documents/logs/l1"
