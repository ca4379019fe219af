"""Resource path arithmetic for collections and documents.

A logical path addresses a collection, possibly nested under documents of
other collections: `users`, `organizations/org1/users`. Resource names are
fully qualified: `projects/p/databases/(default)/documents/users/u1`.
"""

DEFAULT_DATABASE = "(default)"


def collection_id(path: str) -> str:
    """Return the last segment of a logical path."""
    return path.rsplit("/", 1)[-1]


def parent_path(path: str) -> str:
    """Return everything before the last segment, or "" for a top-level path."""
    head, sep, _ = path.rpartition("/")
    return head if sep else ""


def database_path(project_id: str, database: str = DEFAULT_DATABASE) -> str:
    return f"projects/{project_id}/databases/{database}"


def documents_path(database: str) -> str:
    return f"{database}/documents"


def parent_resource(base_path: str, parent: str) -> str:
    """Join the documents root with an optional parent document path."""
    return f"{base_path}/{parent}" if parent else base_path


def resource_name(base_path: str, parent: str, collection: str, document_id: str) -> str:
    """Build the full resource name of a document.

    The parent segment is only inserted when non-empty, so top-level and nested
    collections both come out without doubled separators.
    """
    return f"{parent_resource(base_path, parent)}/{collection}/{document_id}"
