"""Configuration for document repositories."""

from pydantic import BaseModel

from docstore_dal import paths


class RepositoryParams(BaseModel, frozen=True):
    """Addressing parameters for one logical collection."""

    project_id: str
    """Project that owns the database."""

    database: str | None = None
    """Full database resource name. Defaults to the project's `(default)` database."""

    path: str
    """Logical collection path, e.g. `users` or `organizations/org1/users`."""

    @property
    def database_path(self) -> str:
        return self.database or paths.database_path(self.project_id)

    @property
    def documents_path(self) -> str:
        return paths.documents_path(self.database_path)

    @property
    def collection_id(self) -> str:
        return paths.collection_id(self.path)

    @property
    def collection_parent_path(self) -> str:
        return paths.parent_path(self.path)

    @property
    def parent_resource(self) -> str:
        """Resource under which the collection's documents are created and queried."""
        return paths.parent_resource(self.documents_path, self.collection_parent_path)

    def resource_name(self, document_id: str) -> str:
        """Full resource name of a document in this collection."""
        return paths.resource_name(
            self.documents_path,
            self.collection_parent_path,
            self.collection_id,
            document_id,
        )
