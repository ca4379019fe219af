"""Transport providers for document stores.

Each provider module exports a `Provider` class alias for the main provider class,
along with its credentials and params types.

Available providers:
- firestore: Firestore REST API via httpx
- memory: in-process store for tests and local development
"""

from docstore_dal.providers import firestore, memory

__all__ = [
    "firestore",
    "memory",
]
