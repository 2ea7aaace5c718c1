from fittrack.core.config import settings
from fittrack.storage.json_store import JsonDocumentStore

# One store per process - its lock serializes every read-modify-write
store = JsonDocumentStore(settings.DATABASE_PATH, fail_open=settings.STORE_FAIL_OPEN)


def get_store() -> JsonDocumentStore:
    """
    Dependency for getting the document store.

    Route handlers receive the store through Depends(get_store) so tests can
    swap in a store backed by a temporary file via dependency_overrides.
    """
    return store
