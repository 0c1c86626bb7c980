from start_assets.core.store.abc import DocumentStore, LoadedCategory
from start_assets.core.store.fake import FakeDocumentStore
from start_assets.core.store.toml_store import TomlDocumentStore

__all__ = [
    "DocumentStore",
    "FakeDocumentStore",
    "LoadedCategory",
    "TomlDocumentStore",
]
