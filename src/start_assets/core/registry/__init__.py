from start_assets.core.registry.abc import RegistryTransport
from start_assets.core.registry.fake import FakeRegistryTransport
from start_assets.core.registry.http_transport import HttpRegistryTransport
from start_assets.core.registry.loader import CatalogLoader

__all__ = ["CatalogLoader", "FakeRegistryTransport", "HttpRegistryTransport", "RegistryTransport"]
