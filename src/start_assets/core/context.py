"""Application context with dependency injection.

The AppContext dataclass holds all dependencies (store, registry, clock,
prompter, resolved paths and settings). It is created once at the CLI
entry point and threaded through commands via click's ctx.obj.
"""

import sys
from dataclasses import dataclass
from pathlib import Path

import click

from start_assets.core.paths import ConfigPaths, resolve_paths
from start_assets.core.prompts import Prompter
from start_assets.core.registry.abc import RegistryTransport
from start_assets.core.registry.loader import CatalogLoader
from start_assets.core.scope import ScopeResolver
from start_assets.core.settings import Settings, load_settings
from start_assets.core.store.abc import DocumentStore
from start_assets.core.time.abc import Time


@dataclass(frozen=True)
class AppContext:
    """Immutable context holding all dependencies for start commands.

    Attributes:
        store: Document store for category files
        registry: Registry transport for the index and asset content
        time: Clock used for retry backoff and cache freshness
        prompter: Interactive prompts over explicit streams
        paths: Resolved global, local and cache directories
        settings: Merged settings (index location)
        debug: Re-raise errors with full stack traces
    """

    store: DocumentStore
    registry: RegistryTransport
    time: Time
    prompter: Prompter
    paths: ConfigPaths
    settings: Settings
    debug: bool

    @property
    def resolver(self) -> ScopeResolver:
        return ScopeResolver(self.store, self.paths)

    def catalog_loader(self, *, skip_validation: bool = False) -> CatalogLoader:
        return CatalogLoader(
            self.registry, self.settings.assets_index, skip_validation=skip_validation
        )

    @staticmethod
    def for_test(
        store: DocumentStore | None = None,
        registry: RegistryTransport | None = None,
        time: Time | None = None,
        prompter: Prompter | None = None,
        paths: ConfigPaths | None = None,
        settings: Settings | None = None,
        debug: bool = False,
    ) -> "AppContext":
        """Create test context with fakes for every unspecified dependency.

        Example:
            >>> store = FakeDocumentStore(documents={...})
            >>> ctx = AppContext.for_test(store=store, registry=FakeRegistryTransport(index=index))
        """
        import io

        from start_assets.core.registry.fake import FakeRegistryTransport
        from start_assets.core.store.fake import FakeDocumentStore
        from start_assets.core.time.fake import FakeTime

        resolved_store: DocumentStore = store if store is not None else FakeDocumentStore()
        resolved_registry: RegistryTransport = (
            registry if registry is not None else FakeRegistryTransport()
        )
        resolved_time: Time = time if time is not None else FakeTime()
        resolved_prompter = (
            prompter
            if prompter is not None
            else Prompter(io.StringIO(), io.StringIO(), interactive=False)
        )
        resolved_paths = (
            paths
            if paths is not None
            else ConfigPaths(
                global_dir=Path("/fake/config/start"),
                local_dir=Path("/fake/project/.start"),
                cache_dir=Path("/fake/cache/start"),
            )
        )
        resolved_settings = settings if settings is not None else Settings()

        return AppContext(
            store=resolved_store,
            registry=resolved_registry,
            time=resolved_time,
            prompter=resolved_prompter,
            paths=resolved_paths,
            settings=resolved_settings,
            debug=debug,
        )


def create_context(*, debug: bool) -> AppContext:
    """Create production context with real implementations.

    Called once at CLI entry point.

    Raises:
        StoreError: If a settings file exists but cannot be parsed
    """
    from start_assets.core.registry.http_transport import HttpRegistryTransport
    from start_assets.core.store.toml_store import TomlDocumentStore
    from start_assets.core.time.real import RealTime

    paths = resolve_paths(Path.cwd())
    time = RealTime()
    prompter = Prompter(
        click.get_text_stream("stdin"),
        click.get_text_stream("stderr"),
        interactive=sys.stdin.isatty(),
    )

    return AppContext(
        store=TomlDocumentStore(),
        registry=HttpRegistryTransport(time, paths.cache_dir),
        time=time,
        prompter=prompter,
        paths=paths,
        settings=load_settings(paths),
        debug=debug,
    )
