"""Tests for the top-level search command."""

from click.testing import CliRunner

from start_assets.cli.cli import cli
from start_assets.core.category import Category
from start_assets.core.errors import TransportError
from start_assets.core.registry.fake import FakeRegistryTransport
from tests.test_utils.builders import build_context, catalog, catalog_entry, entry, prompter

INDEX = catalog(
    catalog_entry(Category.ROLE, "golang/assistant", description="Go programming expert"),
    catalog_entry(
        Category.ROLE, "golang/reviewer", description="Go code reviewer", tags=("review",)
    ),
    catalog_entry(Category.TASK, "home/cleanup", description="Tidy the home dir"),
)


def test_search_shows_sections_in_scope_order() -> None:
    """Local results come first, then global, then registry."""
    # Arrange
    ctx, _ = build_context(
        global_entries=[entry(Category.ROLE, "golang/mine", description="my go role")],
        local_entries=[entry(Category.CONTEXT, "golang/notes")],
        registry=FakeRegistryTransport(index=INDEX),
    )

    # Act
    result = CliRunner().invoke(cli, ["search", "golang"], obj=ctx)

    # Assert
    assert result.exit_code == 0, result.output
    local_at = result.stdout.index("local (/fake/project/.start)")
    global_at = result.stdout.index("global (/fake/config/start)")
    registry_at = result.stdout.index("registry")
    assert local_at < global_at < registry_at
    assert "golang/mine - my go role" in result.stdout
    assert "golang/reviewer - Go code reviewer" in result.stdout


def test_search_marks_installed_registry_entries() -> None:
    ctx, _ = build_context(
        global_entries=[
            entry(Category.ROLE, "golang/assistant", origin="roles/golang/assistant@v0.1.0")
        ],
        registry=FakeRegistryTransport(index=INDEX),
    )

    result = CliRunner().invoke(cli, ["search", "golang"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "★ golang/assistant" in result.stdout


def test_search_short_query_fails_without_terminal() -> None:
    ctx, _ = build_context(registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["search", "go"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: query must be at least 3 characters" in result.output


def test_search_short_query_with_tag() -> None:
    ctx, _ = build_context(registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["search", "go", "--tag", "review"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "golang/reviewer" in result.stdout
    assert "golang/assistant" not in result.stdout


def test_search_tag_only() -> None:
    ctx, _ = build_context(registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["search", "-t", "review"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "golang/reviewer" in result.stdout


def test_search_prompts_for_query_interactively() -> None:
    ctx, _ = build_context(
        registry=FakeRegistryTransport(index=INDEX),
        prompter_=prompter("cleanup\n", interactive=True),
    )

    result = CliRunner().invoke(cli, ["search", "go"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "home/cleanup" in result.stdout


def test_search_prompt_cancel() -> None:
    ctx, _ = build_context(
        registry=FakeRegistryTransport(index=INDEX),
        prompter_=prompter("\n", interactive=True),
    )

    result = CliRunner().invoke(cli, ["search"], obj=ctx)

    assert result.exit_code == 0
    assert result.stdout == ""


def test_search_degrades_when_registry_unavailable() -> None:
    """Stored results are still shown with a warning."""
    ctx, _ = build_context(
        global_entries=[entry(Category.ROLE, "golang/mine")],
        registry=FakeRegistryTransport(index_error=TransportError("connection refused")),
    )

    result = CliRunner().invoke(cli, ["search", "golang"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "golang/mine" in result.stdout
    assert "Warning: registry unavailable: connection refused" in result.output


def test_search_no_matches() -> None:
    ctx, _ = build_context(registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["search", "python"], obj=ctx)

    assert result.exit_code == 0
    assert "No matches found for 'python'" in result.stdout


def test_search_invalid_pattern() -> None:
    ctx, _ = build_context(registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["search", "go(lang"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: invalid search pattern 'go(lang'" in result.output


def test_search_verbose_shows_module() -> None:
    ctx, _ = build_context(registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["search", "cleanup", "-v"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "module: tasks/home/cleanup" in result.stdout
    assert "version: v0.1.0" in result.stdout


def test_search_closes_registry_on_exit() -> None:
    registry = FakeRegistryTransport(index=INDEX)
    ctx, _ = build_context(registry=registry)

    result = CliRunner().invoke(cli, ["search", "golang"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert registry.closed
