"""Tests for 'start assets update'."""

from click.testing import CliRunner

from start_assets.cli.cli import cli
from start_assets.core.category import Category
from start_assets.core.registry.fake import FakeRegistryTransport
from tests.test_utils.builders import LOCAL_DIR, build_context, catalog, catalog_entry, entry

INDEX = catalog(
    catalog_entry(Category.AGENT, "claude", version="v1.0.0"),
    catalog_entry(Category.ROLE, "golang/assistant", version="v0.1.2"),
)

CONTENTS = {
    "agents/claude": "command: claude\n",
    "roles/golang/assistant": "prompt: You are a Go expert.\n",
}

INSTALLED = [
    entry(Category.AGENT, "claude", origin="agents/claude@v0.9.0"),
    entry(Category.ROLE, "golang/assistant", origin="roles/golang/assistant@v0.1.2"),
]


def test_update_upgrades_outdated_assets() -> None:
    ctx, store = build_context(
        local_entries=INSTALLED, registry=FakeRegistryTransport(index=INDEX, contents=CONTENTS)
    )

    result = CliRunner().invoke(cli, ["assets", "update"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Checking for updates..." in result.output
    assert "Updated agents/claude v0.9.0 -> v1.0.0" in result.output
    assert "Current roles/golang/assistant" in result.output
    assert "Updated: 1, Current: 1" in result.output
    directory, loaded = store.writes[0]
    assert directory == LOCAL_DIR
    assert loaded.get("claude").origin == "agents/claude@v1.0.0"


def test_update_dry_run() -> None:
    ctx, store = build_context(
        global_entries=INSTALLED, registry=FakeRegistryTransport(index=INDEX, contents=CONTENTS)
    )

    result = CliRunner().invoke(cli, ["assets", "update", "--dry-run"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Dry run - no changes applied:" in result.output
    assert "Would update agents/claude v0.9.0 -> v1.0.0" in result.output
    assert store.writes == []


def test_update_force_reinstalls_current() -> None:
    ctx, store = build_context(
        global_entries=INSTALLED, registry=FakeRegistryTransport(index=INDEX, contents=CONTENTS)
    )

    result = CliRunner().invoke(cli, ["assets", "update", "golang", "--force"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Updated roles/golang/assistant v0.1.2 -> v0.1.2" in result.output
    assert len(store.writes) == 1


def test_update_reports_missing_assets() -> None:
    ctx, _ = build_context(
        global_entries=[entry(Category.ROLE, "retired", origin="roles/retired@v0.1.0")],
        registry=FakeRegistryTransport(index=INDEX, contents=CONTENTS),
    )

    result = CliRunner().invoke(cli, ["assets", "update"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Missing roles/retired (not in registry)" in result.output
    assert "Updated: 0, Current: 0, Missing: 1" in result.output


def test_update_failure_exits_nonzero() -> None:
    ctx, _ = build_context(global_entries=INSTALLED, registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["assets", "update"], obj=ctx)

    assert result.exit_code == 1
    assert "Failed agents/claude" in result.output
    assert "Failed: 1" in result.output


def test_update_nothing_installed() -> None:
    ctx, _ = build_context()

    result = CliRunner().invoke(cli, ["assets", "update"], obj=ctx)

    assert result.exit_code == 0
    assert "No assets installed from registry." in result.output


def test_update_query_without_matches() -> None:
    ctx, _ = build_context(global_entries=INSTALLED, registry=FakeRegistryTransport(index=INDEX))

    result = CliRunner().invoke(cli, ["assets", "update", "python"], obj=ctx)

    assert result.exit_code == 0
    assert "No installed assets matching 'python'" in result.output
