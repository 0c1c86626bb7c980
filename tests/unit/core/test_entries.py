"""Tests for adding, editing and removing stored entries."""

import pytest

from start_assets.core.category import Category
from start_assets.core.errors import (
    AmbiguousError,
    NotFoundError,
    TerminalRequiredError,
    ValidationError,
)
from start_assets.core.entries import (
    EntryChanges,
    add_entry,
    apply_changes,
    edit_entry,
    remove_entries,
    reorder_entries,
    resolve_remove_names,
)
from start_assets.core.models import ConfigScope
from tests.test_utils.builders import GLOBAL_DIR, LOCAL_DIR, build_context, entry, prompter

ROLES = {
    "golang/assistant": entry(Category.ROLE, "golang/assistant"),
    "golang/reviewer": entry(Category.ROLE, "golang/reviewer"),
    "python": entry(Category.ROLE, "python"),
}


class TestAddEntry:
    def test_appends_to_scope(self) -> None:
        ctx, store = build_context(local_entries=[entry(Category.TASK, "first")])

        path = add_entry(ctx.resolver, ConfigScope.LOCAL, entry(Category.TASK, "second"))

        assert path == LOCAL_DIR / "tasks.toml"
        assert store.writes[0][1].order == ["first", "second"]

    def test_creates_missing_scope(self) -> None:
        ctx, store = build_context()

        add_entry(ctx.resolver, ConfigScope.GLOBAL, entry(Category.ROLE, "new"))

        assert store.writes[0][0] == GLOBAL_DIR

    def test_duplicate_rejected(self) -> None:
        ctx, store = build_context(global_entries=[entry(Category.ROLE, "dup")])

        with pytest.raises(ValidationError, match="role 'dup' already exists in global config"):
            add_entry(ctx.resolver, ConfigScope.GLOBAL, entry(Category.ROLE, "dup"))
        assert store.writes == []

    def test_same_name_in_other_scope_allowed(self) -> None:
        ctx, _ = build_context(global_entries=[entry(Category.ROLE, "dup")])

        add_entry(ctx.resolver, ConfigScope.LOCAL, entry(Category.ROLE, "dup"))

    def test_requires_content_source(self) -> None:
        ctx, _ = build_context()

        with pytest.raises(ValidationError, match="one of file, command or prompt is required"):
            add_entry(ctx.resolver, ConfigScope.GLOBAL, entry(Category.ROLE, "empty", prompt=None))


class TestApplyChanges:
    def test_metadata_keeps_origin(self) -> None:
        original = entry(Category.ROLE, "r", origin="roles/r@v1.0.0")

        updated = apply_changes(original, EntryChanges(description="new", tags=("x",)))

        assert updated.description == "new"
        assert updated.tags == ("x",)
        assert updated.origin == "roles/r@v1.0.0"

    def test_content_replacement_clears_origin_and_other_sources(self) -> None:
        original = entry(Category.ROLE, "r", origin="roles/r@v1.0.0", prompt="old")

        updated = apply_changes(original, EntryChanges(file="role.md"))

        assert updated.file == "role.md"
        assert updated.prompt is None
        assert updated.origin == ""

    def test_two_sources_rejected(self) -> None:
        with pytest.raises(ValidationError, match="only one of"):
            apply_changes(entry(Category.ROLE, "r"), EntryChanges(file="a", command="b"))

    def test_is_empty(self) -> None:
        assert EntryChanges().is_empty
        assert not EntryChanges(tags=()).is_empty


class TestEditEntry:
    def test_edits_resolved_entry_in_place(self) -> None:
        ctx, store = build_context(global_entries=list(ROLES.values()))

        updated, path = edit_entry(
            ctx.resolver,
            ConfigScope.GLOBAL,
            Category.ROLE,
            "assist",
            EntryChanges(description="edited"),
        )

        assert updated.name == "golang/assistant"
        assert path == GLOBAL_DIR / "roles.toml"
        written = store.writes[0][1]
        assert written.order == list(ROLES)
        assert written.get("golang/assistant").description == "edited"

    def test_ambiguous_query(self) -> None:
        ctx, _ = build_context(global_entries=list(ROLES.values()))

        with pytest.raises(AmbiguousError):
            edit_entry(
                ctx.resolver, ConfigScope.GLOBAL, Category.ROLE, "golang", EntryChanges(tags=())
            )

    def test_missing_scope(self) -> None:
        ctx, _ = build_context()

        with pytest.raises(NotFoundError):
            edit_entry(
                ctx.resolver, ConfigScope.LOCAL, Category.ROLE, "x", EntryChanges(description="d")
            )


def test_remove_entries_drops_order_slots() -> None:
    ctx, store = build_context(local_entries=list(ROLES.values()))

    path = remove_entries(ctx.resolver, ConfigScope.LOCAL, Category.ROLE, ["golang/reviewer"])

    assert path == LOCAL_DIR / "roles.toml"
    written = store.writes[0][1]
    assert written.order == ["golang/assistant", "python"]
    assert "golang/reviewer" not in written.entries


class TestResolveRemoveNames:
    def test_exact_names_dedup_in_order(self) -> None:
        names = resolve_remove_names(
            ROLES,
            "role",
            ["python", "golang/assistant", "python"],
            assume_yes=False,
            prompter=prompter(),
        )

        assert names == ["python", "golang/assistant"]

    def test_ambiguous_with_yes_removes_all(self) -> None:
        names = resolve_remove_names(
            ROLES, "role", ["golang"], assume_yes=True, prompter=prompter()
        )

        assert names == ["golang/assistant", "golang/reviewer"]

    def test_ambiguous_among_several_queries(self) -> None:
        with pytest.raises(AmbiguousError, match="pass --yes to remove all matches"):
            resolve_remove_names(
                ROLES, "role", ["python", "golang"], assume_yes=False, prompter=prompter()
            )

    def test_ambiguous_single_query_needs_terminal(self) -> None:
        with pytest.raises(TerminalRequiredError, match="--yes flag required"):
            resolve_remove_names(ROLES, "role", ["golang"], assume_yes=False, prompter=prompter())

    def test_ambiguous_single_query_interactive_choice(self) -> None:
        chooser = prompter("2\n", interactive=True)

        names = resolve_remove_names(ROLES, "role", ["golang"], assume_yes=False, prompter=chooser)

        assert names == ["golang/reviewer"]

    def test_interactive_cancel(self) -> None:
        chooser = prompter("\n", interactive=True)

        names = resolve_remove_names(ROLES, "role", ["golang"], assume_yes=False, prompter=chooser)

        assert names == []

    def test_unknown_name(self) -> None:
        with pytest.raises(NotFoundError):
            resolve_remove_names(ROLES, "role", ["rust"], assume_yes=True, prompter=prompter())


class TestReorderEntries:
    def test_writes_new_order_in_one_write(self) -> None:
        ctx, store = build_context(global_entries=list(ROLES.values()))

        path = reorder_entries(
            ctx.resolver,
            ConfigScope.GLOBAL,
            Category.ROLE,
            ["python", "golang/assistant", "golang/reviewer"],
        )

        assert path == GLOBAL_DIR / "roles.toml"
        assert len(store.writes) == 1
        loaded = store.writes[0][1]
        assert loaded.order == ["python", "golang/assistant", "golang/reviewer"]
        assert loaded.entries.keys() == ROLES.keys()

    @pytest.mark.parametrize(
        "new_order",
        [
            ["python", "golang/assistant"],
            ["python", "golang/assistant", "golang/reviewer", "extra"],
            ["python", "python", "golang/assistant"],
        ],
    )
    def test_requires_permutation(self, new_order: list[str]) -> None:
        ctx, store = build_context(global_entries=list(ROLES.values()))

        with pytest.raises(ValidationError, match="exactly once"):
            reorder_entries(ctx.resolver, ConfigScope.GLOBAL, Category.ROLE, new_order)
        assert store.writes == []

    def test_unordered_category(self) -> None:
        ctx, _ = build_context(global_entries=[entry(Category.TASK, "t")])

        with pytest.raises(ValidationError, match="no definition order"):
            reorder_entries(ctx.resolver, ConfigScope.GLOBAL, Category.TASK, ["t"])

    def test_missing_scope(self) -> None:
        ctx, _ = build_context()

        with pytest.raises(NotFoundError):
            reorder_entries(ctx.resolver, ConfigScope.LOCAL, Category.ROLE, [])
