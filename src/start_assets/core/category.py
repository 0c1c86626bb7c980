"""Closed set of configuration categories."""

from enum import Enum


class Category(Enum):
    """Partition of configuration entries.

    Values are the singular names used on the command line. Iteration order
    is the display order: agents, roles, contexts, tasks.
    """

    AGENT = "agent"
    ROLE = "role"
    CONTEXT = "context"
    TASK = "task"

    @property
    def plural(self) -> str:
        """Plural form used as document key and catalog section name."""
        match self:
            case Category.AGENT:
                return "agents"
            case Category.ROLE:
                return "roles"
            case Category.CONTEXT:
                return "contexts"
            case Category.TASK:
                return "tasks"

    @property
    def filename(self) -> str:
        """Document file holding this category inside a scope directory."""
        return f"{self.plural}.toml"

    @property
    def ordered(self) -> bool:
        """Whether definition order carries meaning for this category.

        Roles and contexts resolve in definition order, so their order list
        is shown as-is. Agents and tasks are displayed sorted by name.
        """
        match self:
            case Category.ROLE | Category.CONTEXT:
                return True
            case Category.AGENT | Category.TASK:
                return False

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Parse a singular or plural category name (case-insensitive).

        Raises:
            ValueError: If the value names no category
        """
        normalized = value.strip().lower()
        for category in cls:
            if normalized in (category.value, category.plural):
                return category
        valid = ", ".join(c.value for c in cls)
        raise ValueError(f"Invalid category: {value} (expected one of {valid})")
