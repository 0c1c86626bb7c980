"""Shared click arguments and options."""

import click

from start_assets.core.category import Category

CATEGORY_CHOICES = [c.value for c in Category] + [c.plural for c in Category]


def category_argument(func):
    """CATEGORY argument accepting singular or plural names, parsed to Category."""
    return click.argument(
        "category",
        type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
        callback=lambda _ctx, _param, value: Category.parse(value),
    )(func)


def local_option(func):
    return click.option(
        "--local",
        "-l",
        is_flag=True,
        help="Use the project config (./.start) instead of the global config.",
    )(func)


def tag_option(func):
    return click.option(
        "--tag",
        "-t",
        "tags",
        multiple=True,
        help="Tag (repeatable, or comma-separated).",
    )(func)


def split_tags(values: tuple[str, ...]) -> tuple[str, ...]:
    """Flatten repeated and comma-separated tag values, keeping first-seen order."""
    tags: list[str] = []
    for value in values:
        for tag in value.split(","):
            tag = tag.strip()
            if tag and tag not in tags:
                tags.append(tag)
    return tuple(tags)
