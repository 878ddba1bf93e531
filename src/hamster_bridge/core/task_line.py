# src/hamster_bridge/core/task_line.py

"""
Task-line parsing and fact composition.

A fact description looks like:

    Write report@Acme,, #writing, #q3,

- free text comes first,
- `@project` follows the text (a project typed inline by the user wins),
- `,,` separates the text from the tag block,
- each tag is rendered as ` #tag,`.
"""

from __future__ import annotations

from .frontmatter import FrontmatterMetadata, MetadataValue

TASK_MARKER = "- [ ] "
TAG_DELIMITER = ",,"
PROJECT_MARKER = "@"

# Removal order matters: "[[#" must go before "[[".
_MARKUP = (TASK_MARKER, "[[#", "[[", "]]", "`")


def is_task(line: str) -> bool:
    """True if the line is an unchecked markdown task."""
    return line.startswith(TASK_MARKER)


def _strip_markup(text: str) -> str:
    for token in _MARKUP:
        text = text.replace(token, "")
    return text


def sanitize(line: str) -> str:
    """Strip checkbox, wiki-link and code markup, then surrounding whitespace."""
    text = line
    while True:
        # Removing one token can splice another together ("- [ - [ ] ] x").
        stripped = _strip_markup(text)
        if stripped == text:
            break
        text = stripped
    return text.strip()


def _project_name(value: MetadataValue) -> str:
    if isinstance(value, str):
        return value.strip()
    return value[0].strip() if value else ""


def _tag_values(value: MetadataValue) -> list[str]:
    if isinstance(value, str):
        raw = value.split(",")
    else:
        raw = list(value)
    return [tag.strip() for tag in raw]


def add_project(task: str, project: str) -> str:
    if not project or PROJECT_MARKER in task:
        return task
    if TAG_DELIMITER in task:
        head, tail = task.split(TAG_DELIMITER, 1)
        return f"{head}{PROJECT_MARKER}{project}{TAG_DELIMITER}{tail}"
    return f"{task}{PROJECT_MARKER}{project}"


def add_tags(task: str, tags: list[str]) -> str:
    block = "".join(f" #{tag}," for tag in tags)
    if TAG_DELIMITER not in task:
        task += TAG_DELIMITER
    return task + block


def compose(line: str, metadata: FrontmatterMetadata) -> str | None:
    """
    Turn a task line into a Hamster fact description.

    Returns None when the line is not a task; callers must not contact Hamster then.
    """
    if not is_task(line):
        return None

    task = sanitize(line)

    project = metadata.get("project")
    if project is not None:
        task = add_project(task, _project_name(project))

    tags = metadata.get("tags")
    if tags is not None:
        task = add_tags(task, _tag_values(tags))

    return task
