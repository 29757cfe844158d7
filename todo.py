"""Carry open TODOs over from the previous page.

Only the `## TODOs` section is read. Every top-level unchecked task item is
carried over together with everything nested under it; checked items are
dropped along with their children.
"""

import re
from typing import List, Optional

from logger_config import setup_logger
from rendering import fill_template

logger = setup_logger(__name__, 'journal.log')

TODO_HEADER = re.compile(r"^##\s+TODOs\s*$")
ANY_HEADER = re.compile(r"^#{1,6}\s")
TOP_LEVEL_ITEM = re.compile(r"^[*+-]\s")
TASK_ITEM = re.compile(r"^[*+-]\s+\[(?P<mark>[ xX])\]")

DEFAULT_TODO_TEMPLATE = """## TODOs

{todos}
"""


def _todo_section(lines: List[str]) -> Optional[List[str]]:
    for position, line in enumerate(lines):
        if TODO_HEADER.match(line):
            section = []
            for following in lines[position + 1:]:
                if ANY_HEADER.match(following):
                    break
                section.append(following)
            return section
    return None


def _split_items(section: List[str]) -> List[List[str]]:
    """Group lines into top-level list items with their nested lines."""
    items = []
    current = None
    for line in section:
        if TOP_LEVEL_ITEM.match(line):
            current = [line]
            items.append(current)
        elif current is not None and (not line.strip() or line[0].isspace()):
            current.append(line)
        else:
            current = None

    # Blank lines between items belong to neither
    for item in items:
        while item and not item[-1].strip():
            item.pop()
    return items


def find_open_todos(markdown: str) -> List[str]:
    """Text of each open top-level TODO in the page's `## TODOs` section."""
    section = _todo_section(markdown.splitlines())
    if section is None:
        logger.info("No TODO section found")
        return []

    todos = []
    for item in _split_items(section):
        task = TASK_ITEM.match(item[0])
        if task is None:
            continue
        if task.group("mark") != " ":
            logger.debug(f"Skipping completed TODO: {item[0]}")
            continue
        todos.append("\n".join(item))

    logger.info(f"Found {len(todos)} open TODO(s)")
    return todos


def render_todos(todos: List[str], template: Optional[str] = None) -> str:
    return fill_template(template or DEFAULT_TODO_TEMPLATE, "todo", todos="\n".join(todos))
