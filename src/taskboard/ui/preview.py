from __future__ import annotations

import json
from typing import Iterable, List, Optional, Tuple

from ..schemas import TaskOut

EMPTY_PLACEHOLDER = "—"
NO_DUE_DATE_LABEL = "No due date"


def _truncate(text: str, max_len: int) -> str:
    return text[:max_len] + "…" if len(text) > max_len else text


def _rich_text_nodes(document: dict) -> List[str]:
    """Collect text nodes from a serialized rich-text document (block-id -> block)."""
    texts: List[str] = []
    for block in document.values():
        elements = block.get("value") if isinstance(block, dict) else None
        if not isinstance(elements, list):
            continue
        for el in elements:
            children = el.get("children") if isinstance(el, dict) else None
            if not isinstance(children, list):
                continue
            for child in children:
                if isinstance(child, dict) and child.get("text"):
                    texts.append(str(child["text"]))
    return texts


# PUBLIC_INTERFACE
def description_preview(raw: Optional[str], max_len: int = 120) -> str:
    """
    Short plain-text preview of a task description.

    Rich-text documents are flattened to their text nodes joined by spaces;
    anything that is not a JSON object is shown as plain text.
    """
    if not raw or not raw.strip():
        return EMPTY_PLACEHOLDER
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        joined = " ".join(_rich_text_nodes(parsed)).strip()
        if not joined:
            return EMPTY_PLACEHOLDER
        return _truncate(joined, max_len)
    return _truncate(raw, max_len)


# PUBLIC_INTERFACE
def group_by_due_date(tasks: Iterable[TaskOut]) -> List[Tuple[str, List[TaskOut]]]:
    """
    Group an already fetched page of tasks by due date for display.

    Dated groups come first in ascending date order, undated tasks last.
    Tasks keep their server order inside a group.
    """
    dated: dict = {}
    undated: List[TaskOut] = []
    for task in tasks:
        if task.due_date is None:
            undated.append(task)
        else:
            dated.setdefault(task.due_date, []).append(task)

    groups = [(due.isoformat(), dated[due]) for due in sorted(dated)]
    if undated:
        groups.append((NO_DUE_DATE_LABEL, undated))
    return groups
