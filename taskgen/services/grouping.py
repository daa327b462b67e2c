from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Task

UNTITLED = "Untitled"
ALL_HEADINGS = "All"
STATUS_FILTERS = ("all", "completed", "incomplete")


def group_by_heading(tasks: Iterable[Task]) -> Dict[str, List[Task]]:
    """Group tasks by heading, in the order each heading is first seen."""
    grouped: Dict[str, List[Task]] = {}
    for task in tasks:
        grouped.setdefault(task.heading or UNTITLED, []).append(task)
    return grouped


def filter_by_status(tasks: Iterable[Task], status: str = "all") -> List[Task]:
    if status == "completed":
        return [task for task in tasks if task.completed]
    if status == "incomplete":
        return [task for task in tasks if not task.completed]
    if status == "all":
        return list(tasks)
    raise ValueError(f"Unknown status filter: {status}")


def progress(tasks: Sequence[Task]) -> int:
    """Percentage of completed tasks, rounded to a whole number."""
    if not tasks:
        return 0
    done = sum(1 for task in tasks if task.completed)
    return round(done * 100 / len(tasks))


def unique_headings(tasks: Iterable[Task]) -> List[str]:
    return list(dict.fromkeys(task.heading for task in tasks if task.heading))


def build_groups(tasks: Iterable[Task], heading: Optional[str] = None, status: str = "all") -> List[dict]:
    """Dashboard view: one entry per heading, filtered, empty groups dropped.

    ``total``/``completed``/``progress`` describe the whole group, not just
    the tasks left after the status filter.
    """
    groups = []
    for key, group in group_by_heading(tasks).items():
        if heading and heading != ALL_HEADINGS and key != heading:
            continue
        visible = filter_by_status(group, status)
        if not visible:
            continue
        groups.append({
            "heading": key,
            "tasks": visible,
            "total": len(group),
            "completed": sum(1 for task in group if task.completed),
            "progress": progress(group),
        })
    return groups
