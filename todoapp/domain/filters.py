"""
filters.py - Filter modes
Single responsibility: name the list filters and map routes onto them.
"""

SHOW_ALL = "all"
SHOW_ACTIVE = "active"
SHOW_COMPLETED = "completed"

SHOW_MODES: tuple[str, ...] = (SHOW_ALL, SHOW_ACTIVE, SHOW_COMPLETED)


def mode_from_route(route: str | None) -> str:
    """'/active', '#/completed', ... -> filter mode; anything else -> 'all'."""
    if not route:
        return SHOW_ALL
    segment = route.lstrip("#").strip("/").split("/", 1)[0].split("?", 1)[0]
    segment = segment.lower()
    return segment if segment in SHOW_MODES else SHOW_ALL
