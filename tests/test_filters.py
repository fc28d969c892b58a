# tests/test_filters.py

import pytest

from todoapp.domain.filters import SHOW_ACTIVE, SHOW_ALL, SHOW_COMPLETED, mode_from_route


@pytest.mark.parametrize(
    "route, mode",
    [
        ("/", SHOW_ALL),
        ("", SHOW_ALL),
        (None, SHOW_ALL),
        ("/active", SHOW_ACTIVE),
        ("/completed", SHOW_COMPLETED),
        ("#/completed", SHOW_COMPLETED),
        ("/Active/", SHOW_ACTIVE),
        ("/active?x=1", SHOW_ACTIVE),
        ("/archived", SHOW_ALL),
    ],
)
def test_mode_from_route(route, mode) -> None:
    assert mode_from_route(route) == mode


def test_route_drives_store_filter(seeded_store) -> None:
    seeded_store.show_mode.set(mode_from_route("/completed"))
    assert [t.title.peek() for t in seeded_store.filtered_tasks.get()] == ["b"]
