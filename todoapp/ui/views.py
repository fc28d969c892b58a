"""
views.py - UI view builder
Single responsibility: render the task store as a flet View and wire user
actions back to store commands.
"""

import logging

import flet as ft

from todoapp.config import (
    APP_TITLE,
    BORDER_RADIUS_CARD,
    COLOR_BG,
    COLOR_BORDER,
    COLOR_CARD,
    COLOR_DANGER,
    COLOR_PRIMARY,
    COLOR_TEXT_MAIN,
    COLOR_TEXT_MUTED,
    COLOR_TITLE,
    CONTENT_WIDTH,
)
from todoapp.domain.filters import SHOW_ACTIVE, SHOW_ALL, SHOW_COMPLETED
from todoapp.domain.models import Task
from todoapp.reactive.computed import Computed
from todoapp.reactive.observable import batch, subscribe
from todoapp.reactive.scheduler import Scheduler
from todoapp.services.task_store import TaskStore
from todoapp.ui.bindings import SelectAndFocus, enter_key, escape_key, key_listener

logger = logging.getLogger(__name__)

FILTER_LABELS = [(SHOW_ALL, "All"), (SHOW_ACTIVE, "Active"), (SHOW_COMPLETED, "Completed")]


def _view_state(store: TaskStore):
    """Everything the view displays; reading it subscribes the view to it."""
    rows = tuple(
        (t, t.title.get(), t.completed.get(), t.editing.get())
        for t in store.filtered_tasks.get()
    )
    return (
        rows,
        len(store.tasks),
        store.remaining_count.get(),
        store.completed_count.get(),
        store.all_completed.get(),
        store.show_mode.get(),
    )


def build_todo_view(
    page: ft.Page,
    store: TaskStore,
    scheduler: Scheduler,
) -> ft.View:
    focus_bindings: list[SelectAndFocus] = []

    # ------------------------------------------------------------------
    # New task input
    # ------------------------------------------------------------------
    def on_add(_data, _event):
        store.add()

    new_field = ft.TextField(
        hint_text="What needs to be done?",
        value=store.current.peek(),
        autofocus=True,
        border_color="transparent",
        bgcolor=COLOR_CARD,
        text_size=20,
        expand=True,
    )
    new_field.on_change = lambda e: store.current.set(e.control.value or "")

    def sync_new_field(value):
        if new_field.value != value:
            new_field.value = value
            page.update()

    subscribe(store.current, sync_new_field)

    new_input = key_listener(new_field, None, enter_key(on_add))
    new_input.expand = True

    toggle_all = ft.Checkbox(
        value=store.all_completed.peek(),
        tooltip="Mark all as complete",
        on_change=lambda e: store.all_completed.set(bool(e.control.value)),
    )

    # ------------------------------------------------------------------
    # Task rows
    # ------------------------------------------------------------------
    def build_edit_row(task: Task, title: str) -> ft.Control:
        edit_field = ft.TextField(value=title, dense=True, expand=True)

        def commit(_data=None, _event=None):
            if not task.editing.peek():
                return
            with batch():
                task.title.set(edit_field.value or "")
                store.save_editing(task)

        def cancel(_data=None, _event=None):
            if task.editing.peek():
                store.cancel_editing(task)

        edit_field.on_blur = lambda _e: commit()
        focus_bindings.append(SelectAndFocus(edit_field, task.editing, scheduler))
        return ft.Container(
            content=key_listener(edit_field, task, enter_key(commit), escape_key(cancel)),
            padding=ft.Padding.only(left=48, right=8),
        )

    def build_view_row(task: Task, title: str, completed: bool) -> ft.Control:
        return ft.Row(
            controls=[
                ft.Checkbox(
                    value=completed,
                    on_change=lambda e: task.completed.set(bool(e.control.value)),
                ),
                ft.GestureDetector(
                    content=ft.Text(
                        title,
                        size=18,
                        color=COLOR_TEXT_MUTED if completed else COLOR_TEXT_MAIN,
                        style=ft.TextStyle(
                            decoration=ft.TextDecoration.LINE_THROUGH if completed else None
                        ),
                    ),
                    on_double_tap=lambda _e: store.edit_task(task),
                    expand=True,
                ),
                ft.IconButton(
                    icon=ft.Icons.CLOSE,
                    icon_color=COLOR_DANGER,
                    tooltip="Delete",
                    on_click=lambda _e: store.remove(task),
                ),
            ],
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        )

    list_column = ft.Column(spacing=0)
    footer = ft.Row(alignment=ft.MainAxisAlignment.SPACE_BETWEEN)

    def build_footer(remaining: int, completed: int, mode: str) -> list[ft.Control]:
        filters = ft.Row(
            controls=[
                ft.TextButton(
                    label,
                    style=ft.ButtonStyle(
                        color=COLOR_PRIMARY if key == mode else COLOR_TEXT_MUTED
                    ),
                    on_click=lambda _e, key=key: store.show_mode.set(key),
                )
                for key, label in FILTER_LABELS
            ],
            spacing=4,
        )
        clear = ft.TextButton(
            "Clear completed",
            visible=completed > 0,
            on_click=lambda _e: store.remove_completed(),
        )
        return [
            ft.Text(f"{remaining} {store.get_label(remaining)} left", color=COLOR_TEXT_MUTED),
            filters,
            clear,
        ]

    def fill(state) -> None:
        rows, total, remaining, completed, all_completed, mode = state
        for binding in focus_bindings:
            binding.dispose()
        focus_bindings.clear()

        controls = []
        for task, title, is_completed, editing in rows:
            if editing:
                controls.append(build_edit_row(task, title))
            else:
                controls.append(build_view_row(task, title, is_completed))
            controls.append(ft.Divider(height=1, color=COLOR_BORDER))
        list_column.controls = controls
        toggle_all.value = all_completed
        toggle_all.visible = total > 0
        footer.controls = build_footer(remaining, completed, mode)
        footer.visible = total > 0

    def render(state) -> None:
        try:
            fill(state)
            page.update()
        except Exception as exc:
            logger.exception("Error while rendering task list")
            page.overlay.append(
                ft.AlertDialog(
                    title=ft.Text("Something went wrong"),
                    content=ft.Text(f"Details: {exc}"),
                    open=True,
                )
            )
            page.update()

    view_state = Computed(lambda: _view_state(store), name="view_state")
    subscribe(view_state, render)

    # first paint happens when the page adds the view
    fill(view_state.peek())

    return ft.View(
        route="/",
        bgcolor=COLOR_BG,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        controls=[
            ft.Text(APP_TITLE, size=64, color=COLOR_TITLE, weight=ft.FontWeight.W_100),
            ft.Container(
                width=CONTENT_WIDTH,
                bgcolor=COLOR_CARD,
                border_radius=BORDER_RADIUS_CARD,
                border=ft.border.all(1, COLOR_BORDER),
                padding=ft.Padding.symmetric(horizontal=8, vertical=4),
                content=ft.Column(
                    controls=[
                        ft.Row([toggle_all, new_input]),
                        ft.Divider(height=1, color=COLOR_BORDER),
                        list_column,
                        footer,
                    ],
                    spacing=0,
                ),
            ),
            ft.Text("Double-click to edit a task", size=11, color=COLOR_TEXT_MUTED),
        ],
    )
