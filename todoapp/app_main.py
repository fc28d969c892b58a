"""
app_main.py - Todos メインアプリケーション
Todos v1.0
"""

import logging

import flet as ft

from todoapp.config import APP_TITLE, COLOR_BG, COLOR_PRIMARY, STORAGE_KEY, STORAGE_PATH
from todoapp.database.storage import JsonFileStorage
from todoapp.domain.filters import mode_from_route
from todoapp.reactive.scheduler import AsyncioScheduler
from todoapp.services.persister import TaskPersister, load_snapshot
from todoapp.services.task_store import TaskStore
from todoapp.ui import views

logger = logging.getLogger(__name__)


def create_store(storage, scheduler) -> tuple[TaskStore, TaskPersister]:
    """ストレージからストアを復元し、遅延保存を取り付ける"""
    records = load_snapshot(storage, STORAGE_KEY)
    store = TaskStore(records)
    persister = TaskPersister(store, storage, scheduler)
    logger.info("Loaded %d task(s) from %s", len(records), STORAGE_PATH)
    return store, persister


# ==========================================================================
# メインアプリ
# ==========================================================================


def main(page: ft.Page):
    page.title = APP_TITLE
    page.theme_mode = ft.ThemeMode.LIGHT
    page.bgcolor = COLOR_BG
    page.padding = 0
    page.theme = ft.Theme(color_scheme_seed=COLOR_PRIMARY)

    storage = JsonFileStorage(STORAGE_PATH)
    scheduler = AsyncioScheduler(page.run_task)
    store, persister = create_store(storage, scheduler)

    def route_change(_e: ft.RouteChangeEvent = None):
        store.show_mode.set(mode_from_route(page.route))

    # 閉じる前に保留中の変更を書き出す
    async def on_window_event(e: ft.WindowEvent):
        if e.type == ft.WindowEventType.CLOSE:
            try:
                if persister.flush_now():
                    logger.info("Flushed pending changes on close")
            except Exception:
                logger.warning("Failed to flush pending changes on close", exc_info=True)
            page.window.prevent_close = False
            await page.window.close()

    page.on_route_change = route_change
    page.window.prevent_close = True
    page.window.on_event = on_window_event

    try:
        page.views.clear()
        page.views.append(views.build_todo_view(page, store, scheduler))
        route_change()
        page.update()
    except Exception as exc:
        logger.exception("Failed to build the task view")
        page.overlay.append(
            ft.AlertDialog(
                title=ft.Text("Startup error"),
                content=ft.Text(f"Details: {exc}"),
                open=True,
            )
        )
        page.update()


# ==========================================================================
# エントリポイント
# ==========================================================================


if __name__ == "__main__":
    ft.app(main)
