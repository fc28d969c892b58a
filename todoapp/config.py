"""
config.py - パス解決・アプリ定数
Todos v1.0
"""

import os
import sys

# ---------------------------------------------------------------------------
# パス解決（exe 化対応）
# ---------------------------------------------------------------------------


def get_base_path() -> str:
    """
    データファイルを置くディレクトリを返す。
    - TODOS_DATA_DIR 指定あり: そのディレクトリ
    - exe 化されている場合  : exe のあるディレクトリ
    - スクリプト実行の場合  : プロジェクトルート（todoapp/ の親）
    """
    data_dir = os.environ.get("TODOS_DATA_DIR")
    if data_dir:
        return data_dir
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


BASE_PATH = get_base_path()

# 永続ストレージ（JSON オブジェクト 1 ファイル）
STORAGE_PATH = os.path.join(BASE_PATH, "todos.json")
STORAGE_KEY = "todos-flet"

# ---------------------------------------------------------------------------
# アプリ定数
# ---------------------------------------------------------------------------

APP_TITLE = "todos"
APP_VERSION = "1.0.0"
PERSIST_DEBOUNCE_SECONDS = 0.5  # 保存は最大 0.5 秒に 1 回

# flet の KeyUpEvent.key が返すキー名
ENTER_KEY = "Enter"
ESCAPE_KEY = "Escape"

# ---------------------------------------------------------------------------
# カラーパレット
# ---------------------------------------------------------------------------

COLOR_BG = "#F5F5F5"
COLOR_CARD = "#FFFFFF"
COLOR_BORDER = "#E6E6E6"
COLOR_TITLE = "#B83F45"
COLOR_TEXT_MAIN = "#111111"
COLOR_TEXT_MUTED = "#949494"
COLOR_PRIMARY = "#B83F45"
COLOR_DANGER = "#CF222E"

# UI 定数
BORDER_RADIUS_CARD = 4
CONTENT_WIDTH = 550
