"""
storage.py - 永続キーバリューストレージ
Todos v1.0
"""

import json
import logging
import os

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    JSON オブジェクトファイル 1 つで localStorage 相当を提供する。

    ファイルが無い・読めない場合は空のストレージとして扱う。
    書き込みは一時ファイル経由で置き換え、失敗は呼び出し元へ送出する。
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            logger.warning("Storage file unreadable, treating as empty: %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file is not a JSON object: %s", self.path)
            return {}
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def _write_all(self, data: dict) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            # 書きかけの一時ファイルを残さない
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning("Failed to remove temp file: %s", tmp_path)
            raise

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug("Stored %s (%d chars) in %s", key, len(value), self.path)
