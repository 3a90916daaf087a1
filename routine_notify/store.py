from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .icons import icon_filename, is_valid_icon_name
from .models import DEFAULT_RULES, IconStoreError, NotificationRule, Task
from .paths import CUSTOM_ICONS_DIR, NOTIFICATIONS_FILE, TODOS_FILE, ensure_data_dir

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Owns the in-memory rules and tasks and the JSON snapshots behind them.

    Every save replaces the in-memory collection first, then writes the whole
    file. A failed write is logged and the in-memory copy stays authoritative.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = ensure_data_dir(Path(base_dir))
        self.notifications_path = self.base_dir / NOTIFICATIONS_FILE
        self.todos_path = self.base_dir / TODOS_FILE
        self.icons_dir = self.base_dir / CUSTOM_ICONS_DIR

        self.rules: Tuple[NotificationRule, ...] = ()
        self.tasks: Tuple[Task, ...] = ()

    # ---------- Notification rules ----------
    def load_rules(self) -> Tuple[NotificationRule, ...]:
        try:
            raw = self._read_json(self.notifications_path)
            rules = _unique_ids(NotificationRule.from_dict(d) for d in raw)
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Could not read %s (%s); seeding default notifications", self.notifications_path, e)
            self.save_rules(DEFAULT_RULES)
            return self.rules

        self.rules = rules
        return self.rules

    def save_rules(self, rules: Iterable[NotificationRule]) -> bool:
        self.rules = tuple(rules)
        return self._write_json(self.notifications_path, [r.to_dict() for r in self.rules])

    # ---------- Tasks ----------
    def load_tasks(self) -> Tuple[Task, ...]:
        try:
            raw = self._read_json(self.todos_path)
            tasks = _unique_ids(Task.from_dict(d) for d in raw)
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Could not read %s (%s); starting with no tasks", self.todos_path, e)
            tasks = ()

        self.tasks = tasks
        return self.tasks

    def save_tasks(self, tasks: Iterable[Task]) -> bool:
        self.tasks = tuple(tasks)
        return self._write_json(self.todos_path, [t.to_dict() for t in self.tasks])

    # ---------- Custom icons ----------
    def list_icon_files(self) -> List[str]:
        try:
            names = [p.name for p in self.icons_dir.iterdir() if p.is_file()]
        except OSError:
            return []
        return sorted(n for n in names if is_valid_icon_name(n))

    def store_icon(self, data: bytes, original_name: str) -> str:
        name = icon_filename(data, original_name)
        target = self.icons_dir / name
        if target.exists():
            logger.debug("Icon %s already stored", name)
            return name
        tmp = target.with_name(name + ".tmp")
        try:
            self.icons_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, target)
        except OSError as e:
            logger.error("Error saving custom icon %s: %s", name, e)
            raise IconStoreError(f"Could not save icon {original_name!r}: {e}") from e
        logger.info("Stored custom icon %s (from %s)", name, original_name)
        return name

    def icon_path(self, name: str) -> Optional[Path]:
        """Path of a stored icon, or None if no such file exists."""
        p = self.icons_dir / name
        return p if p.is_file() else None

    # ---------- helpers ----------
    def _read_json(self, path: Path) -> Sequence[Any]:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON list in {path.name}")
        return data

    def _write_json(self, path: Path, payload: Any) -> bool:
        tmp = path.with_name(path.name + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, path)
        except OSError:
            logger.exception("Error saving %s", path.name)
            return False
        return True


def _unique_ids(records: Iterable[Any]) -> Tuple[Any, ...]:
    out = tuple(records)
    ids = [r.id for r in out]
    if len(ids) != len(set(ids)):
        raise ValueError("duplicate ids")
    return out
