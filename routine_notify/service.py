from __future__ import annotations
import logging
from typing import Iterable, List, Tuple

from .icons import IconIngestor
from .models import NotificationRule, Task
from .scheduler import Scheduler
from .store import RecordStore

logger = logging.getLogger(__name__)


class RoutineService:
    """
    Request/response boundary used by the window.

    All rule and task changes go through here so that persisting and
    re-arming happen together.
    """

    def __init__(self, store: RecordStore, scheduler: Scheduler):
        self.store = store
        self.scheduler = scheduler
        self.icons = IconIngestor(store)

    def start(self) -> None:
        rules = self.store.load_rules()
        tasks = self.store.load_tasks()
        logger.info("Loaded %d notification(s) and %d task(s)", len(rules), len(tasks))
        self.scheduler.rearm(rules)

    # ---------- Notification rules ----------
    def rules(self) -> Tuple[NotificationRule, ...]:
        return self.store.rules

    def replace_rules(self, rules: Iterable[NotificationRule]) -> bool:
        ok = self.store.save_rules(rules)
        self.scheduler.rearm(self.store.rules)
        return ok

    # ---------- Tasks ----------
    def tasks(self) -> Tuple[Task, ...]:
        return self.store.tasks

    def replace_tasks(self, tasks: Iterable[Task]) -> bool:
        return self.store.save_tasks(tasks)

    # ---------- Icons ----------
    def available_icons(self) -> List[str]:
        return self.store.list_icon_files()

    def upload_icon(self, data: bytes, file_name: str) -> str:
        return self.icons.ingest(data, file_name)
