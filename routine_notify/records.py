from __future__ import annotations
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple, Union

from .models import NotificationRule, Task
from .periods import iso_timestamp, parse_iso


def next_id(records: Iterable[Union[NotificationRule, Task]]) -> int:
    return max((r.id for r in records), default=0) + 1


# ---------- Notification rules ----------
def add_rule(
    rules: Sequence[NotificationRule],
    hour: int,
    minute: int,
    message: str,
    icon: str = "",
) -> Tuple[NotificationRule, ...]:
    rule = NotificationRule(id=next_id(rules), hour=hour, minute=minute, message=message, icon=icon, enabled=True)
    return tuple(rules) + (rule,)


def update_rule(
    rules: Sequence[NotificationRule],
    rule_id: int,
    hour: int,
    minute: int,
    message: str,
    icon: str = "",
) -> Tuple[NotificationRule, ...]:
    # Saving the edit form re-enables the rule.
    _index_of(rules, rule_id)
    return tuple(
        replace(r, hour=hour, minute=minute, message=message, icon=icon, enabled=True) if r.id == rule_id else r
        for r in rules
    )


def toggle_rule(rules: Sequence[NotificationRule], rule_id: int) -> Tuple[NotificationRule, ...]:
    _index_of(rules, rule_id)
    return tuple(replace(r, enabled=not r.enabled) if r.id == rule_id else r for r in rules)


def delete_rule(rules: Sequence[NotificationRule], rule_id: int) -> Tuple[NotificationRule, ...]:
    return tuple(r for r in rules if r.id != rule_id)


def sorted_rules(rules: Iterable[NotificationRule]) -> List[NotificationRule]:
    return sorted(rules, key=lambda r: r.hour * 60 + r.minute)


# ---------- Tasks ----------
def add_task(tasks: Sequence[Task], text: str, now: datetime) -> Tuple[Task, ...]:
    task = Task(id=next_id(tasks), text=text, completed=False, created_at=iso_timestamp(now))
    return tuple(tasks) + (task,)


def toggle_task(tasks: Sequence[Task], task_id: int, now: datetime) -> Tuple[Task, ...]:
    _index_of(tasks, task_id)
    out = []
    for t in tasks:
        if t.id == task_id:
            completed = not t.completed
            t = replace(t, completed=completed, completed_at=iso_timestamp(now) if completed else None)
        out.append(t)
    return tuple(out)


def delete_task(tasks: Sequence[Task], task_id: int) -> Tuple[Task, ...]:
    return tuple(t for t in tasks if t.id != task_id)


def sorted_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Open tasks first; newest first within each group."""
    newest_first = sorted(tasks, key=lambda t: parse_iso(t.created_at), reverse=True)
    return sorted(newest_first, key=lambda t: t.completed)


def _index_of(records: Sequence[Union[NotificationRule, Task]], record_id: int) -> int:
    for i, r in enumerate(records):
        if r.id == record_id:
            return i
    raise KeyError(record_id)
