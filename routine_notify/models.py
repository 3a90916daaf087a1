from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .periods import parse_iso


class ValidationError(ValueError):
    """Raised for user input that must not reach the store."""


class IconStoreError(OSError):
    """Raised when an uploaded icon cannot be written to the icon store."""


@dataclass(frozen=True)
class NotificationRule:
    id: int
    hour: int
    minute: int
    message: str
    icon: str = ""  # "" = no icon, else a filename in custom-icons/
    enabled: bool = True

    @property
    def hhmm(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "hour": self.hour,
            "minute": self.minute,
            "message": self.message,
            "icon": self.icon,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "NotificationRule":
        hour, minute = int(d["hour"]), int(d["minute"])
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"rule {d.get('id')}: time {hour}:{minute} out of range")
        return cls(
            id=int(d["id"]),
            hour=hour,
            minute=minute,
            message=str(d["message"]),
            icon=str(d.get("icon") or ""),
            enabled=bool(d.get("enabled", True)),
        )


@dataclass(frozen=True)
class Task:
    id: int
    text: str
    completed: bool
    created_at: str  # ISO-8601
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # camelCase keys, same as todos.json written by earlier versions
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        created_at = str(d["createdAt"])
        parse_iso(created_at)  # ValueError if malformed
        return cls(
            id=int(d["id"]),
            text=str(d["text"]),
            completed=bool(d.get("completed", False)),
            created_at=created_at,
            completed_at=d.get("completedAt"),
        )


DEFAULT_RULES = (
    NotificationRule(id=1, hour=9, minute=0, message="Morning routine", icon="", enabled=True),
    NotificationRule(id=2, hour=18, minute=0, message="Evening break", icon="", enabled=True),
)
