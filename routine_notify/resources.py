from __future__ import annotations
from pathlib import Path
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication, QStyle


def resource_path(*parts: str) -> Path:
    # Works in dev and in PyInstaller
    import sys
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        base = Path(sys._MEIPASS)  # type: ignore[attr-defined]
    else:
        base = Path(__file__).resolve().parent
    return base.joinpath(*parts)


def app_icon() -> QIcon:
    p = resource_path("assets", "icon.png")
    if p.is_file():
        return QIcon(str(p))
    # No bundled asset: the tray still needs a non-null icon
    return QApplication.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
