from __future__ import annotations

import logging
import sys

from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication, QMessageBox, QStyleFactory

from taskboard.config import load_settings
from taskboard.infra.logging import setup_logging
from taskboard.services.seed import seed_demo_tasks
from taskboard.services.task_service import TaskService
from taskboard.ui.main_window import MainWindow

logger = logging.getLogger(__name__)

STYLESHEET = """
QListWidget#KanbanList { border: 1px solid #202A3B; border-radius: 8px; }
QListWidget#KanbanList[dropTarget="true"] { border: 2px dashed #60A5FA; background: #172554; }
QWidget#TaskCard { background: #1B2230; border-radius: 6px; }
QLabel[class="panel-title"] { font-size: 16px; font-weight: 600; }
QLabel[class="task-title"] { font-weight: 600; }
QLabel[class="task-meta"], QLabel[class="task-description"] { color: #9CA3AF; }
QLabel[class="task-priority"] { color: #0F172A; border-radius: 4px; padding: 1px 6px; }
QLabel[class="stats-badge"] { background: #202A3B; border-radius: 8px; padding: 1px 8px; }
QLabel[class="field-error"] { color: #EF4444; }
"""


def _apply_dark_palette(app: QApplication) -> None:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor("#0F172A"))
    palette.setColor(QPalette.WindowText, QColor("#E6EDF3"))
    palette.setColor(QPalette.Base, QColor("#111827"))
    palette.setColor(QPalette.AlternateBase, QColor("#1B2230"))
    palette.setColor(QPalette.Text, QColor("#E6EDF3"))
    palette.setColor(QPalette.Button, QColor("#202A3B"))
    palette.setColor(QPalette.ButtonText, QColor("#E6EDF3"))
    palette.setColor(QPalette.Highlight, QColor("#2563EB"))
    palette.setColor(QPalette.HighlightedText, QColor("#FFFFFF"))
    app.setPalette(palette)


def build_service(seed: bool) -> TaskService:
    service = TaskService()
    if seed:
        seed_demo_tasks(service)
    return service


def main() -> None:
    try:
        settings = load_settings()
    except RuntimeError as exc:
        app = QApplication(sys.argv)
        QMessageBox.critical(None, "Configuration error", str(exc))
        return

    log_file = setup_logging(settings)
    logger.info("Starting task board, logging to %s", log_file)

    app = QApplication(sys.argv)
    app.setStyle(QStyleFactory.create("Fusion"))
    _apply_dark_palette(app)
    app.setFont(QFont("Segoe UI", 10))
    app.setStyleSheet(STYLESHEET)

    window = MainWindow(build_service(settings.seed_demo_tasks))
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
