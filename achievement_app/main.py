from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow

try:  # also runnable as a plain script
    from .achievement_store import AchievementStore
    from .config import AppConfig, load_config
    from .dashboard import DashboardView
    from .data_loader import load_quotes
    from .logger import setup_logger
    from .storage import DashboardStorage, JsonFileStore
except ImportError:  # pragma: no cover - script mode only
    if __package__ in (None, ""):
        package_dir = Path(__file__).resolve().parent
        project_root = package_dir.parent
        if str(project_root) not in sys.path:
            sys.path.append(str(project_root))
        from achievement_app.achievement_store import AchievementStore  # type: ignore[no-redef]
        from achievement_app.config import AppConfig, load_config  # type: ignore[no-redef]
        from achievement_app.dashboard import DashboardView  # type: ignore[no-redef]
        from achievement_app.data_loader import load_quotes  # type: ignore[no-redef]
        from achievement_app.logger import setup_logger  # type: ignore[no-redef]
        from achievement_app.storage import DashboardStorage, JsonFileStore  # type: ignore[no-redef]
    else:
        raise

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Hosts the dashboard and stands in for the router on logout."""

    def __init__(self, store: AchievementStore, config: AppConfig) -> None:
        super().__init__()
        self.store = store
        self.route = "/dashboard"
        self.dashboard = DashboardView(
            store,
            load_quotes(config.data_dir),
            navigator=self,
            submit_delay_ms=config.submit_delay_ms,
        )
        self.setCentralWidget(self.dashboard)
        self.setWindowTitle("Student Achievements")
        self.setStyleSheet("QMainWindow { background-color: #f9fafb; }")
        self.resize(1200, 800)

    def navigate(self, route: str) -> None:
        logger.info("Navigating to %s", route)
        self.route = route
        # the login view lives outside this app; show a placeholder
        placeholder = QLabel("You have been logged out. Sign in again to continue.")
        placeholder.setObjectName("loginPlaceholder")
        placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCentralWidget(placeholder)
        self.dashboard = None

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.isAutoRepeat():
            return
        if event.key() == Qt.Key.Key_Escape:
            self.close()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        if self.dashboard is not None:
            self.dashboard.teardown()
        super().closeEvent(event)


def main() -> int:
    config = load_config()
    setup_logger(str(config.log_file), config.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("Student Achievements")

    store = AchievementStore(DashboardStorage(JsonFileStore(config.store_path)))
    store.load()

    window = MainWindow(store, config)
    window.show()
    logger.info("Dashboard started with store %s", config.store_path)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
