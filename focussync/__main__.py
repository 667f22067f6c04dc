"""Allow running FocusSync as a module: python -m focussync."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .log import configure_logging
from .settings import load_settings
from .timer.engine import TimerCore
from .ui.timer_widget import TimerWidget
from .websocket_channel import WebSocketChannel

logger = logging.getLogger("focussync")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("FocusSync")
    app.setOrganizationName("FocusSync")

    channel = WebSocketChannel(settings.server_url)
    core = TimerCore(
        channel,
        settings.preset_table(),
        sync_interval_ms=settings.sync_interval_ms,
    )
    core.attach(settings.current_task())
    core.set_preset(settings.initial_preset())

    window = TimerWidget(core)
    window.setWindowTitle("FocusSync")
    window.show()

    app.aboutToQuit.connect(core.detach)
    app.aboutToQuit.connect(channel.close)

    channel.open()
    logger.info("FocusSync ready (server=%s)", settings.server_url)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
