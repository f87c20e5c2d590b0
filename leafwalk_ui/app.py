import logging
import os
import sys

from dotenv import load_dotenv
from PySide6.QtWidgets import QApplication

from leafwalk.config import reset_config

from .main_window import MainWindow


def main() -> int:
    load_dotenv()
    # Pick up LEAFWALK_* settings from .env
    reset_config()
    logging.basicConfig(
        level=os.getenv("LEAFWALK_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
