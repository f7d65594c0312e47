import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from mgpad.dialogs import RecoveryDialog
from mgpad.documents import APP_NAME
from mgpad.main_window import MainWindow
from mgpad.recovery import RecoveryService
from mgpad.settings import APP_ORG, EditorSettings

logger = logging.getLogger("mgpad")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="mgpad", description="Rich text editor with Markdown preview")
    parser.add_argument("path", nargs="?", help="Document to open")
    parser.add_argument("--debug", action="store_true", help="Log debug messages")
    return parser.parse_args(argv)


def choose_recovery(parent=None):
    """Ask which autosave to restore, if any were left behind."""
    service = RecoveryService()
    items = service.recoverable_items()
    if not items:
        return None
    logger.info("Found %d recoverable document(s)", len(items))
    dialog = RecoveryDialog(items, service, parent)
    dialog.exec()
    return dialog.selected_recovery


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    app.setOrganizationName(APP_ORG)
    app.setApplicationName(APP_NAME)

    settings = EditorSettings.load()
    recovery = choose_recovery()
    window = MainWindow(settings, recovery=recovery, path=args.path)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
