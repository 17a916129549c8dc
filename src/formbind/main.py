"""
Application entry point for FormBind.

Opens the settings dialog, either as a normal runtime dialog that stores its values on
OK, or placed on a design surface where language keys are checked and edited live.
"""

import argparse
import logging
import sys
from typing import List, Optional

from PyQt6.QtWidgets import QApplication, QMessageBox

from formbind import constants
from formbind.constants.i18n import get_language_table
from formbind.core.design_tracker import DesignSurface
from formbind.utils.config import ConfigError, get_config_store
from formbind.utils.helpers import setup_logging
from formbind.views.settings import SettingsDialog


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="formbind", description="Localized, configuration-bound settings dialog.")
    parser.add_argument("--language", help="Language code to use instead of the configured one, e.g. de_DE")
    parser.add_argument("--design", action="store_true",
                        help="Open the dialog on a design surface; nothing is stored")
    parser.add_argument("--version", action="version", version=f"%(prog)s {constants.app.VERSION}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the FormBind application.

    Returns:
        An integer exit code.
    """
    args = parse_args(argv)
    setup_logging()
    logger = logging.getLogger("FormBind.Main")

    app = QApplication.instance() or QApplication(sys.argv[:1])

    try:
        store = get_config_store()
    except ConfigError as e:
        logger.critical("Could not load configuration: %s", e)
        QMessageBox.critical(None, constants.app.APP_NAME, str(e))
        return 1

    language = args.language or str(store.get_section(constants.config.defaults.CORE_SECTION)["Language"])
    table = get_language_table(language)
    table.set_language(language)

    dialog = SettingsDialog(language_table=table, config_store=store)
    surface: Optional[DesignSurface] = None
    if args.design:
        surface = DesignSurface(app)
        surface.add_component(dialog)
        logger.info("Opened on a design surface.")

    try:
        result = dialog.exec()
        logger.info("Settings dialog closed with result %s", result)
    finally:
        dialog.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
