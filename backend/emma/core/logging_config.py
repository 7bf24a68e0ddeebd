from __future__ import annotations

import logging


LOG_FORMAT = "%(levelname)s %(message)s"
HANDLER_NAME = "emma-console"


def configure_logging(verbose: bool = False) -> None:
    """Install the console handler used by the command line scripts.

    Calling it again replaces the handler instead of stacking a second one.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
