from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

_HANDLER_NAME = "hr_portal.json"


def setup_logging(level: str = "INFO") -> None:
    """Attach a JSON stream handler to the root logger.

    Safe to call more than once (create_app runs per test).
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)

    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
