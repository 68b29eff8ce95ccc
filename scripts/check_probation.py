"""Run one probation scan for a company and print what was sent.

Usage: python scripts/check_probation.py <company_id> [YYYY-MM-DD]
"""
from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv

from hr_portal.common.datetime_utils import parse_iso_date
from hr_portal.config import get_settings_module
from hr_portal.container import build_container
from hr_portal.core.logging import setup_logging


def main(argv: list[str]) -> int:
    if not argv:
        print(__doc__)
        return 2

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), upload_dir=settings.UPLOAD_DIR)
    today = parse_iso_date(argv[1]) if len(argv) > 1 else None
    result = container.probation_scanner.scan(argv[0], today=today)

    print(f"checked={result.checked} sent={len(result.sent)} skipped={len(result.skipped_existing)} failed={len(result.failed)}")
    for user_id, milestone in result.sent:
        print(f"  sent {milestone.value} for {user_id}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
