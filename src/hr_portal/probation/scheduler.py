from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import PROBATION_CHECK_INTERVAL_SECONDS
from .scanner import ProbationScanner, ScanResult

logger = logging.getLogger(__name__)


class ProbationScheduler:
    """Runs the probation scan once when enabled, then every `interval_seconds`.

    Disabling stops the interval; a scan that is already running finishes.
    A failed run is logged and the next one is scheduled as usual.
    """

    def __init__(
        self,
        scanner: ProbationScanner,
        *,
        company_id: str,
        interval_seconds: float = PROBATION_CHECK_INTERVAL_SECONDS,
    ):
        self._scanner = scanner
        self._company_id = company_id
        self._interval = float(interval_seconds)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.running = False
        self.last_check: Optional[datetime] = None
        self.last_error: Optional[str] = None
        self.last_result: Optional[ScanResult] = None

    @property
    def enabled(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            self.start()
        else:
            self.stop()

    def start(self) -> None:
        if not self._company_id or self.enabled:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="probation-scheduler", daemon=True)
        self._thread.start()
        logger.info("probation scheduler started", extra={"company_id": self._company_id})

    def stop(self, *, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None

    def run_once(self) -> Optional[ScanResult]:
        self.running = True
        self.last_error = None
        try:
            self.last_result = self._scanner.scan(self._company_id)
            self.last_check = now_local()
            return self.last_result
        except Exception as e:
            logger.exception("probation scan failed", extra={"company_id": self._company_id})
            self.last_error = str(e) or e.__class__.__name__
            return None
        finally:
            self.running = False

    def _loop(self) -> None:
        while not self._stop.is_set():
            self.run_once()
            if self._stop.wait(self._interval):
                break
