from __future__ import annotations

import threading

from hr_portal.probation.scanner import ScanResult
from hr_portal.probation.scheduler import ProbationScheduler


class FakeScanner:
    def __init__(self, error=None):
        self.calls = []
        self.error = error
        self.scanned = threading.Event()

    def scan(self, company_id, *, today=None):
        self.calls.append(company_id)
        self.scanned.set()
        if self.error:
            raise self.error
        return ScanResult(checked=1)


def test_run_once_records_last_check():
    scanner = FakeScanner()
    scheduler = ProbationScheduler(scanner, company_id="c1")

    result = scheduler.run_once()

    assert result.checked == 1
    assert scheduler.last_check is not None
    assert scheduler.last_error is None
    assert scheduler.running is False
    assert scanner.calls == ["c1"]


def test_failed_run_is_recorded_not_raised():
    scheduler = ProbationScheduler(FakeScanner(error=RuntimeError("db down")), company_id="c1")

    assert scheduler.run_once() is None
    assert scheduler.last_error == "db down"
    assert scheduler.running is False


def test_start_without_company_does_nothing():
    scanner = FakeScanner()
    scheduler = ProbationScheduler(scanner, company_id="")

    scheduler.start()

    assert not scheduler.enabled
    assert scanner.calls == []


def test_start_runs_immediately_and_stop_ends_the_loop():
    scanner = FakeScanner()
    scheduler = ProbationScheduler(scanner, company_id="c1", interval_seconds=3600)

    scheduler.set_enabled(True)
    try:
        assert scanner.scanned.wait(timeout=5)
        assert scheduler.enabled
    finally:
        scheduler.set_enabled(False)

    assert not scheduler.enabled
    assert scanner.calls == ["c1"]
