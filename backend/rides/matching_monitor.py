"""It runs a background thread that keeps matching waiting rides with free chairs"""

import logging
import os
import threading
from typing import Optional

from django.conf import settings
from django.db import close_old_connections

logger = logging.getLogger(__name__)

_monitor_instance: Optional["MatchingMonitor"] = None


class MatchingMonitor:
    def __init__(self, interval_seconds: float, max_radius: Optional[float] = None):
        self.interval_seconds = interval_seconds
        self.max_radius = max_radius
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self):
        if not self._thread.is_alive():
            logger.info(
                "Starting matching monitor (interval=%ss radius=%s)",
                self.interval_seconds,
                self.max_radius,
            )
            self._thread.start()

    def stop(self):
        self._stop_event.set()

    def run_once(self) -> int:
        from services.matching import run_matching_cycle

        try:
            return run_matching_cycle(max_radius=self.max_radius).matched_count
        finally:
            close_old_connections()

    def _run(self):
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception:  # pragma: no cover - best effort logging
                logger.exception("Matching monitor encountered an error")


def start_matching_monitor():
    global _monitor_instance

    if not getattr(settings, "ENABLE_MATCHING_MONITOR", False):
        return None

    # Avoid double-start in Django's autoreload parent process
    run_main = os.environ.get("RUN_MAIN")
    if run_main not in (None, "true"):
        return None

    if _monitor_instance is None:
        _monitor_instance = MatchingMonitor(
            interval_seconds=getattr(settings, "MATCHING_INTERVAL_SECONDS", 0.5),
            max_radius=getattr(settings, "MATCHING_MAX_RADIUS", None),
        )
        _monitor_instance.start()
    return _monitor_instance


def stop_matching_monitor():
    global _monitor_instance

    if _monitor_instance is not None:
        _monitor_instance.stop()
        _monitor_instance = None
