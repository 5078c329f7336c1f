import logging
import time

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from services.matching import RepositoryError, run_matching_cycle

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Match waiting rides with the nearest eligible chairs."

    def add_arguments(self, parser):
        parser.add_argument(
            "--loop",
            action="store_true",
            help="Keep running a matching cycle every --interval seconds.",
        )
        parser.add_argument(
            "--interval",
            type=float,
            default=None,
            help="Seconds between cycles in --loop mode (default: MATCHING_INTERVAL_SECONDS).",
        )
        parser.add_argument(
            "--max-radius",
            type=float,
            default=None,
            help="Skip chairs farther than this from the pickup (default: MATCHING_MAX_RADIUS).",
        )

    def handle(self, *args, **options):
        max_radius = options["max_radius"]

        if not options["loop"]:
            try:
                result = run_matching_cycle(max_radius=max_radius)
            except RepositoryError as exc:
                raise CommandError(f"Matching cycle failed: {exc}") from exc

            self.stdout.write(self.style.SUCCESS(f"Matched {result.matched_count} ride(s)."))
            return

        interval = options["interval"]
        if interval is None:
            interval = getattr(settings, "MATCHING_INTERVAL_SECONDS", 0.5)
        self.stdout.write(f"Running matching every {interval}s. Press Ctrl+C to stop.")

        try:
            while True:
                try:
                    run_matching_cycle(max_radius=max_radius)
                except RepositoryError:
                    logger.exception("Matching cycle aborted; retrying next interval")
                time.sleep(interval)
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING("Matching loop stopped."))
