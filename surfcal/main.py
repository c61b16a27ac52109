# ABOUTME: Command-line entry point for the surf window calendar sync
# ABOUTME: Runs the orchestrator once, against Google Calendar or a dry-run calendar

import argparse
import logging
import sys
from typing import Optional

from surfcal import config as settings
from surfcal.calendar.reconciler import Action
from surfcal.config import Config
from surfcal.orchestrator import DayReport, SurfOrchestrator

log = logging.getLogger(__name__)

ACTION_ICONS = {
    Action.CREATE: "✅",
    Action.UPDATE: "📝",
    Action.RECOVER: "↗️",
    Action.DEGRADE: "↘️",
    Action.NOOP: "❌",
}


def format_report(report: DayReport) -> str:
    icon = ACTION_ICONS[report.action]
    line = f"{report.day}  {icon} {report.action.value.upper()} (existing: {report.existing_state.value})"
    if report.window:
        line += f"\n            {report.window}"
        if report.window.score is not None:
            line += f"  score {report.window.score}/100"
    if report.recommendation:
        line += f"\n            {report.recommendation.emoji} {report.recommendation.label}"
    return line


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sync the best daily surf window to a calendar")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would happen without touching the real calendar",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.from_env()
        orchestrator = SurfOrchestrator(config, dry_run=args.dry_run)
        reports = orchestrator.run()
    except Exception as e:
        log.error(f"Surf window sync failed: {type(e).__name__}: {e}")
        return 1

    print("=" * 60)
    print(f"Surf windows for {config.location.name}{' (DRY RUN)' if args.dry_run else ''}")
    print("=" * 60)
    for report in reports:
        print(format_report(report))
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
