import asyncio
from typing import Optional

import typer

from fitbook.reminders import ReminderScheduler, check_starting_classes
from fitbook.utils.logging_utils import log

reminders_cli = typer.Typer()


@reminders_cli.command(name="scan")
def scan_reminders():
    """
    Run a single scan for classes starting soon
    """
    created = check_starting_classes()
    log.info(f"Created {created} class start reminder{'' if created == 1 else 's'}")


@reminders_cli.command(name="run")
def run_reminders(
    interval: Optional[int] = typer.Option(
        None, help="Seconds between scans (defaults to REMINDER_INTERVAL_SECONDS)"
    ),
):
    """
    Keep scanning for classes starting soon until interrupted
    """

    async def run():
        scheduler = ReminderScheduler(interval)
        scheduler.start()
        try:
            await asyncio.Event().wait()
        finally:
            scheduler.stop()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down")
