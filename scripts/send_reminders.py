#!/usr/bin/env python3
"""
Run the daily activity reminder scan once, outside the web app.

Intended for a system cron. The scan uses the UTC calendar date, so schedule it
shortly after 00:00 UTC (07:00 Asia/Bangkok):

  0 0 * * * cd /srv/jaothui && python scripts/send_reminders.py

Exit code is 0 when the run completed (even with delivery failures) and 1 when the
due reminders could not be loaded at all.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import InfrastructureError
from src.config.settings import get_settings
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.scheduler.reminder_tasks import build_push_sender, run_daily_reminders


async def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    try:
        summary = await run_daily_reminders(
            session_factory, build_push_sender(settings), settings
        )
    except InfrastructureError as exc:
        print(f"❌ Reminder run aborted: {exc.message}")
        return 1
    finally:
        await engine.dispose()

    print(json.dumps(summary.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
