"""Background job scheduler for anniversary reminders."""
import logging
from datetime import date
from uuid import UUID

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlmodel import Session

from lifeweeks.core.config import settings
from lifeweeks.core.database import engine
from lifeweeks.services.events import anniversaries_on

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def check_anniversaries(session: Session, today: date, user_id: UUID | None = None) -> list[dict]:
    """Reminders for every flagged event whose anniversary is ``today``."""
    reminders = []
    for event in anniversaries_on(session, today, user_id):
        years = today.year - event.date.year
        reminders.append({
            "event_id": str(event.id),
            "user_id": str(event.user_id),
            "title": event.title,
            "date": event.date.isoformat(),
            "years": years,
        })
        logger.info(f"Anniversary: '{event.title}' ({years} years) for user {event.user_id}")
    return reminders


def anniversary_job():
    """Daily anniversary check."""
    try:
        with Session(engine) as session:
            reminders = check_anniversaries(session, date.today())
            logger.info(f"Anniversary check completed: {len(reminders)} reminders")
    except Exception as e:
        logger.error(f"Anniversary check failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        anniversary_job,
        trigger=CronTrigger(hour=settings.anniversary_check_hour),
        id="anniversary_check",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Scheduler started, checking anniversaries daily at {settings.anniversary_check_hour:02d}:00"
    )


def shutdown_scheduler():
    """Graceful shutdown."""
    scheduler.shutdown(wait=False)
    logger.info("Scheduler shut down")
