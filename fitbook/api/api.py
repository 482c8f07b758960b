from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from fitbook.api import booking, classes, notifications
from fitbook.api.errors import register_exception_handlers
from fitbook.database.database import init_db
from fitbook.reminders import ReminderScheduler
from fitbook.settings import get_settings
from fitbook.utils.logging_utils import log


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db()
    Path(settings.UPLOADS_DIR).mkdir(parents=True, exist_ok=True)
    reminder_scheduler = ReminderScheduler()
    if settings.REMINDERS_ENABLED:
        reminder_scheduler.start()
    else:
        log.info("Class start reminders are disabled")
    yield
    reminder_scheduler.stop()


api = FastAPI(title="fitbook", lifespan=lifespan)

api.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(api)

api.mount(
    "/uploads",
    StaticFiles(directory=get_settings().UPLOADS_DIR, check_dir=False),
    name="uploads",
)

api.include_router(classes.router, prefix="/api/classes", tags=["classes"])
api.include_router(booking.router, prefix="/api/bookings", tags=["bookings"])
api.include_router(
    notifications.router, prefix="/api/notifications", tags=["notifications"]
)
