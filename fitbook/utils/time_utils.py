import datetime

import pytz

from fitbook.settings import get_settings


def local_now() -> datetime.datetime:
    # naive wall-clock time in the configured zone, comparable to class schedules
    return datetime.datetime.now(pytz.timezone(get_settings().TIMEZONE)).replace(
        tzinfo=None
    )


def class_start_time(date: datetime.date, time: datetime.time) -> datetime.datetime:
    return datetime.datetime.combine(date, time)


def readable_date(date: datetime.date) -> str:
    return f"{date.month}/{date.day}/{date.year}"


def readable_time(time: datetime.time) -> str:
    return time.strftime("%H:%M")
