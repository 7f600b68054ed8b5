from datetime import date, datetime, timedelta

from src.config import AppConfig


def local_now() -> datetime:
    """Timezone-aware 'now' in the machine's local zone."""
    return datetime.now().astimezone()


def to_local_day(instant: datetime) -> date:
    """
    Truncates an instant to the local calendar day.
    Naive datetimes are taken as already local.
    """
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone().date()


def day_key(value: date | datetime) -> str:
    """Canonical YYYY-MM-DD encoding of a calendar day."""
    if isinstance(value, datetime):
        value = to_local_day(value)
    return value.strftime(AppConfig.DAY_KEY_FORMAT)


def day_of_year(day: date) -> int:
    """1-based ordinal of the day within its year (Jan 1 == 1)."""
    return day.timetuple().tm_yday


def is_same_day(instant: datetime | None, now: datetime) -> bool:
    if instant is None:
        return False
    return to_local_day(instant) == to_local_day(now)


def recent_days(today: date, count: int = AppConfig.CALENDAR_DAYS) -> list[date]:
    """The last `count` days ending with `today`, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def header_label(day: date) -> str:
    """e.g. 'Saturday, October 17'."""
    return f"{day:%A, %B} {day.day}"
