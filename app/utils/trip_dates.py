from datetime import date
from typing import Optional


def trip_status(start_date: Optional[date], end_date: Optional[date], today: Optional[date] = None) -> str:
    if start_date is None or end_date is None:
        return "unscheduled"
    today = today or date.today()
    if today < start_date:
        return "upcoming"
    if today > end_date:
        return "past"
    return "ongoing"


def duration_days(start_date: Optional[date], end_date: Optional[date]) -> Optional[int]:
    """Inclusive of both the first and the last day."""
    if start_date is None or end_date is None:
        return None
    return (end_date - start_date).days + 1


def days_info(start_date: Optional[date], end_date: Optional[date], today: Optional[date] = None) -> Optional[str]:
    if start_date is None or end_date is None:
        return None
    today = today or date.today()

    if today < start_date:
        remaining = (start_date - today).days
        return "Starts tomorrow" if remaining == 1 else f"Starts in {remaining} days"
    if today > end_date:
        elapsed = (today - end_date).days
        return "Ended yesterday" if elapsed == 1 else f"Ended {elapsed} days ago"
    return f"Day {(today - start_date).days + 1} of {duration_days(start_date, end_date)}"
