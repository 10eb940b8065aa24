from __future__ import annotations

from datetime import date

from fitness_app.core.session.models import LoginStreak


def next_streak(current: LoginStreak, today: date) -> LoginStreak:
    """
    Day-granularity login streak.

    First login starts at 1, a login the day after the last one extends the
    streak, a gap of more than a day resets it to 1. Logging in again on the
    same day (or with a last date in the future) leaves the count alone.
    """
    if not current.last_login_date:
        return LoginStreak(streak=1, last_login_date=today.isoformat())
    try:
        last = date.fromisoformat(current.last_login_date)
    except ValueError:
        return LoginStreak(streak=1, last_login_date=today.isoformat())
    gap = (today - last).days
    if gap == 1:
        streak = current.streak + 1
    elif gap > 1:
        streak = 1
    else:
        streak = max(1, current.streak)
    return LoginStreak(streak=streak, last_login_date=max(today, last).isoformat())
