"""Static text for the welcome banner and the profile commands."""

from __future__ import annotations

import datetime

BANNER = r"""
                               _          _ _
 _ __ ___ _ __   ___       ___| |__   ___| | |
| '__/ _ \ '_ \ / _ \_____/ __| '_ \ / _ \ | |
| | |  __/ |_) | (_) |_____\__ \ | | |  __/ | |
|_|  \___| .__/ \___/     |___/_| |_|\___|_|_|
         |_|
""".strip("\n")

WELCOME_LINES = [
    "Welcome to my interactive terminal!",
    "Type help to see a list of available commands.",
    "-" * 52,
]


def calculate_age(birth_date: str, today: datetime.date | None = None) -> int:
    """Whole years since an ISO birth date."""
    birth = datetime.date.fromisoformat(birth_date)
    today = today or datetime.date.today()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def fill_profile_text(text: str, birth_date: str | None, today: datetime.date | None = None) -> str:
    """Expand the {age} placeholder; left as-is without a valid birth date."""
    if "{age}" not in text or not birth_date:
        return text
    try:
        age = calculate_age(birth_date, today)
    except ValueError:
        return text
    return text.replace("{age}", str(age))
