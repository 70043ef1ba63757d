"""Pastor notification text for a follow-up case."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

from ..common.datetime_utils import parse_year_month
from ..core.constants import WHATSAPP_URL
from ..units.model import Unit
from .service import FollowUpEntry


@dataclass(frozen=True)
class EscalationMessage:
    text: str
    url: str


def format_period(period: str) -> str:
    year, month = parse_year_month(period)
    return f"{calendar.month_name[month]}/{year}"


def round_percent(value: float) -> int:
    """Whole percent, halves rounded up (12.5 -> 13)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compose_escalation(unit: Unit, entry: FollowUpEntry, period: str) -> EscalationMessage:
    member = entry.frequency.member
    stats = entry.frequency.stats
    category = entry.frequency.category

    text = (
        f"Hello, pastor. Attendance of {member.name} (Unit: {unit.name}) in {format_period(period)}: "
        f"Presences {stats.presences}, Absences {stats.absences}, Justified {stats.justifications}, "
        f"Attendance {round_percent(stats.percent)}%. Category: {category.label.upper()}. "
        f"Status: {entry.status.value}. I suggest scheduling a cabinet meeting for follow-up."
    )
    phone = re.sub(r"\D", "", unit.pastor_phone or "")
    return EscalationMessage(text=text, url=WHATSAPP_URL.format(phone=phone, text=quote(text, safe="")))
