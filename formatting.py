"""
Project: Cafe POS
Date: October 2026

Description:
Display formatting for amounts and timestamps in the Thai locale
(baht currency, Thai month names, Buddhist-era years).
"""

from datetime import date, datetime

THAI_MONTHS = (
    "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
    "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
)

BUDDHIST_ERA_OFFSET = 543


def _to_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        # accept the trailing Z the server may send
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise TypeError(f"Cannot format {type(value).__name__} as a date")


def format_currency(amount) -> str:
    """1200 -> '฿1,200'; fractions are only shown when present (45.5 -> '฿45.5')."""
    rounded = round(float(amount), 2)
    sign = "-" if rounded < 0 else ""
    rounded = abs(rounded)
    if rounded == int(rounded):
        body = f"{int(rounded):,}"
    else:
        body = f"{rounded:,.2f}".rstrip("0")
    return f"{sign}฿{body}"


def format_date(value) -> str:
    d = _to_datetime(value)
    return f"{d.day} {THAI_MONTHS[d.month - 1]} {d.year + BUDDHIST_ERA_OFFSET}"


def format_time(value) -> str:
    d = _to_datetime(value)
    return f"{d.hour:02d}:{d.minute:02d}"


def format_date_time(value) -> str:
    d = _to_datetime(value)
    return f"{format_date(d)} {format_time(d)}"
