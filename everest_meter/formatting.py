"""Display formatting for clock, money and altitude values."""

from __future__ import annotations

import math

from everest_meter.defaults import FALLBACK_CURRENCY


def fmt_time(seconds: float) -> str:
    s = max(0.0, float(seconds))
    h = int(s // 3600)
    m = int((s % 3600) // 60)
    sec = int(math.floor(s % 60))
    return f"{h:02d}:{m:02d}:{sec:02d}"


def fmt_money(amount: float, currency: str = FALLBACK_CURRENCY) -> str:
    code = str(currency or "").strip() or FALLBACK_CURRENCY
    value = float(amount)
    if value < 0:
        return f"-{code} {abs(value):,.2f}"
    return f"{code} {value:,.2f}"


def fmt_altitude(altitude_m: float) -> str:
    return f"≈ {int(round(float(altitude_m))):,} m"


def fmt_percent(percent: float, decimals: int = 2) -> str:
    return f"{float(percent):.{int(decimals)}f}%"
