"""월/계절 관련 공통 유틸."""

from __future__ import annotations

from datetime import date

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MONTH_KEYS: tuple[str, ...] = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

_SEASONS: dict[str, tuple[str, ...]] = {
    "Winter": ("December", "January", "February"),
    "Spring": ("March", "April", "May"),
    "Summer": ("June", "July", "August"),
    "Fall": ("September", "October", "November"),
}


def normalize_month(value: str) -> str | None:
    """월 이름(전체 이름 또는 3글자 약어, 대소문자 무관)을 정규 월 이름으로 변환합니다."""
    text = (value or "").strip().lower()
    if not text:
        return None
    for name in MONTH_NAMES:
        if text == name.lower() or text == name[:3].lower():
            return name
    return None


def month_index(month_name: str) -> int:
    """정규 월 이름의 1부터 시작하는 번호를 반환합니다."""
    return MONTH_NAMES.index(month_name) + 1


def month_key(month_name: str) -> str:
    """월별 기온 필드 키(`jan`..`dec`)를 반환합니다."""
    return MONTH_KEYS[MONTH_NAMES.index(month_name)]


def month_of(day: date) -> str:
    return MONTH_NAMES[day.month - 1]


def season_of(month_name: str) -> str:
    """고정된 4계절 구분에 따라 계절 이름을 반환합니다."""
    for season, months in _SEASONS.items():
        if month_name in months:
            return season
    raise ValueError(f"Unknown month: {month_name}")
