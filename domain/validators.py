import re
from datetime import date
from typing import Annotated, Optional

from pydantic import BeforeValidator

# 24시간 HH:MM (앞자리 0 생략 허용)
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def required_text(value: Optional[str], message: str) -> str:
    """앞뒤 공백 제거 후 비어 있으면 오류"""
    if value is None or not value.strip():
        raise ValueError(message)
    return value.strip()


def valid_time(value: Optional[str]) -> str:
    if value is None or not TIME_PATTERN.match(value):
        raise ValueError("Valid time required (HH:MM)")
    return value


def iso_date(value):
    """YYYY-MM-DD 문자열만 허용 (숫자 타임스탬프는 거부)"""
    if value is None or isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("Valid date required (YYYY-MM-DD)")
    return value


IsoDate = Annotated[date, BeforeValidator(iso_date)]


def not_null(value, message: str):
    if value is None:
        raise ValueError(message)
    return value
