from datetime import date, datetime, timezone
from typing import Optional

from pydantic import TypeAdapter

# PostgREST 타임스탬프는 소수점 자릿수가 가변적이라 pydantic 으로 파싱
_date_adapter = TypeAdapter(date)
_datetime_adapter = TypeAdapter(datetime)

# 관계별 기대 수명 (년)
LIFE_EXPECTANCY = {
    "mom": 81,
    "dad": 76,
    "guardian": 79,
}
DEFAULT_LIFE_EXPECTANCY = 79

# 연락 방식별 연간 연락 횟수
CONTACTS_PER_YEAR = {
    "calls": 52,
    "texts": 156,
    "visits": 12,
    "emails": 26,
}
DEFAULT_CONTACTS_PER_YEAR = 12


def _to_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if len(text) == 10:
        return _date_adapter.validate_python(text)
    return _datetime_adapter.validate_python(text).date()


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 2월 29일생
        return day.replace(year=day.year + years, day=28)


def age_on(birth_date: date, today: date) -> int:
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def calculate_insights(parent: dict, today: Optional[date] = None) -> dict:
    """
    부모님과 함께할 수 있는 남은 시간 계산

    생년월일이 있으면 생년월일 기준, 없으면 저장된 나이 기준으로 계산합니다.
    나이를 알 수 없으면 남은 시간 항목은 None 입니다.
    """
    if today is None:
        today = datetime.now(timezone.utc).date()

    expectancy = LIFE_EXPECTANCY.get(parent.get("relationship"), DEFAULT_LIFE_EXPECTANCY)
    contacts_per_year = CONTACTS_PER_YEAR.get(parent.get("communication_style"), DEFAULT_CONTACTS_PER_YEAR)

    birth_date = _to_date(parent.get("birth_date"))
    age = age_on(birth_date, today) if birth_date else parent.get("age")

    years_remaining = days_remaining = weeks_remaining = contacts_remaining = None
    if age is not None:
        years_remaining = max(0, expectancy - age)
        if birth_date:
            expected = _add_years(birth_date, expectancy)
            days_remaining = max(0, (expected - today).days)
        else:
            days_remaining = years_remaining * 365
        weeks_remaining = days_remaining // 7
        contacts_remaining = years_remaining * contacts_per_year

    last_contact = _to_date(parent.get("last_contact"))
    days_since_last_contact = max(0, (today - last_contact).days) if last_contact else None

    return {
        "parent_id": parent["id"],
        "age": age,
        "life_expectancy": expectancy,
        "years_remaining": years_remaining,
        "days_remaining": days_remaining,
        "weeks_remaining": weeks_remaining,
        "contacts_per_year": contacts_per_year,
        "contacts_remaining": contacts_remaining,
        "days_since_last_contact": days_since_last_contact,
    }
