"""
Парсинг дат і часу у форматах сайту hoe.com.ua

    "06.12.2025"        -> date(2025, 12, 6)
    "06.12.2025 18:00"  -> datetime(2025, 12, 6, 18, 0)

Формат суворий: datetime.strptime сам по собі пропускає "6.12.2025" і "6.12.2025 8:00",
тому текст спочатку перевіряється регулярним виразом, побудованим з формату.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Pattern

from hoe_api.exceptions import ErrorKind, ParseError

# Кількість цифр для кожної директиви strptime
_DIRECTIVE_PATTERNS: Dict[str, str] = {
    "%d": r"\d{2}",
    "%m": r"\d{2}",
    "%Y": r"\d{4}",
    "%H": r"\d{2}",
    "%M": r"\d{2}",
    "%S": r"\d{2}",
}


def _format_to_pattern(fmt: str) -> Pattern[str]:
    parts = re.split(r"(%[a-zA-Z])", fmt)
    regex = ""
    for part in parts:
        if part in _DIRECTIVE_PATTERNS:
            regex += _DIRECTIVE_PATTERNS[part]
        elif part.startswith("%"):
            raise ValueError(f"Unsupported format directive: {part}")
        else:
            regex += re.escape(part)
    return re.compile(regex)


@dataclass(frozen=True)
class TemporalFormats:
    """Формати дати та дати з часом"""
    date_format: str = "%d.%m.%Y"
    datetime_format: str = "%d.%m.%Y %H:%M"
    date_pattern: Pattern[str] = field(init=False, repr=False, compare=False)
    datetime_pattern: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "date_pattern", _format_to_pattern(self.date_format))
        object.__setattr__(self, "datetime_pattern", _format_to_pattern(self.datetime_format))


DEFAULT_FORMATS = TemporalFormats()


def _parse(text: str, fmt: str, pattern: Pattern[str], what: str) -> datetime:
    raw = text
    text = text.strip() if text else ""
    if not pattern.fullmatch(text):
        raise ParseError(
            f"Malformed {what}",
            kind=ErrorKind.MALFORMED_TEMPORAL,
            context={"text": raw, "format": fmt},
        )
    try:
        return datetime.strptime(text, fmt)
    except ValueError as e:
        # правильна форма, але неіснуюча дата: 31.02.2025, 25:00
        raise ParseError(
            f"Malformed {what}",
            kind=ErrorKind.MALFORMED_TEMPORAL,
            context={"text": raw, "format": fmt, "reason": str(e)},
        ) from e


def parse_date(text: str, formats: TemporalFormats = DEFAULT_FORMATS) -> date:
    """
    Парсить дату у форматі DD.MM.YYYY

    Raises:
        ParseError: якщо текст не відповідає формату
    """
    return _parse(text, formats.date_format, formats.date_pattern, "date").date()


def parse_datetime(text: str, formats: TemporalFormats = DEFAULT_FORMATS) -> datetime:
    """
    Парсить дату з часом у форматі DD.MM.YYYY HH:MM (без часового поясу)

    Raises:
        ParseError: якщо текст не відповідає формату
    """
    return _parse(text, formats.datetime_format, formats.datetime_pattern, "date-time")


def format_date_range(start: date, end: date, formats: TemporalFormats = DEFAULT_FORMATS) -> str:
    """Період для параметра DateRange: "06.12.2025 - 11.12.2025" """
    return f"{start.strftime(formats.date_format)} - {end.strftime(formats.date_format)}"
