"""
Парсер рядка "вулиця + номери будинків" зі списку відключень

Приклади:
    "пров. Мирний 3/4"                     -> "пров. Мирний", {"3/4"}
    "пров. Мирний 3/4,  13,   5,2"          -> "пров. Мирний", {"3/4", "13", "5", "2"}
    "вул. 70-річчя Жовтня 1A, 7, 19-F"     -> "вул. 70-річчя Жовтня", {"1A", "7", "19-F"}

Назва вулиці може містити цифри та дефіси ("вул. 269км+710м Стрий-Тернопіль"),
тому межа між вулицею і номерами - це останній пробіл перед першою комою,
а не перша цифра.
"""

import re

from hoe_api.exceptions import ErrorKind, ParseError
from hoe_api.models import StreetGroup

HOUSE_NUMBERS_SPLIT = re.compile(r"\s*,\s*")

# "25", "29/4", "60А", "13C" - але не "7-й", "131-й", "269км+710м"
PLAIN_HOUSE_NUMBER = re.compile(r"\d+(?:/\d+)?[^\W\d_]?")


def _malformed(message: str, text: str) -> ParseError:
    return ParseError(message, kind=ErrorKind.MALFORMED_ADDRESS, context={"text": text})


def parse_street_group(text: str) -> StreetGroup:
    """
    Розбиває рядок на назву вулиці та номери будинків

    Raises:
        ParseError: якщо в рядку не вдається відокремити номери будинків
    """
    raw = text
    text = text.strip() if text else ""
    if not text:
        raise _malformed("Empty street group", raw)

    if "," in text:
        first_comma = text.index(",")
        split_index = text.rfind(" ", 0, first_comma)
        if split_index == -1:
            raise _malformed("No street name before house numbers", raw)

        street = text[:split_index].strip()
        house_numbers = {
            number.strip()
            for number in HOUSE_NUMBERS_SPLIT.split(text[split_index + 1:])
            if number.strip()
        }
    else:
        tokens = text.split()
        if len(tokens) < 2:
            raise _malformed("No house number after street name", raw)

        house_number = tokens[-1]
        street = text[:text.rfind(house_number)].strip()
        # "вул. Тиха 25 27" без коми - невідомо, де закінчується вулиця
        if PLAIN_HOUSE_NUMBER.fullmatch(tokens[-2]):
            raise _malformed("Several house numbers without comma", raw)
        house_numbers = {house_number}

    if not street or not house_numbers:
        raise _malformed("Street group without street or house numbers", raw)

    return StreetGroup(street=street, house_numbers=frozenset(house_numbers))
