"""
Парсер для аварійних та планових відключень зі списку РЕМу (hoe.com.ua/shutdown/eventlist)

Структура таблиці:
- рядки йдуть парами: рядок з даними і рядок з вулицями
- рядок з даними: місто (p.city), вид робіт, дата створення, початок, відновлення (div.stime)
- рядок з вулицями: одна комірка, кожен дочірній елемент - "вулиця номери"

Заголовок сторінки має вигляд "Аварійні відключення - Хмельницький РЕМ".
"""

import logging
from typing import List, NamedTuple, Optional

from bs4 import BeautifulSoup, Tag

from hoe_api.concurrency import gather_fail_fast
from hoe_api.config import Settings, settings as default_settings
from hoe_api.exceptions import ErrorKind, HoeApiError, ParseError, StructureError
from hoe_api.models import OutageType, Pem, PowerCutEvent, StreetGroup
from hoe_api.result import Error, Ok, Result
from hoe_api.scraper.soup_utils import child_elements, element_text, make_soup
from hoe_api.scraper.street_parser import parse_street_group
from hoe_api.scraper.temporal import DEFAULT_FORMATS, TemporalFormats, parse_date, parse_datetime

logger = logging.getLogger(__name__)

PEM_NAME_SEPARATOR = " - "
DATA_ROW_CELLS = 5


class RowPair(NamedTuple):
    """Рядок з даними відключення та рядок з його вулицями"""
    index: int
    data_row: Tag
    streets_row: Tag


# === Таблиця та заголовок ===

def find_event_table(soup: BeautifulSoup, selector: str) -> Tag:
    """
    Знаходить таблицю відключень

    Raises:
        StructureError: якщо таблиці немає на сторінці
    """
    table = soup.select_one(selector)
    if table is None:
        raise StructureError(
            "Outage table not found",
            kind=ErrorKind.TABLE_NOT_FOUND,
            context={"selector": selector},
        )
    return table


def extract_body_rows(table: Tag) -> List[Tag]:
    """Рядки тіла таблиці в порядку документа (без заголовка)"""
    body = table.find("tbody")
    if body is not None:
        return body.find_all("tr", recursive=False)
    return [row for row in table.find_all("tr") if row.find("th") is None]


def extract_row_pairs(table: Tag) -> List[RowPair]:
    """
    Об'єднує рядки в пари (2k, 2k+1)

    Останній рядок без пари (непарна кількість рядків) відкидається.
    """
    rows = extract_body_rows(table)
    if len(rows) % 2:
        logger.debug(f"Непарна кількість рядків ({len(rows)}), останній рядок пропущено")
    return [RowPair(k, rows[2 * k], rows[2 * k + 1]) for k in range(len(rows) // 2)]


def extract_pem_name(soup: BeautifulSoup, selector: str) -> str:
    """
    Витягує назву РЕМу із заголовка "<префікс> - <назва РЕМу>"

    Raises:
        StructureError: якщо заголовка з роздільником немає
    """
    for heading in soup.select(selector):
        text = element_text(heading)
        if PEM_NAME_SEPARATOR in text:
            name = text.split(PEM_NAME_SEPARATOR, 1)[1].strip()
            if name:
                return name
    raise StructureError(
        "PEM heading not found",
        kind=ErrorKind.HEADING_NOT_FOUND,
        context={"selector": selector},
    )


# === Поля рядка з даними ===

def _data_cells(row: Tag) -> List[Tag]:
    cells = row.find_all("td", recursive=False)
    if len(cells) < DATA_ROW_CELLS:
        raise StructureError(
            "Unexpected data row shape",
            kind=ErrorKind.UNEXPECTED_SHAPE,
            context={"cell_count": len(cells), "expected": DATA_ROW_CELLS},
        )
    return cells


def _marked_text(cell: Tag, name: str, css_class: str) -> str:
    marked = cell.find(name, class_=css_class)
    if marked is None:
        raise StructureError(
            f"Element {name}.{css_class} not found",
            kind=ErrorKind.ELEMENT_NOT_FOUND,
            context={"cell": element_text(cell)},
        )
    return element_text(marked)


def extract_settlement(cell: Tag) -> str:
    return _marked_text(cell, "p", "city")


def extract_type_of_work(cell: Tag) -> str:
    return element_text(cell)


def extract_created_at(cell: Tag, formats: TemporalFormats = DEFAULT_FORMATS):
    return parse_date(_marked_text(cell, "div", "stime"), formats)


def extract_time(cell: Tag, formats: TemporalFormats = DEFAULT_FORMATS):
    # дата текстом, час у <strong>: "06.12.2025 <strong>18:00</strong>"
    return parse_datetime(_marked_text(cell, "div", "stime"), formats)


def extract_street_groups(row: Tag) -> List[StreetGroup]:
    """Групи вулиць з рядка з вулицями, у порядку документа"""
    cells = row.find_all("td", recursive=False)
    if len(cells) != 1:
        raise StructureError(
            "Unexpected streets row shape",
            kind=ErrorKind.UNEXPECTED_SHAPE,
            context={"cell_count": len(cells), "expected": 1},
        )
    return [parse_street_group(element_text(child)) for child in child_elements(cells[0])]


# === Збирання відключення ===

async def _field(extract, *args):
    return extract(*args)


async def assemble_event(
    pair: RowPair,
    pem: Pem,
    outage_type: OutageType,
    formats: TemporalFormats = DEFAULT_FORMATS,
) -> PowerCutEvent:
    """
    Створює PowerCutEvent з пари рядків

    Поля витягуються незалежно одне від одного; якщо хоча б одне не вдалося,
    відключення не створюється зовсім.

    Raises:
        HoeApiError: StructureError або ParseError з номером пари в контексті
    """
    try:
        cells = _data_cells(pair.data_row)
        settlement, type_of_work, created_at, start_time, end_time, street_groups = await gather_fail_fast(
            _field(extract_settlement, cells[0]),
            _field(extract_type_of_work, cells[1]),
            _field(extract_created_at, cells[2], formats),
            _field(extract_time, cells[3], formats),
            _field(extract_time, cells[4], formats),
            _field(extract_street_groups, pair.streets_row),
        )
        if start_time > end_time:
            raise ParseError(
                "Outage starts after it ends",
                kind=ErrorKind.INCONSISTENT_SCHEDULE,
                context={"estimated_start_time": start_time, "estimated_end_time": end_time},
            )
    except HoeApiError as e:
        e.context += (("row_pair", pair.index),)
        raise

    return PowerCutEvent(
        settlement=settlement,
        pem=pem,
        street_groups=tuple(street_groups),
        type=outage_type,
        type_of_work=type_of_work,
        created_at=created_at,
        estimated_start_time=start_time,
        estimated_end_time=end_time,
    )


async def parse_power_cut_events(
    html: str,
    pem_id: str,
    outage_type: OutageType,
    config: Optional[Settings] = None,
) -> List[PowerCutEvent]:
    """
    Парсить сторінку списку відключень одного РЕМу та одного типу

    Args:
        html: HTML сторінки
        pem_id: ID РЕМу, для якого завантажено сторінку
        outage_type: Тип відключень на сторінці
        config: Налаштування (селектори, формати дат)

    Returns:
        List[PowerCutEvent]: Відключення в порядку документа

    Raises:
        HoeApiError: якщо хоча б одна пара рядків не розпарсилась - весь список вважається невдалим
    """
    config = config or default_settings
    soup = make_soup(html)

    table = find_event_table(soup, config.EVENT_TABLE_SELECTOR)
    pem = Pem(id=pem_id, name=extract_pem_name(soup, config.EVENT_HEADING_SELECTOR))
    pairs = extract_row_pairs(table)
    formats = config.temporal_formats()

    events = await gather_fail_fast(
        *(assemble_event(pair, pem, outage_type, formats) for pair in pairs)
    )

    logger.info(f"Успішно спарсено {len(events)} відключень для РЕМ {pem_id}, тип {outage_type.type_name}")
    return events


def check_created_before_start(event: PowerCutEvent) -> Result[PowerCutEvent]:
    """
    Додаткова перевірка: запис створено не пізніше дня початку відключення

    Сайт цього не гарантує, тому парсер її не виконує.
    """
    if event.is_created_before_start():
        return Ok(event)
    return Error.with_context(
        "Outage record created after its start",
        ErrorKind.INCONSISTENT_SCHEDULE,
        settlement=event.settlement,
        created_at=event.created_at,
        estimated_start_time=event.estimated_start_time,
    )
