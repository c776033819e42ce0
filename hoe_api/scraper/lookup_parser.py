"""
Парсер відповідей пошуку за конкретною адресою

- /shutdown-events: чи є відключення за адресою (HTML фрагмент з 5 комірками)
- /shutdown-queues: черги адреси ("<strong>3, 5</strong>")
"""

import logging
from typing import List, Optional

from hoe_api.config import Settings, settings as default_settings
from hoe_api.exceptions import ErrorKind, ParseError
from hoe_api.models import ActiveOutage, NoOutage, PowerOutageEvent, PowerOutageKind
from hoe_api.result import Error, Ok, Result
from hoe_api.scraper.soup_utils import element_text, make_soup
from hoe_api.scraper.temporal import parse_datetime

logger = logging.getLogger(__name__)

LOOKUP_CELLS = 5


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_schedule_slot(text: str) -> int:
    """Номер черги з комірки; 0 якщо там не число"""
    try:
        return int(text.strip())
    except ValueError:
        return 0


def parse_power_outage(
    status_code: int,
    body: str,
    settlement_id: int,
    street_id: int,
    house_number: str,
    config: Optional[Settings] = None,
) -> Result[PowerOutageEvent]:
    """
    Класифікує відповідь пошуку відключення за адресою

    Returns:
        Ok(NoOutage): відключення за адресою немає
        Ok(ActiveOutage): є відключення
        Error: помилка сайту або несподівана структура відповіді
    """
    config = config or default_settings
    body = body or ""
    common_context = {
        "http_status": status_code,
        "settlement_id": settlement_id,
        "street_id": street_id,
        "house_number": house_number,
        "body_blank": not body.strip(),
    }

    if not is_success(status_code) or not body.strip() or config.ERROR_MARKER in body:
        logger.warning(f"⚠️ Пошук відключення не вдався: {street_id}, {house_number} (HTTP {status_code})")
        return Error.with_context("Failed to fetch power outage event", ErrorKind.LOOKUP_FAILED, **common_context)

    if config.NO_OUTAGE_MARKER in body:
        return Ok(NoOutage(settlement_id=settlement_id, street_id=street_id, house_number=house_number))

    cells = [element_text(td) for td in make_soup(body).find_all("td")]

    if len(cells) != LOOKUP_CELLS:
        logger.warning(f"⚠️ Очікувалось {LOOKUP_CELLS} комірок, отримано {len(cells)}")
        return Error.with_context(
            "Failed to parse power outage event",
            ErrorKind.UNEXPECTED_SHAPE,
            cell_count=len(cells),
            cells=cells,
        ).add_context(common_context)

    formats = config.temporal_formats()
    try:
        start_time = parse_datetime(cells[3], formats)
        end_time = parse_datetime(cells[4], formats)
    except ParseError as e:
        return Error.from_exception(e).add_context(common_context)

    return Ok(ActiveOutage(
        settlement_id=settlement_id,
        street_id=street_id,
        house_number=house_number,
        type_of_work=cells[0],
        type=PowerOutageKind.parse(cells[1]),
        schedule=parse_schedule_slot(cells[2]),
        estimated_start_time=start_time,
        estimated_end_time=end_time,
    ))


def parse_queues(
    status_code: int,
    body: str,
    street_id: int,
    house_number: str,
) -> Result[List[int]]:
    """
    Парсить список черг адреси з відповіді "<strong>3, 5</strong>"

    Будь-яке не-число в списку - помилка для всього списку.
    """
    body = body or ""
    common_context = {
        "http_status": status_code,
        "street_id": street_id,
        "house_number": house_number,
        "body_blank": not body.strip(),
    }

    if not is_success(status_code) or not body.strip():
        return Error.with_context("Failed to fetch queues", ErrorKind.LOOKUP_FAILED, **common_context)

    strong = make_soup(body).find("strong")
    if strong is None:
        return Error.with_context(
            "Queue list not found", ErrorKind.MALFORMED_LIST, **common_context
        )

    text = element_text(strong)
    queues = []
    for token in text.split(","):
        try:
            queues.append(int(token.strip()))
        except ValueError:
            return Error.with_context(
                "Malformed queue list", ErrorKind.MALFORMED_LIST, text=text, token=token.strip()
            ).add_context(common_context)

    return Ok(queues)
