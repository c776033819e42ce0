"""
Поточне зображення графіка погодинних відключень (hoe.com.ua/page/pogodinni-vidkljuchennja)
"""

import logging
from typing import Optional

from hoe_api.config import Settings, settings as default_settings
from hoe_api.exceptions import ErrorKind
from hoe_api.models import Image, NoImage, ScheduleImage
from hoe_api.result import Error, Ok, Result
from hoe_api.scraper.soup_utils import make_soup

logger = logging.getLogger(__name__)


def parse_schedule_image(html: str, config: Optional[Settings] = None) -> Result[ScheduleImage]:
    """
    Шукає перше зображення графіка в пості

    Returns:
        Ok(NoImage): зображення на сторінці немає
        Ok(Image): URL зображення (відносний src доповнюється адресою сайту)
        Error: зображення є, але без src
    """
    config = config or default_settings
    img = make_soup(html).select_one(config.SCHEDULE_IMAGE_SELECTOR)
    if img is None:
        logger.info("На сторінці немає зображення графіка")
        return Ok(NoImage())

    src = (img.get("src") or "").strip()
    if not src:
        return Error.with_context(
            "Unable to find current schedule image: no src attr",
            ErrorKind.ELEMENT_NOT_FOUND,
            selector=config.SCHEDULE_IMAGE_SELECTOR,
        )

    # Формуємо повний URL якщо потрібно
    if not src.startswith("http"):
        src = f"{config.HOE_HOST}{src}"

    alt = img.get("alt")
    logger.info(f"Знайдено графік: {alt} - {src}")
    return Ok(Image(url=src, alt=alt))
