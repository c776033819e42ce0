"""
Перелік РЕМів з форми пошуку відключень (<select name="RemId">)
"""

import logging
from typing import List

from hoe_api.exceptions import ErrorKind, StructureError
from hoe_api.models import Pem
from hoe_api.scraper.soup_utils import element_text, make_soup

logger = logging.getLogger(__name__)

PEM_SELECT = 'select[name="RemId"]'


def parse_pems(html: str) -> List[Pem]:
    """
    Витягує РЕМи з опцій селекту в порядку документа

    Опції без значення ("Оберіть РЕМ") пропускаються.

    Raises:
        StructureError: якщо селекту РЕМів немає на сторінці
    """
    select = make_soup(html).select_one(PEM_SELECT)
    if select is None:
        raise StructureError(
            "PEM list not found",
            kind=ErrorKind.ELEMENT_NOT_FOUND,
            context={"selector": PEM_SELECT},
        )

    pems = []
    for option in select.find_all("option"):
        pem_id = (option.get("value") or "").strip()
        name = element_text(option)
        if not pem_id or pem_id == "0" or not name:
            continue
        pems.append(Pem(id=pem_id, name=name))

    logger.info(f"Знайдено {len(pems)} РЕМів")
    return pems
