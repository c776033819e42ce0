"""
Асинхронний клієнт hoe.com.ua

Кожен метод повертає Result: Ok зі значенням або Error з описом і контекстом.
Завантаження сторінок (requests) виконується в окремому потоці через asyncio.to_thread,
незалежні запити йдуть паралельно.
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Awaitable, Callable, Dict, List, Optional

import requests
from pydantic import TypeAdapter

from hoe_api.concurrency import gather_fail_fast
from hoe_api.config import Settings, settings as default_settings
from hoe_api.exceptions import ErrorKind, HoeApiError, TransportError
from hoe_api.fetcher import FetchResponse, Fetcher, RequestsFetcher
from hoe_api.models import OutageType, Pem, PowerCutEvent, PowerOutageEvent, ScheduleImage, Settlement, Street
from hoe_api.result import Error, Ok, Result
from hoe_api.scraper.lookup_parser import is_success, parse_power_outage, parse_queues
from hoe_api.scraper.outage_parser import parse_power_cut_events
from hoe_api.scraper.pem_parser import parse_pems
from hoe_api.scraper.schedule_parser import parse_schedule_image
from hoe_api.scraper.temporal import format_date_range

logger = logging.getLogger(__name__)

AJAX_HEADERS = {
    'Accept': 'application/json',
    'X-Requested-With': 'XMLHttpRequest',
}

_settlements_adapter = TypeAdapter(List[Settlement])
_streets_adapter = TypeAdapter(List[Street])
_house_numbers_adapter = TypeAdapter(List[str])


class HoeApiClient:
    """
    Клієнт сайту hoe.com.ua

    Args:
        fetcher: Завантажувач сторінок (за замовчуванням RequestsFetcher)
        config: Налаштування; передаються парсерам явно
    """

    def __init__(self, fetcher: Fetcher, config: Optional[Settings] = None):
        self.fetcher = fetcher
        self.config = config or default_settings

    async def __aenter__(self) -> "HoeApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        close = getattr(self.fetcher, "close", None)
        if close is not None:
            close()

    # === Службові ===

    async def _fetch(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> FetchResponse:
        return await asyncio.to_thread(self.fetcher.fetch_text, self.config.url(path), method, params, headers)

    async def _run_catching(self, operation: str, block: Callable[[], Awaitable[Result]]) -> Result:
        try:
            return await block()
        except HoeApiError as e:
            logger.error(f"❌ {operation}: {e}")
            return Error.from_exception(e)
        except requests.RequestException as e:
            logger.error(f"❌ Помилка завантаження ({operation}): {e}")
            return Error(
                message="Request failed",
                context=(("operation", operation), ("error", str(e))),
                kind=ErrorKind.TRANSPORT,
                exception=e,
            )
        except Exception as e:
            logger.exception(f"❌ Неочікувана помилка ({operation}): {e}")
            return Error(
                message="Exception has been thrown",
                context=(("operation", operation),),
                kind=ErrorKind.UNEXPECTED,
                exception=e,
            )

    def _date_range(self) -> str:
        today = date.today()
        end_date = today + timedelta(days=self.config.PLANNED_DAYS_AHEAD)
        return format_date_range(today, end_date, self.config.temporal_formats())

    # === Автодоповнення адреси ===

    async def search_settlements(self, query: str) -> Result[List[Settlement]]:
        """Пошук населених пунктів за частиною назви"""
        async def block():
            response = await self._fetch(
                self.config.SETTLEMENTS_PATH,
                params={"term": query, "_type": "query", "q": query},
                headers=AJAX_HEADERS,
            )
            if not is_success(response.status_code):
                return Error.with_context(
                    "Failed to search settlements", ErrorKind.TRANSPORT,
                    http_status=response.status_code, query=query,
                )
            return Ok(_settlements_adapter.validate_json(response.text))

        return await self._run_catching("search settlements", block)

    async def search_streets(self, query: str, settlement_id: int) -> Result[List[Street]]:
        """Пошук вулиць населеного пункту за частиною назви"""
        async def block():
            response = await self._fetch(
                f"{self.config.STREETS_PATH}/{settlement_id}",
                params={"term": query, "_type": "query", "q": query},
                headers=AJAX_HEADERS,
            )
            if not is_success(response.status_code):
                return Error.with_context(
                    "Failed to search streets", ErrorKind.TRANSPORT,
                    http_status=response.status_code, query=query, settlement_id=settlement_id,
                )
            return Ok(_streets_adapter.validate_json(response.text))

        return await self._run_catching("search streets", block)

    async def fetch_house_numbers(self, street_id: int) -> Result[List[str]]:
        """Номери будинків вулиці"""
        async def block():
            response = await self._fetch(f"{self.config.HOUSES_PATH}/{street_id}", headers=AJAX_HEADERS)
            if not is_success(response.status_code):
                return Error.with_context(
                    "Failed to fetch house numbers", ErrorKind.TRANSPORT,
                    http_status=response.status_code, street_id=street_id,
                )
            return Ok(_house_numbers_adapter.validate_json(response.text))

        return await self._run_catching("fetch house numbers", block)

    # === Пошук за адресою ===

    async def fetch_power_outage(self, settlement_id: int, street_id: int, house_number: str) -> Result[PowerOutageEvent]:
        """Чи є зараз відключення за адресою"""
        async def block():
            response = await self._fetch(
                self.config.OUTAGE_LOOKUP_PATH,
                method="POST",
                params={"streetId": str(street_id), "house": house_number},
                headers={'X-Requested-With': 'XMLHttpRequest'},
            )
            return parse_power_outage(
                response.status_code, response.text, settlement_id, street_id, house_number, self.config
            )

        return await self._run_catching("fetch power outage", block)

    async def fetch_queues(self, street_id: int, house_number: str) -> Result[List[int]]:
        """Черги графіка, до яких належить адреса"""
        async def block():
            response = await self._fetch(
                self.config.QUEUE_LOOKUP_PATH,
                method="POST",
                params={"streetId": str(street_id), "house": house_number},
                headers={'X-Requested-With': 'XMLHttpRequest'},
            )
            return parse_queues(response.status_code, response.text, street_id, house_number)

        return await self._run_catching("fetch queues", block)

    # === Графік ===

    async def fetch_current_schedule_image(self) -> Result[ScheduleImage]:
        """Поточне зображення графіка погодинних відключень"""
        async def block():
            response = await self._fetch(self.config.SCHEDULE_PAGE_PATH)
            self._raise_for_status(response, "schedule page")
            return parse_schedule_image(response.text, self.config)

        return await self._run_catching("fetch current schedule image", block)

    # === Відключення по РЕМах ===

    @staticmethod
    def _raise_for_status(response: FetchResponse, what: str):
        if not is_success(response.status_code):
            raise TransportError(
                f"Failed to fetch {what}",
                context={"http_status": response.status_code},
            )

    async def fetch_all_pems(self) -> Result[List[Pem]]:
        """Усі РЕМи, перелічені на сайті"""
        async def block():
            response = await self._fetch(self.config.PEM_LIST_PATH)
            self._raise_for_status(response, "PEM list")
            return Ok(parse_pems(response.text))

        return await self._run_catching("fetch all PEMs", block)

    async def _power_cuts(self, pem_id: str, outage_type: OutageType, date_range: Optional[str] = None) -> List[PowerCutEvent]:
        data = {
            "TypeId": outage_type.type_id,
            "RemId": pem_id,
            "DateRange": date_range or self._date_range(),
            "PageNumber": "1",
        }
        response = await self._fetch(self.config.EVENT_LIST_PATH, method="POST", params=data)
        if not is_success(response.status_code):
            raise TransportError(
                "Failed to fetch power cut events",
                context={"http_status": response.status_code, "pem_id": pem_id, "type": outage_type.name},
            )
        return await parse_power_cut_events(response.text, pem_id, outage_type, self.config)

    async def fetch_power_cuts(
        self,
        pem_id: str,
        outage_type: OutageType,
        date_range: Optional[str] = None,
    ) -> Result[List[PowerCutEvent]]:
        """
        Відключення одного типу для РЕМу

        Args:
            pem_id: ID РЕМу (див. fetch_all_pems)
            outage_type: Аварійні або планові
            date_range: Період у форматі "06.12.2025 - 11.12.2025";
                        якщо None, від сьогодні на PLANNED_DAYS_AHEAD днів вперед
        """
        return await self._run_catching(
            f"fetch {outage_type.name.lower()} power cuts",
            lambda: self._wrap(self._power_cuts(pem_id, outage_type, date_range)),
        )

    async def fetch_all_actual_power_cuts(self, pem_id: str) -> Result[List[PowerCutEvent]]:
        """
        Усі актуальні відключення РЕМу: спочатку аварійні, потім планові

        Обидва списки завантажуються паралельно; помилка в одному скасовує інший
        і повертається як Error для всього результату.
        """
        async def block():
            unplanned, planned = await gather_fail_fast(
                self._power_cuts(pem_id, OutageType.UNPLANNED),
                self._power_cuts(pem_id, OutageType.PLANNED),
            )
            logger.info(f"Загалом для РЕМ {pem_id}: {len(unplanned)} аварійних, {len(planned)} планових відключень")
            return Ok(unplanned + planned)

        return await self._run_catching("fetch all actual power cuts", block)

    @staticmethod
    async def _wrap(awaitable: Awaitable) -> Ok:
        return Ok(await awaitable)


def create_client(config: Optional[Settings] = None, fetcher: Optional[Fetcher] = None) -> HoeApiClient:
    """
    Створює клієнт з налаштуваннями за замовчуванням

    Args:
        config: Налаштування (таймаути, адреса сайту, селектори)
        fetcher: Власний завантажувач замість RequestsFetcher
    """
    config = config or default_settings
    return HoeApiClient(fetcher or RequestsFetcher(config), config)
