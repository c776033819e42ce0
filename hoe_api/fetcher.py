"""
Завантаження сторінок hoe.com.ua

Парсерам потрібен лише текст відповіді та HTTP статус; все інше (сесія, заголовки,
таймаути) живе тут.
"""

import logging
from typing import Dict, NamedTuple, Optional, Protocol

import requests

from hoe_api.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class FetchResponse(NamedTuple):
    status_code: int
    text: str


class Fetcher(Protocol):
    def fetch_text(
        self,
        url: str,
        method: str = "GET",
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> FetchResponse:
        ...


class RequestsFetcher:
    """
    Fetcher на основі requests.Session

    GET передає params у query string, POST - як form data.
    Не кидає виняток на статус не 2xx: статус повертається разом з текстом.

    Raises:
        requests.RequestException: якщо сайт недоступний (таймаут, з'єднання)
    """

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.USER_AGENT,
            'Accept-Language': 'uk-UA,uk;q=0.9,en;q=0.8',
        })

    def fetch_text(
        self,
        url: str,
        method: str = "GET",
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> FetchResponse:
        method = method.upper()
        logger.debug(f"📤 {method} {url} {params or ''}")

        if method == "POST":
            response = self.session.post(url, data=params, headers=headers, timeout=self.config.SCRAPER_TIMEOUT)
        else:
            response = self.session.request(
                method, url, params=params, headers=headers, timeout=self.config.SCRAPER_TIMEOUT
            )
        response.encoding = 'utf-8'

        logger.debug(f"📥 {method} {url} -> {response.status_code}")
        return FetchResponse(response.status_code, response.text)

    def close(self):
        self.session.close()
