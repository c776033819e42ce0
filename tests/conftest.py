"""
Спільні фікстури: HTML сторінок hoe.com.ua та фейковий Fetcher
"""
import pytest

from hoe_api.client import HoeApiClient
from hoe_api.config import Settings
from hoe_api.fetcher import FetchResponse


def event_row(
    settlement="м. Хмельницький (Хмельницька громада)",
    work="Графік погодинних відключень",
    created="05.12.2025",
    start="06.12.2025 08:00",
    end="06.12.2025 18:00",
):
    """Рядок з даними відключення; час початку/кінця - у <strong>, як на сайті"""
    start_date, start_time = start.split(" ", 1) if " " in start else (start, "")
    end_date, end_time = end.split(" ", 1) if " " in end else (end, "")
    return f"""
    <tr>
      <td><p class="city">{settlement}</p></td>
      <td> {work} </td>
      <td><div class="stime">{created}</div></td>
      <td><div class="stime">{start_date} <strong>{start_time}</strong></div></td>
      <td><div class="stime">{end_date} <strong>{end_time}</strong></div></td>
    </tr>"""


def streets_row(*groups):
    """Рядок з вулицями: groups - пари (вулиця, номери)"""
    paragraphs = "".join(
        f'<p><strong>{street}</strong> <span class="house">{houses}</span></p>'
        for street, houses in groups
    )
    return f'<tr class="street"><td colspan="5">{paragraphs}</td></tr>'


def event_page(rows, heading="Аварійні відключення - Хмельницький РЕМ", table_class="table shutdown-table"):
    return f"""
    <html><body>
      <h1>Хмельницькобленерго</h1>
      <h2>{heading}</h2>
      <table class="{table_class}">
        <thead><tr><th>Населений пункт</th><th>Вид робіт</th><th>Створено</th><th>Початок</th><th>Відновлення</th></tr></thead>
        <tbody>{"".join(rows)}</tbody>
      </table>
    </body></html>"""


def lookup_body(*cells):
    tds = "".join(f"<td>{cell}</td>" for cell in cells)
    return f'<table class="table"><tr>{tds}</tr></table>'


PEM_PAGE = """
<form id="shutdown-form">
  <select name="RemId" id="RemId">
    <option value="">Оберіть РЕМ</option>
    <option value="4">Городоцький РЕМ</option>
    <option value="21">Хмельницький РЕМ</option>
    <option value="17"> Шепетівський   РЕМ </option>
  </select>
</form>
"""


class FakeFetcher:
    """
    Fetcher з заготовленими відповідями

    routes: {(method, path): FetchResponse | Exception | callable(params) -> FetchResponse}
    """

    def __init__(self, routes, host="https://hoe.com.ua"):
        self.routes = routes
        self.host = host
        self.calls = []
        self.closed = False

    def fetch_text(self, url, method="GET", params=None, headers=None):
        self.calls.append((method, url, params, headers))
        handler = self.routes[(method, url[len(self.host):])]
        if callable(handler) and not isinstance(handler, FetchResponse):
            handler = handler(params)
        if isinstance(handler, Exception):
            raise handler
        return handler

    def close(self):
        self.closed = True


@pytest.fixture
def test_settings():
    return Settings()


@pytest.fixture
def make_client(test_settings):
    def factory(routes):
        fetcher = FakeFetcher(routes, host=test_settings.HOE_HOST)
        return HoeApiClient(fetcher, test_settings), fetcher
    return factory
