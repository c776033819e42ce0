"""
Tests for hoe_api.client (with a fake Fetcher, no network)
"""
from datetime import date, timedelta

import pytest
import requests

from conftest import PEM_PAGE, event_page, event_row, lookup_body, streets_row
from hoe_api.client import HoeApiClient, create_client
from hoe_api.exceptions import ErrorKind, ParseError, TransportError
from hoe_api.fetcher import FetchResponse, RequestsFetcher
from hoe_api.models import ActiveOutage, Image, NoOutage, OutageType, Pem, Settlement, Street
from hoe_api.result import Error, Ok

EVENT_LIST = ("POST", "/shutdown/eventlist")


def listing(type_pages):
    """Відповідь /shutdown/eventlist залежно від TypeId"""
    def handler(params):
        return type_pages[params["TypeId"]]
    return handler


def unplanned_page():
    return FetchResponse(200, event_page(
        [event_row(work="Аварійні роботи"), streets_row(("вул. Тиха", "1, 3"))],
        heading="Аварійні відключення - Хмельницький РЕМ",
    ))


def planned_page(count=2):
    rows = []
    for k in range(count):
        rows += [event_row(work=f"Планові роботи {k}"), streets_row(("вул. Зарічанська", str(k + 1)))]
    return FetchResponse(200, event_page(rows, heading="Планові відключення - Хмельницький РЕМ"))


@pytest.mark.unit
class TestFetchAllActualPowerCuts:

    @pytest.mark.asyncio
    async def test_unplanned_first_then_planned(self, make_client):
        client, fetcher = make_client({EVENT_LIST: listing({"1": unplanned_page(), "2": planned_page()})})

        result = await client.fetch_all_actual_power_cuts("21")

        events = result.get_or_throw()
        assert [event.type for event in events] == [OutageType.UNPLANNED, OutageType.PLANNED, OutageType.PLANNED]
        assert [event.type_of_work for event in events] == ["Аварійні роботи", "Планові роботи 0", "Планові роботи 1"]
        assert all(event.pem == Pem(id="21", name="Хмельницький РЕМ") for event in events)

    @pytest.mark.asyncio
    async def test_request_parameters(self, make_client):
        client, fetcher = make_client({EVENT_LIST: listing({"1": unplanned_page(), "2": planned_page()})})

        await client.fetch_all_actual_power_cuts("21")

        sent = sorted((params for _, _, params, _ in fetcher.calls), key=lambda params: params["TypeId"])
        today = date.today()
        expected_range = f"{today:%d.%m.%Y} - {today + timedelta(days=5):%d.%m.%Y}"
        assert sent == [
            {"TypeId": "1", "RemId": "21", "DateRange": expected_range, "PageNumber": "1"},
            {"TypeId": "2", "RemId": "21", "DateRange": expected_range, "PageNumber": "1"},
        ]
        assert all(url == "https://hoe.com.ua/shutdown/eventlist" for _, url, _, _ in fetcher.calls)

    @pytest.mark.asyncio
    async def test_failed_type_fails_whole_result(self, make_client):
        client, _ = make_client({EVENT_LIST: listing({"1": unplanned_page(), "2": FetchResponse(503, "")})})

        result = await client.fetch_all_actual_power_cuts("21")

        assert isinstance(result, Error)
        assert result.kind == ErrorKind.TRANSPORT
        assert result.context_values("http_status") == [503]
        assert isinstance(result.exception, TransportError)

    @pytest.mark.asyncio
    async def test_parse_failure_fails_whole_result(self, make_client):
        broken = FetchResponse(200, event_page([event_row(created="5 грудня"), streets_row(("вул. Тиха", "1"))]))
        client, _ = make_client({EVENT_LIST: listing({"1": unplanned_page(), "2": broken})})

        result = await client.fetch_all_actual_power_cuts("21")

        assert isinstance(result, Error)
        assert result.kind == ErrorKind.MALFORMED_TEMPORAL
        assert isinstance(result.exception, ParseError)

    @pytest.mark.asyncio
    async def test_connection_error(self, make_client):
        client, _ = make_client({EVENT_LIST: requests.ConnectionError("Connection refused")})

        result = await client.fetch_all_actual_power_cuts("21")

        assert isinstance(result, Error)
        assert result.kind == ErrorKind.TRANSPORT
        assert result.context_values("operation") == ["fetch all actual power cuts"]

    @pytest.mark.asyncio
    async def test_single_type_with_date_range(self, make_client):
        client, fetcher = make_client({EVENT_LIST: listing({"2": planned_page(count=1)})})

        result = await client.fetch_power_cuts("21", OutageType.PLANNED, date_range="06.12.2025 - 11.12.2025")

        assert len(result.get_or_throw()) == 1
        assert fetcher.calls[0][2]["DateRange"] == "06.12.2025 - 11.12.2025"


@pytest.mark.unit
class TestAddressLookup:

    @pytest.mark.asyncio
    async def test_fetch_power_outage_active(self, make_client):
        body = lookup_body("Планові роботи", "Планове", "3", "01.01.2025 08:00", "01.01.2025 18:00")
        client, fetcher = make_client({("POST", "/shutdown-events"): FetchResponse(200, body)})

        result = await client.fetch_power_outage(26499, 280542, "12")

        assert isinstance(result.get_or_throw(), ActiveOutage)
        method, url, params, headers = fetcher.calls[0]
        assert params == {"streetId": "280542", "house": "12"}
        assert headers["X-Requested-With"] == "XMLHttpRequest"

    @pytest.mark.asyncio
    async def test_fetch_power_outage_absent(self, make_client):
        body = "<p>За вказаною адресою відсутнє зареєстроване відключення</p>"
        client, _ = make_client({("POST", "/shutdown-events"): FetchResponse(200, body)})

        result = await client.fetch_power_outage(26499, 280542, "12")

        match result:
            case Ok(value=NoOutage(house_number=house_number)):
                assert house_number == "12"
            case _:
                pytest.fail(f"Unexpected result: {result}")

    @pytest.mark.asyncio
    async def test_fetch_queues(self, make_client):
        client, _ = make_client({("POST", "/shutdown-queues"): FetchResponse(200, "<strong>3, 5</strong>")})
        assert await client.fetch_queues(280542, "12") == Ok([3, 5])

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, make_client):
        client, _ = make_client({("POST", "/shutdown-queues"): RuntimeError("boom")})

        result = await client.fetch_queues(280542, "12")

        assert isinstance(result, Error)
        assert result.kind == ErrorKind.UNEXPECTED
        assert result.message == "Exception has been thrown"
        assert isinstance(result.exception, RuntimeError)


@pytest.mark.unit
class TestAutocomplete:

    @pytest.mark.asyncio
    async def test_search_settlements(self, make_client):
        body = '[{"id": 26499, "text": "м. Хмельницький (Хмельницька громада)"}]'
        client, fetcher = make_client({("GET", "/settlements"): FetchResponse(200, body)})

        result = await client.search_settlements("Хмель")

        assert result == Ok([Settlement(id=26499, name="м. Хмельницький (Хмельницька громада)")])
        assert fetcher.calls[0][2] == {"term": "Хмель", "_type": "query", "q": "Хмель"}

    @pytest.mark.asyncio
    async def test_search_streets(self, make_client):
        body = '[{"id": 281050, "text": "вул. Січових стрільців"}]'
        client, fetcher = make_client({("GET", "/streets/26499"): FetchResponse(200, body)})

        result = await client.search_streets("січ", 26499)

        assert result == Ok([Street(id=281050, name="вул. Січових стрільців")])

    @pytest.mark.asyncio
    async def test_fetch_house_numbers(self, make_client):
        client, _ = make_client({("GET", "/houses/33831"): FetchResponse(200, '["1", "2", "3/1", "4B", "7"]')})
        assert await client.fetch_house_numbers(33831) == Ok(["1", "2", "3/1", "4B", "7"])

    @pytest.mark.asyncio
    async def test_search_settlements_http_error(self, make_client):
        client, _ = make_client({("GET", "/settlements"): FetchResponse(500, "")})

        result = await client.search_settlements("Хмель")

        assert isinstance(result, Error)
        assert result.message == "Failed to search settlements"
        assert result.context == (("http_status", 500), ("query", "Хмель"))


@pytest.mark.unit
class TestPemsAndSchedule:

    @pytest.mark.asyncio
    async def test_fetch_all_pems(self, make_client):
        client, _ = make_client({("GET", "/shutdown/all"): FetchResponse(200, PEM_PAGE)})
        pems = (await client.fetch_all_pems()).get_or_throw()
        assert [pem.id for pem in pems] == ["4", "21", "17"]

    @pytest.mark.asyncio
    async def test_fetch_all_pems_http_error(self, make_client):
        client, _ = make_client({("GET", "/shutdown/all"): FetchResponse(502, "")})
        result = await client.fetch_all_pems()
        assert isinstance(result, Error)
        assert result.kind == ErrorKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_fetch_current_schedule_image(self, make_client):
        html = '<div class="post"><p><img src="/Content/Uploads/file.png" alt="ГПВ-06.12.25"></p></div>'
        client, _ = make_client({("GET", "/page/pogodinni-vidkljuchennja"): FetchResponse(200, html)})

        result = await client.fetch_current_schedule_image()

        assert result == Ok(Image(url="https://hoe.com.ua/Content/Uploads/file.png", alt="ГПВ-06.12.25"))


@pytest.mark.unit
class TestClientLifecycle:

    @pytest.mark.asyncio
    async def test_context_manager_closes_fetcher(self, make_client):
        client, fetcher = make_client({})
        async with client:
            pass
        assert fetcher.closed

    def test_create_client_defaults(self, test_settings):
        client = create_client(test_settings)
        assert isinstance(client, HoeApiClient)
        assert isinstance(client.fetcher, RequestsFetcher)
        assert client.config is test_settings
        client.close()
