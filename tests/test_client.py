from datetime import date, time
from urllib.parse import parse_qs, quote

import httpx
import pytest

from qrzlog.adif import to_adif
from qrzlog.client import (
    QrzLogbookClient,
    parse_data_params,
    parse_delete_response,
    parse_fetch_response,
    parse_insert_response,
    parse_response_params,
    parse_status_response,
)
from qrzlog.errors import (
    ApiError,
    AuthError,
    HttpError,
    InvalidKeyError,
    InvalidParamsError,
    InvalidUserAgentError,
)
from qrzlog.models import FetchOptions, QsoRecord

API_KEY = "placeholder"
AGENT = "TestApp/1.0.0 (N0CALL)"
ADIF_ONE = (
    "<call:4>W1AW<station_callsign:5>K1ABC<qso_date:8>20240115"
    "<time_on:4>1430<band:3>20m<mode:3>SSB<eor>"
)


def _form(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def _client(handler, requests=None):
    def wrapped(request):
        if requests is not None:
            requests.append(request)
        return handler(request)

    return QrzLogbookClient(API_KEY, AGENT, transport=httpx.MockTransport(wrapped))


def test_client_creation_valid():
    client = QrzLogbookClient(API_KEY, AGENT)
    assert client.api_key == API_KEY
    assert client.user_agent == AGENT


def test_client_creation_invalid_key():
    with pytest.raises(InvalidKeyError):
        QrzLogbookClient("", AGENT)
    with pytest.raises(InvalidKeyError):
        QrzLogbookClient("token", AGENT)


@pytest.mark.parametrize(
    "agent", ["python-requests", "node-fetch", "", "curl", "WGET", "x" * 129]
)
def test_client_creation_invalid_user_agent(agent):
    with pytest.raises(InvalidUserAgentError):
        QrzLogbookClient(API_KEY, agent)


def test_user_agent_at_limit_is_accepted():
    client = QrzLogbookClient(API_KEY, "a" * 128)
    assert len(client.user_agent) == 128


def test_parse_response_params():
    params = parse_response_params("RESULT=OK&LOGID=12345&COUNT=1")
    assert params == {"RESULT": "OK", "LOGID": "12345", "COUNT": "1"}


def test_parse_response_params_keeps_plus_and_skips_bare_words():
    params = parse_response_params("RESULT=FAIL&REASON=a+b%20c&junk")
    assert params == {"RESULT": "FAIL", "REASON": "a+b c"}


def test_parse_response_params_invalid_encoding():
    with pytest.raises(ApiError) as info:
        parse_response_params("RESULT=%ff")
    assert info.value.reason == "Invalid URL encoding in response"


def test_parse_data_params():
    assert parse_data_params("a=1&b=2&c") == {"a": "1", "b": "2"}


def test_response_parsing_insert_success():
    result = parse_insert_response("RESULT=OK&LOGID=130877825&COUNT=1")
    assert result.logid == 130877825
    assert result.count == 1


def test_insert_count_defaults_to_one():
    assert parse_insert_response("RESULT=OK&LOGID=7").count == 1


def test_insert_missing_and_bad_logid():
    with pytest.raises(ApiError) as info:
        parse_insert_response("RESULT=OK")
    assert info.value.reason == "Missing LOGID in response"
    with pytest.raises(ApiError) as info:
        parse_insert_response("RESULT=OK&LOGID=abc")
    assert info.value.reason == "Invalid LOGID format"


def test_response_parsing_insert_failure():
    with pytest.raises(ApiError) as info:
        parse_insert_response("RESULT=FAIL&REASON=Invalid+QSO+data")
    assert "Invalid" in info.value.reason


def test_fail_without_reason():
    with pytest.raises(ApiError) as info:
        parse_status_response("RESULT=FAIL")
    assert info.value.reason == "Unknown error"


def test_unexpected_result():
    with pytest.raises(ApiError) as info:
        parse_fetch_response("RESULT=WHAT")
    assert info.value.reason == "Unexpected response format"


def test_response_parsing_delete_success():
    result = parse_delete_response("RESULT=OK&COUNT=2")
    assert result.deleted_count == 2
    assert result.not_found_logids == []


def test_response_parsing_delete_partial():
    result = parse_delete_response("RESULT=PARTIAL&COUNT=1&LOGIDS=12346")
    assert result.deleted_count == 1
    assert result.not_found_logids == [12346]


def test_delete_invalid_count():
    with pytest.raises(ApiError) as info:
        parse_delete_response("RESULT=OK&COUNT=-1")
    assert info.value.reason == "Invalid COUNT format"


def test_response_parsing_status_success():
    result = parse_status_response(
        "RESULT=OK&DATA=total_qsos%3D1234%26confirmed%3D567%26dxcc_total%3D89"
    )
    assert result.data == {"total_qsos": "1234", "confirmed": "567", "dxcc_total": "89"}


def test_response_parsing_fetch_success():
    response = f"RESULT=OK&COUNT=1&LOGIDS=12345&ADIF={quote(ADIF_ONE, safe='')}"
    result = parse_fetch_response(response)
    assert result.count == 1
    assert result.logids == [12345]
    assert len(result.qsos) == 1
    assert result.qsos[0].call == "W1AW"


def test_fetch_skips_unparseable_logids():
    result = parse_fetch_response("RESULT=OK&LOGIDS=1,%20x,3")
    assert result.logids == [1, 3]
    assert result.qsos == []


def test_response_parsing_auth_error():
    with pytest.raises(AuthError):
        parse_insert_response("RESULT=AUTH")


@pytest.mark.asyncio
async def test_insert_sends_form_and_user_agent():
    requests = []
    client = _client(lambda r: httpx.Response(200, text="RESULT=OK&LOGID=99"), requests)
    qso = QsoRecord(
        call="W1AW",
        station_callsign="K1ABC",
        qso_date=date(2024, 1, 15),
        time_on=time(14, 30),
        band="20m",
        mode="SSB",
    )
    async with client:
        result = await client.insert_qso(qso, replace=True)
    assert result.logid == 99
    form = _form(requests[0])
    assert form["KEY"] == API_KEY
    assert form["ACTION"] == "INSERT"
    assert form["OPTION"] == "REPLACE"
    assert form["ADIF"] == to_adif(qso)
    assert requests[0].headers["user-agent"] == AGENT


@pytest.mark.asyncio
async def test_delete_sends_joined_logids():
    requests = []
    client = _client(lambda r: httpx.Response(200, text="RESULT=OK&COUNT=2"), requests)
    async with client:
        result = await client.delete_qsos([12345, 12346])
    assert result.deleted_count == 2
    assert _form(requests[0])["LOGIDS"] == "12345,12346"


@pytest.mark.asyncio
async def test_delete_requires_logids():
    async with _client(lambda r: httpx.Response(200, text="")) as client:
        with pytest.raises(InvalidParamsError):
            await client.delete_qsos([])


@pytest.mark.asyncio
async def test_fetch_without_options_sends_no_option():
    requests = []
    client = _client(lambda r: httpx.Response(200, text="RESULT=OK&COUNT=0"), requests)
    async with client:
        result = await client.fetch_qsos()
    assert result.count == 0
    assert "OPTION" not in _form(requests[0])


@pytest.mark.asyncio
async def test_http_error_status():
    async with _client(lambda r: httpx.Response(500, text="boom")) as client:
        with pytest.raises(HttpError):
            await client.get_status()


@pytest.mark.asyncio
async def test_fetch_all_pages():
    qso = QsoRecord(
        call="W1AW",
        station_callsign="K1ABC",
        qso_date=date(2024, 1, 15),
        time_on=time(14, 30),
        band="20m",
        mode="SSB",
    )
    first = quote(to_adif(qso) * 250, safe="")
    first_ids = ",".join(str(i) for i in range(1, 251))
    second = quote(to_adif(qso), safe="")
    pages = [
        f"RESULT=OK&COUNT=250&LOGIDS={first_ids}&ADIF={first}",
        f"RESULT=OK&COUNT=1&LOGIDS=300&ADIF={second}",
    ]
    requests = []
    client = _client(lambda r: httpx.Response(200, text=pages[len(requests) - 1]), requests)
    async with client:
        records = await client.fetch_all_qsos(FetchOptions(band="20m"))
    assert len(records) == 251
    assert len(requests) == 2
    assert _form(requests[0])["OPTION"] == "BAND:20m,MAX:250"
    assert _form(requests[1])["OPTION"] == "BAND:20m,MAX:250,AFTERLOGID:251"


@pytest.mark.asyncio
async def test_fetch_all_stops_on_empty_page():
    requests = []
    client = _client(lambda r: httpx.Response(200, text="RESULT=OK&COUNT=0"), requests)
    async with client:
        records = await client.fetch_all_qsos()
    assert records == []
    assert len(requests) == 1