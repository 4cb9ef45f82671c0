"""Asynchronous client for the QRZ logbook HTTP interface."""

from __future__ import annotations

import dataclasses
import re
from types import TracebackType
from urllib.parse import unquote

import httpx

from .adif import parse_adif, to_adif
from .errors import (
    ApiError,
    AuthError,
    HttpError,
    InvalidKeyError,
    InvalidParamsError,
    InvalidUserAgentError,
)
from .models import (
    DeleteResponse,
    FetchOptions,
    FetchResponse,
    InsertResponse,
    QsoRecord,
    StatusResponse,
)

API_ENDPOINT = "https://logbook.qrz.com/api"
PAGE_SIZE = 250

_UNSIGNED = re.compile(r"\+?[0-9]+")
_GENERIC_AGENT_PARTS = ("python-requests", "node-fetch")
_GENERIC_AGENTS = ("curl", "wget")


def _parse_unsigned(text: str, bits: int) -> int | None:
    """Parse a non-negative integer that fits in ``bits`` bits, or return None."""
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value < (1 << bits) else None


def _parse_logid_list(text: str | None) -> list[int]:
    if text is None:
        return []
    parsed = (_parse_unsigned(part.strip(), 64) for part in text.split(","))
    return [value for value in parsed if value is not None]


def _parse_count(params: dict[str, str], default: str) -> int:
    count = _parse_unsigned(params.get("COUNT", default), 32)
    if count is None:
        raise ApiError("Invalid COUNT format")
    return count


def _check_result(params: dict[str, str], accepted: tuple[str, ...]) -> None:
    """Raise the matching error unless RESULT is one of ``accepted``."""
    result = params.get("RESULT")
    if result in accepted:
        return
    if result == "FAIL":
        raise ApiError(params.get("REASON", "Unknown error"))
    if result == "AUTH":
        raise AuthError()
    raise ApiError("Unexpected response format")


def parse_response_params(response: str) -> dict[str, str]:
    """Split a percent-encoded ``KEY=value&...`` response into a dict."""
    params: dict[str, str] = {}
    for pair in response.split("&"):
        key, sep, value = pair.partition("=")
        if not sep:
            continue
        try:
            params[unquote(key, errors="strict")] = unquote(value, errors="strict")
        except UnicodeDecodeError:
            raise ApiError("Invalid URL encoding in response") from None
    return params


def parse_data_params(data: str) -> dict[str, str]:
    """Split an already decoded ``key=value&...`` DATA block into a dict."""
    params: dict[str, str] = {}
    for pair in data.split("&"):
        key, sep, value = pair.partition("=")
        if sep:
            params[key] = value
    return params


def parse_insert_response(response: str) -> InsertResponse:
    """Interpret the body returned by an INSERT action."""
    params = parse_response_params(response)
    _check_result(params, ("OK",))
    logid_text = params.get("LOGID")
    if logid_text is None:
        raise ApiError("Missing LOGID in response")
    logid = _parse_unsigned(logid_text, 64)
    if logid is None:
        raise ApiError("Invalid LOGID format")
    return InsertResponse(logid=logid, count=_parse_count(params, "1"))


def parse_delete_response(response: str) -> DeleteResponse:
    """Interpret the body returned by a DELETE action."""
    params = parse_response_params(response)
    _check_result(params, ("OK", "PARTIAL"))
    return DeleteResponse(
        deleted_count=_parse_count(params, "0"),
        not_found_logids=_parse_logid_list(params.get("LOGIDS")),
    )


def parse_status_response(response: str) -> StatusResponse:
    """Interpret the body returned by a STATUS action."""
    params = parse_response_params(response)
    _check_result(params, ("OK",))
    data_text = params.get("DATA")
    data = parse_data_params(data_text) if data_text is not None else {}
    return StatusResponse(data=data)


def parse_fetch_response(response: str) -> FetchResponse:
    """Interpret the body returned by a FETCH action."""
    params = parse_response_params(response)
    _check_result(params, ("OK",))
    adif_text = params.get("ADIF")
    return FetchResponse(
        count=_parse_count(params, "0"),
        logids=_parse_logid_list(params.get("LOGIDS")),
        qsos=parse_adif(adif_text) if adif_text is not None else [],
    )


def _validate(api_key: str, user_agent: str) -> None:
    if len(api_key) < 10:
        raise InvalidKeyError()
    if not user_agent or len(user_agent.encode("utf-8")) > 128:
        raise InvalidUserAgentError()
    lowered = user_agent.lower()
    if any(part in lowered for part in _GENERIC_AGENT_PARTS) or lowered in _GENERIC_AGENTS:
        raise InvalidUserAgentError()


class QrzLogbookClient:
    """Client for inserting, deleting and fetching QSOs in a QRZ logbook."""

    def __init__(
        self,
        api_key: str,
        user_agent: str,
        *,
        endpoint: str = API_ENDPOINT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        _validate(api_key, user_agent)
        self.api_key = api_key
        self.user_agent = user_agent
        self.endpoint = endpoint
        self._http = httpx.AsyncClient(
            headers={"User-Agent": user_agent}, transport=transport
        )

    async def __aenter__(self) -> QrzLogbookClient:
        return self

    async def __aexit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def _request(self, params: dict[str, str]) -> str:
        try:
            response = await self._http.post(self.endpoint, data=params)
            if not response.is_success:
                response.raise_for_status()
            return response.text
        except httpx.HTTPError as exc:
            raise HttpError(exc) from exc

    async def insert_qso(self, qso: QsoRecord, replace: bool = False) -> InsertResponse:
        """Insert one QSO, optionally replacing a duplicate."""
        params = {"KEY": self.api_key, "ACTION": "INSERT", "ADIF": to_adif(qso)}
        if replace:
            params["OPTION"] = "REPLACE"
        return parse_insert_response(await self._request(params))

    async def delete_qsos(self, logids: list[int]) -> DeleteResponse:
        """Delete the QSOs with the given log ids."""
        if not logids:
            raise InvalidParamsError("No logids provided")
        params = {
            "KEY": self.api_key,
            "ACTION": "DELETE",
            "LOGIDS": ",".join(str(logid) for logid in logids),
        }
        return parse_delete_response(await self._request(params))

    async def get_status(self) -> StatusResponse:
        """Return status information about the logbook."""
        params = {"KEY": self.api_key, "ACTION": "STATUS"}
        return parse_status_response(await self._request(params))

    async def fetch_qsos(self, options: FetchOptions | None = None) -> FetchResponse:
        """Fetch QSOs matching the given filters."""
        options = options if options is not None else FetchOptions()
        params = {"KEY": self.api_key, "ACTION": "FETCH"}
        option_string = options.to_option_string()
        if option_string:
            params["OPTION"] = option_string
        return parse_fetch_response(await self._request(params))

    async def fetch_all_qsos(self, options: FetchOptions | None = None) -> list[QsoRecord]:
        """Fetch every matching QSO, requesting pages of 250 records."""
        options = options if options is not None else FetchOptions()
        collected: list[QsoRecord] = []
        after_logid = 0
        while True:
            page_options = dataclasses.replace(
                options,
                max=PAGE_SIZE,
                after_logid=after_logid if after_logid > 0 else None,
            )
            page = await self.fetch_qsos(page_options)
            if not page.qsos:
                break
            if page.logids:
                after_logid = max(page.logids) + 1
            collected.extend(page.qsos)
            if len(page.qsos) < PAGE_SIZE:
                break
        return collected