# qrzlog

An asynchronous client for the QRZ.com logbook API. It inserts, deletes and
fetches QSO records, reads the logbook status, and converts QSO records to
and from ADIF.

## Installation

```
pip install qrzlog
```

For running the test suite:

```
pip install "qrzlog[test]"
```

## Quick start

```python
import asyncio
from datetime import date, time

from qrzlog.client import QrzLogbookClient
from qrzlog.models import FetchOptions, QsoRecord


async def main() -> None:
    async with QrzLogbookClient("placeholder", "MyApp/1.0.0 (N0CALL)") as client:
        qso = QsoRecord(
            call="W1AW",
            station_callsign="N0CALL",
            qso_date=date(2024, 1, 15),
            time_on=time(14, 30),
            band="20m",
            mode="SSB",
            freq=14.205,
            rst_sent="59",
            rst_rcvd="59",
        )
        result = await client.insert_qso(qso, replace=False)
        print("Inserted with log id", result.logid)

        page = await client.fetch_qsos(FetchOptions(band="20m", max=10))
        for record in page.qsos:
            print(record.qso_date, record.call, record.mode)


asyncio.run(main())
```

`QrzLogbookClient` checks its arguments when it is created:

- the API key must be at least ten characters long, otherwise
  `InvalidKeyError` is raised;
- the user agent must be non-empty, at most 128 bytes in UTF-8, must not
  contain `python-requests` or `node-fetch`, and must not be just `curl` or
  `wget` (case is ignored); otherwise `InvalidUserAgentError` is raised.

The client keeps an `httpx.AsyncClient` open; use it as an async context
manager or call `aclose()` when done. The `endpoint` and `transport` keyword
arguments let you point it at another URL or supply an httpx transport.

## Fetching

`FetchOptions` is a frozen dataclass describing which records to fetch:
`fetch_all`, `band`, `mode`, `call`, `max`, `after_logid`, `date_from` and
`date_to`. `FetchOptions.all_records()` asks for every record, and
`date_range(date_from, date_to)` returns a copy limited to a date range.
`to_option_string()` renders the options as the service's `OPTION` value,
for example `BAND:20m,MAX:100`.

`fetch_qsos(options)` returns a `FetchResponse` with `count`, `logids` and
the parsed `qsos`. `fetch_all_qsos(options)` pages through the logbook 250
records at a time, starting each page after the highest log id seen so far,
and returns every matching `QsoRecord`.

## Deleting and status

```python
deleted = await client.delete_qsos([12345, 12346])
print(deleted.deleted_count, deleted.not_found_logids)

status = await client.get_status()
for key, value in status.data.items():
    print(key, value)
```

`delete_qsos` raises `InvalidParamsError` for an empty list.

## Parsing responses

The functions that turn the service's response bodies into result objects
are available on their own in `qrzlog.client`: `parse_response_params`,
`parse_data_params`, `parse_insert_response`, `parse_delete_response`,
`parse_status_response` and `parse_fetch_response`.

## ADIF

```python
from qrzlog.adif import parse_adif, to_adif

text = to_adif(qso)
records = parse_adif(text)
```

`to_adif` writes one record ending in `<eor>`; `parse_adif` splits text on
`<eor>` and parses each non-empty record with `parse_record`. A record must
have `call`, `station_callsign`, `qso_date`, `time_on`, `band` and `mode`.
Dates are `YYYYMMDD` (`parse_date`), times `HHMM` or `HHMMSS` (`parse_time`);
`format_time` writes `HHMM`. Fields beyond the standard ones are kept in
`additional_fields` and written back out, with lower-case names, when the
record is encoded.

## Errors

All failures raise subclasses of `qrzlog.errors.QrzLogbookError`:
`HttpError`, `ApiError` (the server's reason is kept in `reason`),
`AuthError`, `InvalidKeyError`, `InvalidUserAgentError`, `AdifParseError`
and `InvalidParamsError`.

## Command line

With your API key in the environment, the `qrzlog` command prints the
logbook status, up to ten recent QSOs and up to five QSOs on 20m:

```
QRZ_API_KEY=placeholder qrzlog
```

The command only reads from the logbook; it does not insert or delete QSOs,
and it sends the fixed user agent `BasicExample/1.0.0 (YOURCALL)`. It exits
with status 1 if `QRZ_API_KEY` is not set or the client cannot be created.