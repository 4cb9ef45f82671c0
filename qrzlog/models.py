"""Data types for QSO records, service responses and fetch filters."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, time


@dataclass
class QsoRecord:
    """One contact in the logbook."""

    call: str = ""
    station_callsign: str = ""
    qso_date: date = date(1900, 1, 1)
    time_on: time = time(0, 0, 0)
    time_off: time | None = None
    band: str = ""
    mode: str = ""
    freq: float | None = None
    rst_sent: str | None = None
    rst_rcvd: str | None = None
    qth: str | None = None
    name: str | None = None
    comment: str | None = None
    additional_fields: dict[str, str] = field(default_factory=dict)


@dataclass
class InsertResponse:
    """Result of an INSERT action."""

    logid: int
    count: int


@dataclass
class DeleteResponse:
    """Result of a DELETE action."""

    deleted_count: int
    not_found_logids: list[int] = field(default_factory=list)


@dataclass
class StatusResponse:
    """Result of a STATUS action."""

    data: dict[str, str] = field(default_factory=dict)


@dataclass
class FetchResponse:
    """Result of a FETCH action."""

    count: int
    logids: list[int] = field(default_factory=list)
    qsos: list[QsoRecord] = field(default_factory=list)


def _compact_date(value: date) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


@dataclass(frozen=True)
class FetchOptions:
    """Filters for fetching QSOs from the logbook."""

    fetch_all: bool = False
    band: str | None = None
    mode: str | None = None
    call: str | None = None
    max: int | None = None
    after_logid: int | None = None
    date_from: date | None = None
    date_to: date | None = None

    @classmethod
    def all_records(cls) -> FetchOptions:
        """Options that request every record."""
        return cls(fetch_all=True)

    def date_range(self, date_from: date, date_to: date) -> FetchOptions:
        """Return a copy restricted to the given date range."""
        return dataclasses.replace(self, date_from=date_from, date_to=date_to)

    def to_option_string(self) -> str:
        """Render the options as the service's OPTION value."""
        options: list[str] = []
        if self.fetch_all:
            options.append("ALL")
        if self.band is not None:
            options.append(f"BAND:{self.band}")
        if self.mode is not None:
            options.append(f"MODE:{self.mode}")
        if self.call is not None:
            options.append(f"CALL:{self.call}")
        if self.max is not None:
            options.append(f"MAX:{self.max}")
        if self.after_logid is not None:
            options.append(f"AFTERLOGID:{self.after_logid}")
        if self.date_from is not None:
            options.append(f"DATEFROM:{_compact_date(self.date_from)}")
        if self.date_to is not None:
            options.append(f"DATETO:{_compact_date(self.date_to)}")
        return ",".join(options)