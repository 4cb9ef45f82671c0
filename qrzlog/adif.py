"""Reading and writing QSO records in ADIF text form."""

from __future__ import annotations

import math
import re
from datetime import date, time
from decimal import Decimal

from .errors import AdifParseError
from .models import QsoRecord

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _field(name: str, value: str) -> str:
    return f"<{name}:{len(value.encode('utf-8'))}>{value}"


def _format_freq(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_time(value: time) -> str:
    """Format a time as ADIF HHMM."""
    return f"{value.hour:02d}{value.minute:02d}"


def to_adif(qso: QsoRecord) -> str:
    """Render one QSO as a single ADIF record ending in <eor>."""
    d = qso.qso_date
    fields = [
        _field("call", qso.call),
        _field("station_callsign", qso.station_callsign),
        f"<qso_date:8>{d.year:04d}{d.month:02d}{d.day:02d}",
        _field("time_on", format_time(qso.time_on)),
        _field("band", qso.band),
        _field("mode", qso.mode),
    ]
    if qso.time_off is not None:
        fields.append(_field("time_off", format_time(qso.time_off)))
    if qso.freq is not None:
        fields.append(_field("freq", _format_freq(qso.freq)))
    optional = (
        ("rst_sent", qso.rst_sent),
        ("rst_rcvd", qso.rst_rcvd),
        ("qth", qso.qth),
        ("name", qso.name),
        ("comment", qso.comment),
    )
    fields.extend(_field(name, value) for name, value in optional if value is not None)
    fields.extend(_field(key.lower(), value) for key, value in qso.additional_fields.items())
    fields.append("<eor>")
    return "".join(fields)


def parse_adif(text: str) -> list[QsoRecord]:
    """Parse ADIF text holding any number of <eor>-terminated records."""
    return [
        parse_record(record.strip())
        for record in text.split("<eor>")
        if record.strip()
    ]


def _scan_fields(record: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    pos = 0
    size = len(record)
    while True:
        pos = record.find("<", pos)
        if pos < 0:
            break
        start = pos + 1
        end = start
        while end < size and record[end] not in ":>":
            end += 1
        if end >= size:
            break
        name = record[start:end].lower()
        if record[end] == ">":
            pos = end + 1
            continue
        length_end = record.find(">", end + 1)
        if length_end < 0:
            break
        length_text = record[end + 1:length_end]
        if not _UNSIGNED.fullmatch(length_text):
            raise AdifParseError(f"Invalid length: {length_text}")
        value_start = length_end + 1
        value_end = value_start + int(length_text)
        if value_end > size:
            raise AdifParseError("Field value extends beyond record")
        fields[name] = record[value_start:value_end]
        pos = value_end
    return fields


def _require(fields: dict[str, str], name: str) -> str:
    try:
        return fields.pop(name)
    except KeyError:
        raise AdifParseError(f"Missing {name} field") from None


def _parse_freq(text: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise AdifParseError("Invalid frequency format")
    return float(text)


def parse_record(record: str) -> QsoRecord:
    """Parse the fields of one ADIF record into a QSO."""
    fields = _scan_fields(record)
    call = _require(fields, "call")
    station_callsign = _require(fields, "station_callsign")
    band = _require(fields, "band")
    mode = _require(fields, "mode")
    qso_date = parse_date(_require(fields, "qso_date"))
    time_on = parse_time(_require(fields, "time_on"))

    time_off_text = fields.pop("time_off", None)
    time_off = parse_time(time_off_text) if time_off_text is not None else None
    freq_text = fields.pop("freq", None)
    freq = _parse_freq(freq_text) if freq_text is not None else None

    return QsoRecord(
        call=call,
        station_callsign=station_callsign,
        qso_date=qso_date,
        time_on=time_on,
        time_off=time_off,
        band=band,
        mode=mode,
        freq=freq,
        rst_sent=fields.pop("rst_sent", None),
        rst_rcvd=fields.pop("rst_rcvd", None),
        qth=fields.pop("qth", None),
        name=fields.pop("name", None),
        comment=fields.pop("comment", None),
        additional_fields=fields,
    )


def _number(text: str, pattern: re.Pattern[str], message: str) -> int:
    if not pattern.fullmatch(text):
        raise AdifParseError(message)
    return int(text)


def parse_date(text: str) -> date:
    """Parse an ADIF YYYYMMDD date."""
    if len(text) != 8:
        raise AdifParseError("Date must be 8 characters (YYYYMMDD)")
    year = _number(text[0:4], _SIGNED, "Invalid year in date")
    month = _number(text[4:6], _UNSIGNED, "Invalid month in date")
    day = _number(text[6:8], _UNSIGNED, "Invalid day in date")
    try:
        return date(year, month, day)
    except ValueError:
        raise AdifParseError("Invalid date") from None


def parse_time(text: str) -> time:
    """Parse an ADIF HHMM or HHMMSS time."""
    if len(text) == 4:
        text += "00"
    if len(text) != 6:
        raise AdifParseError("Time must be 4 or 6 characters (HHMM or HHMMSS)")
    hour = _number(text[0:2], _UNSIGNED, "Invalid hour in time")
    minute = _number(text[2:4], _UNSIGNED, "Invalid minute in time")
    second = _number(text[4:6], _UNSIGNED, "Invalid second in time")
    try:
        return time(hour, minute, second)
    except ValueError:
        raise AdifParseError("Invalid time") from None