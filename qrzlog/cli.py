"""Command that shows logbook status and recent QSOs."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import TextIO

from .client import QrzLogbookClient
from .errors import QrzLogbookError
from .models import FetchOptions

USER_AGENT = "BasicExample/1.0.0 (YOURCALL)"


async def run(client: QrzLogbookClient, out: TextIO) -> None:
    """Print the logbook status and a few recent QSOs to ``out``."""

    def say(text: str = "") -> None:
        print(text, file=out)

    say("QRZ Logbook API Basic Usage Example")
    say("===================================\n")

    say("📊 Getting logbook status...")
    try:
        status = await client.get_status()
    except QrzLogbookError as exc:
        say(f"❌ Error getting status: {exc}")
    else:
        for key, value in status.data.items():
            say(f"  {key}: {value}")

    say("\n🔍 Fetching recent QSOs...")
    try:
        recent = await client.fetch_qsos(FetchOptions(max=10))
    except QrzLogbookError as exc:
        say(f"❌ Error fetching QSOs: {exc}")
    else:
        say(f"✅ Found {recent.count} QSOs (showing up to 10):")
        for qso in recent.qsos:
            say(
                f"  {qso.qso_date:%Y-%m-%d} | {qso.time_on:%H:%M} | "
                f"{qso.call} {qso.mode} | {qso.band} | {qso.rst_sent or '--'}"
            )

    say("\n🔍 Fetching QSOs on 20m band...")
    try:
        on_band = await client.fetch_qsos(FetchOptions(band="20m", max=5))
    except QrzLogbookError as exc:
        say(f"❌ Error fetching 20m QSOs: {exc}")
    else:
        say(f"✅ Found {on_band.count} QSOs on 20m (showing up to 5):")
        for qso in on_band.qsos:
            freq = f"{qso.freq:.3f} MHz" if qso.freq is not None else "No freq"
            say(f"  {qso.qso_date:%Y-%m-%d} {qso.call} - {qso.mode} ({freq})")

    say("\n✨ Example completed!")


async def _run_with_key(api_key: str) -> None:
    async with QrzLogbookClient(api_key, USER_AGENT) as client:
        await run(client, sys.stdout)


def main(argv: list[str] | None = None) -> int:
    """Entry point; the API key is read from QRZ_API_KEY."""
    parser = argparse.ArgumentParser(
        prog="qrzlog",
        description="Show QRZ logbook status and recent QSOs (key from QRZ_API_KEY).",
    )
    parser.parse_args(argv)

    api_key = os.environ.get("QRZ_API_KEY")
    if not api_key:
        print("Please set QRZ_API_KEY environment variable", file=sys.stderr)
        return 1
    try:
        asyncio.run(_run_with_key(api_key))
    except QrzLogbookError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())