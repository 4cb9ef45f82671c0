"""Async client for the QRZ.com logbook API, with ADIF encoding and parsing."""

__version__ = "0.1.1"

__all__ = ["adif", "cli", "client", "errors", "models"]