"""Reading the invoice ledger as CSV, from a published sheet URL or a local file."""

from __future__ import annotations

import csv
import io
from pathlib import Path

import httpx

from skatmoms.runtime.logging import get_logger

logger = get_logger(__name__)

FETCH_TIMEOUT = 30.0


class SourceUnavailable(RuntimeError):
    """Raised when the ledger CSV cannot be fetched or read."""


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_csv_text(url: str, client: httpx.Client | None = None) -> str:
    """Download the published sheet as CSV text.

    Args:
        url: Published CSV URL (e.g. a Google Sheets ``output=csv`` link).
        client: Optional client, mainly for tests. A new one is created otherwise.
    """
    logger.info("Fetching ledger CSV...")
    try:
        if client is None:
            with httpx.Client(timeout=FETCH_TIMEOUT, follow_redirects=True) as own_client:
                response = own_client.get(url)
        else:
            response = client.get(url)
    except httpx.RequestError as e:
        logger.error("Failed to fetch ledger CSV: %s", e)
        raise SourceUnavailable(f"Failed to fetch ledger CSV: {e}") from e

    if not response.is_success:
        logger.error("Ledger CSV request failed: %s", response.status_code)
        raise SourceUnavailable(f"Ledger CSV request failed: {response.status_code}")
    return response.text


def read_csv_text(source: str, client: httpx.Client | None = None) -> str:
    """Return CSV text from ``source``: an http(s) URL or a local file path."""
    if is_url(source):
        return fetch_csv_text(source, client=client)

    path = Path(source).expanduser()
    logger.info("Reading ledger CSV from %s", path)
    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise SourceUnavailable(f"Cannot read ledger CSV {path}: {e}") from e


def parse_csv_rows(text: str) -> list[dict[str, str]]:
    """Split CSV text into header-keyed rows, skipping blank lines."""
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    rows: list[dict[str, str]] = []
    for row in reader:
        if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
            continue
        rows.append({(key or "").strip(): (value or "") for key, value in row.items() if isinstance(value, str)})
    return rows


def load_rows(source: str, client: httpx.Client | None = None) -> list[dict[str, str]]:
    rows = parse_csv_rows(read_csv_text(source, client=client))
    logger.debug("Read %d rows", len(rows))
    return rows
