"""fetcher.py — Single-attempt HTTP retrieval of the saint page and liturgy readings."""

from datetime import date, timedelta
from typing import Iterable

import requests
from tqdm import tqdm

from models import LiturgyDay, SaintOfDayRecord
from parsers.liturgy_parser import parse_liturgy
from parsers.saint_parser import DEFAULT_BOILERPLATE, parse_saint_page

DEFAULT_SAINT_URL = "https://santo.cancaonova.com/"
DEFAULT_LITURGY_URL = "https://liturgia.up.railway.app/v2/"
DEFAULT_TIMEOUT = 15.0

HTML_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.6",
}
JSON_HEADERS = {"Accept": "application/json"}


class FetchError(RuntimeError):
    """The request failed in transport or came back with a non-success status."""

    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        self.url = url
        self.status = status
        if status is not None:
            message = f"Could not fetch {url}: HTTP {status}"
        else:
            message = f"Could not fetch {url}: {reason or 'request failed'}"
        super().__init__(message)


def fetch_response(
    url: str,
    headers: dict,
    session: requests.Session | None = None,
    params: dict | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Response:
    """One GET, no retries. Any failure surfaces as FetchError."""
    get = session.get if session is not None else requests.get
    try:
        response = get(url, headers=headers, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(url, reason=str(e)) from e
    if not 200 <= response.status_code < 300:
        raise FetchError(url, status=response.status_code)
    return response


def fetch_saint_of_day(
    url: str = DEFAULT_SAINT_URL,
    session: requests.Session | None = None,
    boilerplate: Iterable[str] = DEFAULT_BOILERPLATE,
    timeout: float = DEFAULT_TIMEOUT,
) -> SaintOfDayRecord:
    response = fetch_response(url, HTML_HEADERS, session=session, timeout=timeout)
    html = response.content.decode("utf-8", errors="replace")
    return parse_saint_page(html, boilerplate=boilerplate)


def liturgy_params(day: date) -> dict:
    return {"dia": day.day, "mes": day.month, "ano": day.year}


def fetch_liturgy(
    day: date,
    api_url: str = DEFAULT_LITURGY_URL,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> LiturgyDay:
    response = fetch_response(api_url, JSON_HEADERS, session=session, params=liturgy_params(day), timeout=timeout)
    return parse_liturgy(response.content.decode("utf-8", errors="replace"))


def fetch_liturgy_range(
    start: date,
    days: int,
    api_url: str = DEFAULT_LITURGY_URL,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[tuple[date, LiturgyDay]]:
    """
    Fetch `days` consecutive days starting at `start`, one request each.
    The first failing day aborts the whole range.
    """
    if session is None:
        with requests.Session() as http:
            return fetch_liturgy_range(start, days, api_url=api_url, session=http, timeout=timeout)

    results = []
    with tqdm(total=days, desc="  Liturgia", unit="day") as pbar:
        for offset in range(days):
            day = start + timedelta(days=offset)
            results.append((day, fetch_liturgy(day, api_url=api_url, session=session, timeout=timeout)))
            pbar.update(1)
    return results
