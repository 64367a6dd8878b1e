"""
Fluent builder for Webz.io News API Lite request URLs.
"""

import calendar
import datetime
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit

import pytz

UTC = pytz.utc
API_PATH = "/newsApiLite"
MIN_SIZE, MAX_SIZE = 1, 100
SORT_FIELDS = ("relevancy", "date")
SORT_ORDERS = ("asc", "desc")


class InvalidEndpointError(ValueError):
    """Raised when a continuation URL cannot be parsed."""


def _stringify(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class WebzQueryBuilder:
    def __init__(self, token: str, base_url: str = "https://api.webz.io"):
        self.token = token
        self.base_url = base_url
        self._params: dict[str, object] = {"token": token}

    @property
    def params(self) -> dict[str, object]:
        return dict(self._params)

    def with_query(self, query: str) -> "WebzQueryBuilder":
        self._params["q"] = query
        return self

    def with_language(self, language: str) -> "WebzQueryBuilder":
        self._params["language"] = language
        return self

    def with_size(self, size: int) -> "WebzQueryBuilder":
        self._params["size"] = min(max(MIN_SIZE, int(size)), MAX_SIZE)
        return self

    def with_sort(self, sort: str) -> "WebzQueryBuilder":
        if sort not in SORT_FIELDS:
            raise ValueError(f"sort must be one of {SORT_FIELDS}, got {sort!r}")
        self._params["sort"] = sort
        return self

    def with_order(self, order: str) -> "WebzQueryBuilder":
        if order not in SORT_ORDERS:
            raise ValueError(f"order must be one of {SORT_ORDERS}, got {order!r}")
        self._params["order"] = order
        return self

    def with_start_date(self, date: datetime.datetime) -> "WebzQueryBuilder":
        """Filter on crawl time; naive datetimes are read as UTC."""
        if date.tzinfo is None:
            date = UTC.localize(date)
        millis = calendar.timegm(date.utctimetuple()) * 1000 + date.microsecond // 1000
        self._params["ts"] = millis
        return self

    def with_offset(self, offset: int) -> "WebzQueryBuilder":
        self._params["from"] = offset
        return self

    def with_highlight(self, highlight: bool) -> "WebzQueryBuilder":
        self._params["highlight"] = highlight
        return self

    def with_endpoint(self, endpoint: str) -> "WebzQueryBuilder":
        """
        Replace every parameter with the query string of a server-supplied URL.

        `endpoint` is either absolute or a path relative to the base URL
        (e.g. the `next` link of a response).
        """
        relative = endpoint.startswith("/")
        try:
            parts = urlsplit(urljoin(self.base_url, endpoint) if relative else endpoint)
        except ValueError as e:
            raise InvalidEndpointError(f"Invalid endpoint URL provided: {endpoint!r}") from e
        if not relative and (not parts.scheme or not parts.netloc):
            raise InvalidEndpointError(f"Invalid endpoint URL provided: {endpoint!r}")

        self._params = dict(parse_qsl(parts.query, keep_blank_values=True))
        return self

    def build(self) -> str:
        url = urljoin(self.base_url, API_PATH)
        if not self._params:
            return url
        query = urlencode([(key, _stringify(value)) for key, value in self._params.items()])
        return f"{url}?{query}"
