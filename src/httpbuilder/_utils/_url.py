from typing import Mapping, Optional
from urllib.parse import urlencode

import httpx

from ..models.errors import InvalidURLError


def build_url(url: str, params: Optional[Mapping[str, str]] = None) -> str:
    """Merge query parameters into ``url``.

    Without parameters the URL is returned untouched, including any query
    string it already carries. Otherwise every configured key replaces all
    existing values of that key and the query is re-encoded sorted by key.

    Raises:
        InvalidURLError: If ``url`` cannot be parsed.
    """
    if not params:
        return url

    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise InvalidURLError(url, str(e)) from e

    query = parsed.params
    for key, value in params.items():
        query = query.set(key, value)

    # stable sort keeps the original order of repeated keys
    items = sorted(query.multi_items(), key=lambda item: item[0])
    encoded = urlencode(items)

    try:
        return str(parsed.copy_with(query=encoded.encode("ascii")))
    except httpx.InvalidURL as e:
        raise InvalidURLError(url, str(e)) from e
