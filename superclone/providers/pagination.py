"""Page-number pagination shared by the provider clients."""

from collections.abc import Callable
from typing import Any, TypeVar

from superclone.exceptions import ResponseParseError
from superclone.transport import HTTPTransport

T = TypeVar("T")

PER_PAGE = 100
USER_AGENT = "superclone/0.1.0"


def fetch_all_pages(
    transport: HTTPTransport,
    path: str,
    parse: Callable[[dict[str, Any]], T],
    params: dict[str, Any] | None = None,
) -> list[T]:
    """
    Fetch every page of a list endpoint.

    Requests ``page=1, 2, ...`` with ``per_page=100`` until a page comes back
    empty, then returns everything collected. Pages are requested strictly
    in order; errors on any page abort the whole call.

    Args:
        transport: Transport bound to the provider API
        path: List endpoint path
        parse: Maps one JSON item to the result type
        params: Extra query parameters

    Returns:
        All parsed items, in API order

    Raises:
        DiscoveryError: On API errors
        ResponseParseError: If a page is not a JSON array or an item is malformed
    """
    results: list[T] = []
    page = 1

    while True:
        query = dict(params or {})
        query.update({"page": page, "per_page": PER_PAGE})
        items = transport.get_json(path, params=query)

        if not isinstance(items, list):
            raise ResponseParseError(
                f"Expected a JSON array from {path}, got {type(items).__name__}"
            )

        if not items:
            break

        for item in items:
            results.append(_parse_item(parse, item, path))

        page += 1

    return results


def _parse_item(parse: Callable[[dict[str, Any]], T], item: Any, path: str) -> T:
    try:
        return parse(item)
    except (KeyError, TypeError, AttributeError) as e:
        raise ResponseParseError(f"Malformed item in response from {path}: {e!r}") from e
