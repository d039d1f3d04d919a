"""
Edge Record Source.

Resolves the raw propagation links for a run. Exactly one of two paths is
taken:

    1. Inline data: a ``data`` value (the same JSON the hosted page accepts
       in its query string). Malformed inline data is a hard error; the
       network is never consulted as a fallback.
    2. Remote fetch: a single GET against the query endpoint. No retries.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional
from urllib import request
from urllib.parse import parse_qs

from pydantic import ValidationError

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, FETCH_FAILED_MESSAGE, INVALID_DATA_MESSAGE
from .result import Err, Ok, Result
from .types import RawEdgeRecord

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """
    Raised (or returned inside Err) when edge records cannot be resolved.

    Attributes:
        message: User-facing message shown in place of the chart.
        detail: Developer-facing diagnostic.
    """

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(f"{message}: {detail}" if detail else message)


class InvalidInlineData(SourceError):
    """The inline ``data`` value is not valid JSON or not a JSON array."""

    def __init__(self, detail: str = ""):
        super().__init__(INVALID_DATA_MESSAGE, detail)


class FetchFailure(SourceError):
    """The query endpoint could not be reached or returned an unusable body."""

    def __init__(self, detail: str = ""):
        super().__init__(FETCH_FAILED_MESSAGE, detail)


def data_param_from_query(query: Optional[str]) -> Optional[str]:
    """
    Extract the ``data`` parameter from a URL query string.

    Accepts an optional leading ``?``. The first occurrence wins and an
    empty value is treated as absent.
    """
    if not query:
        return None
    values = parse_qs(query.lstrip("?"), keep_blank_values=True).get("data")
    if not values or not values[0]:
        return None
    return values[0]


def parse_records(payload: Any) -> List[RawEdgeRecord]:
    """
    Read decoded JSON as a list of edge records.

    Only the array itself is required. Elements that are not usable records
    (missing or non-string chain ids, a non-string timestamp) are skipped
    with a warning and the rest are kept.

    Raises:
        ValueError: If the payload is not a JSON array.
    """
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")

    records: List[RawEdgeRecord] = []
    for position, item in enumerate(payload):
        try:
            records.append(RawEdgeRecord.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping edge record {position}: {e.error_count()} invalid field(s) in {item!r}")
    return records


def load_inline(data_param: str) -> List[RawEdgeRecord]:
    """Parse inline JSON. Raises InvalidInlineData on any failure."""
    try:
        return parse_records(json.loads(data_param))
    except ValueError as e:
        raise InvalidInlineData(str(e)) from e


def fetch_records(api_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> List[RawEdgeRecord]:
    """
    Issue the single GET against the query endpoint.

    Raises:
        FetchFailure: On transport errors, HTTP errors, or a body that is
            not a JSON array.
    """
    req = request.Request(api_url, headers={"Accept": "application/json"})
    logger.debug(f"Fetching edge records from {api_url}")
    try:
        with request.urlopen(req, timeout=timeout) as response:
            body = response.read()
    except OSError as e:  # URLError, HTTPError and socket timeouts
        raise FetchFailure(str(e)) from e

    try:
        return parse_records(json.loads(body.decode("utf-8")))
    except (UnicodeDecodeError, ValueError) as e:
        raise FetchFailure(str(e)) from e


def resolve_records(
    data_param: Optional[str] = None,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Result[List[RawEdgeRecord], SourceError]:
    """
    Resolve the raw edge records for this run.

    Args:
        data_param: Inline JSON. When non-empty it takes precedence and the
            network is not touched.
        api_url: Query endpoint used when no inline data is given.
        timeout: Socket timeout for the fetch, in seconds.

    Returns:
        Ok(list of RawEdgeRecord) or Err(SourceError).
    """
    if data_param:
        try:
            records = load_inline(data_param)
        except InvalidInlineData as e:
            logger.error(f"Invalid JSON in data parameter: {e.detail}")
            return Err(e)
        logger.debug(f"Loaded {len(records)} inline edge records")
        return Ok(records)

    try:
        records = fetch_records(api_url, timeout)
    except FetchFailure as e:
        logger.error(f"Error fetching data: {e.detail}")
        return Err(e)
    logger.debug(f"Fetched {len(records)} edge records")
    return Ok(records)
