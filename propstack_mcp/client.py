"""Read-only async client for the PropStack REST API."""

import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from propstack_mcp.exceptions import (
    ApiError,
    ConfigurationError,
    NotFoundError,
    PropStackError,
    SecurityError,
    UnexpectedFormatError,
)
from propstack_mcp.models import STATUS_NAME_TO_ID, SearchParams, SearchResult

logger = logging.getLogger(__name__)

PROPSTACK_API_BASE = "https://api.propstack.de/v1"
DEFAULT_PER_PAGE = 500
REQUEST_TIMEOUT = 30.0

_UNSAFE_QUERY_CHARS = re.compile(r"[;<>'\"]")
_CREDENTIAL_PATTERNS = [
    (re.compile(r"key[=:]\s*\S+", re.IGNORECASE), "key=***"),
    (re.compile(r"token[=:]\s*\S+", re.IGNORECASE), "token=***"),
    (re.compile(r"bearer\s+\S+", re.IGNORECASE), "bearer ***"),
]


def sanitize_search_query(query: str) -> str:
    """Strip ``; < > ' "`` from a free-text filter value."""
    return _UNSAFE_QUERY_CHARS.sub("", query)


def sanitize_error_message(message: str) -> str:
    """Redact credential-shaped substrings (key=, token=, bearer) from a message."""
    for pattern, replacement in _CREDENTIAL_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def normalize_status_param(status: str) -> str:
    """
    Convert status names to PropStack status IDs.

    Numeric IDs and unknown names are passed through unchanged.

    Example Usage:
        normalize_status_param("vermarktung,reserviert")  # -> "133880,133881"
        normalize_status_param("akquise, 133881")         # -> "133878,133881"
    """
    normalized = []
    for part in status.split(","):
        part = part.strip().lower()
        if part.isascii() and part.isdigit():
            normalized.append(part)
            continue
        status_id = STATUS_NAME_TO_ID.get(part)
        normalized.append(str(status_id) if status_id else part)
    return ",".join(normalized)


def parse_units_response(payload: Any) -> SearchResult:
    """Resolve either ``{data, meta}`` or a bare array into a SearchResult."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        units = payload["data"]
        meta = payload.get("meta") or {}
        return SearchResult(units=units, total=meta.get("total_count") or len(units))

    if isinstance(payload, list):
        return SearchResult(units=payload, total=len(payload))

    raise UnexpectedFormatError("Unexpected API response format")


def _format_param(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PropStackClient:
    """
    Read-only PropStack API client.

    Args:
        api_key (str): PropStack API key, sent as the X-API-KEY header.
        base_url (str): API base URL. Must be HTTPS.
        transport (Optional[httpx.AsyncBaseTransport]): Custom transport, used by tests.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = PROPSTACK_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("PropStack API key is required")
        if not base_url.startswith("https://"):
            raise SecurityError("HTTPS required for PropStack API")

        self._api_key = api_key
        self.base_url = base_url
        self._transport = transport

    def __repr__(self) -> str:
        return f"PropStackClient(base_url={self.base_url!r})"

    async def _request(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {
            "X-API-KEY": self._api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url, headers=headers, params=params, timeout=REQUEST_TIMEOUT
                )

            if not response.is_success:
                raise ApiError.from_status(response.status_code, response.reason_phrase)

            try:
                return response.json()
            except ValueError:
                raise UnexpectedFormatError("PropStack API returned invalid JSON") from None
        except PropStackError as e:
            e.args = (sanitize_error_message(str(e)),)
            raise
        except httpx.HTTPError as e:
            raise ApiError(sanitize_error_message(f"PropStack API request failed: {e}")) from None

    async def search_properties(self, params: Optional[SearchParams] = None) -> SearchResult:
        """
        Search properties with filters.

        Does NOT send expand=1: without it the API returns ~30 fields per unit
        (including "status") instead of ~275, about 75% less data. Use
        get_property() for full details.
        """
        params = params or SearchParams()

        query: Dict[str, str] = {
            "per": str(params.per or DEFAULT_PER_PAGE),
            "with_meta": "1",
        }

        if params.price_from:
            query["price_from"] = _format_param(params.price_from)
        if params.price_to:
            query["price_to"] = _format_param(params.price_to)
        if params.plot_area:
            query["plot_area"] = _format_param(params.plot_area)
        if params.property_type:
            query["property_type"] = sanitize_search_query(params.property_type)
        if params.status:
            query["status"] = normalize_status_param(params.status)
        if params.page:
            query["page"] = str(params.page)

        logger.debug("Searching units with filters: %s", sorted(query))
        payload = await self._request("/units", query)
        return parse_units_response(payload)

    async def get_property(self, unit_id: str) -> Dict[str, Any]:
        """
        Get the full record for one property by unit_id.

        Goes through the search endpoint because /units/:id needs higher API
        permissions.
        """
        query = {"unit_id": str(unit_id), "expand": "1", "with_meta": "1"}
        payload = await self._request("/units", query)
        result = parse_units_response(payload)

        if not result.units:
            raise NotFoundError(
                sanitize_error_message(f"Property with unit_id {unit_id} not found")
            )
        return result.units[0]

    async def list_statuses(self) -> List[Dict[str, Any]]:
        """List the property status catalog."""
        payload = await self._request("/property_statuses")
        if isinstance(payload, dict):
            return payload.get("data") or []
        return []
