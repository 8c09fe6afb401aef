"""PropStack MCP server: read-only access to PropStack real estate data."""

import json
import logging
import sys
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from propstack_mcp.client import PropStackClient, sanitize_error_message
from propstack_mcp.config import API_KEY_ENV, Settings, setup_logging
from propstack_mcp.exceptions import ConfigurationError
from propstack_mcp.models import (
    ACTIVE_STATUS_IDS,
    PropertyOverview,
    SearchParams,
)
from propstack_mcp.privacy import sanitize_property

logger = logging.getLogger(__name__)

SERVER_NAME = "propstack-mcp-server"
JSON_MIME_TYPE = "application/json"
OVERVIEW_LIMIT = 500


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


# --- Handlers (protocol independent) ---


async def search_overview(client: PropStackClient, params: SearchParams) -> Dict[str, Any]:
    """Run a search and reduce every unit to its overview record."""
    result = await client.search_properties(params)
    overview = [PropertyOverview.from_unit(unit).model_dump() for unit in result.units]
    return {"properties": overview, "total": result.total, "count": len(overview)}


async def property_detail(
    client: PropStackClient, unit_id: str, remove_media: bool = False
) -> Dict[str, Any]:
    """Fetch one property and run it through the privacy filter."""
    unit = await client.get_property(unit_id)
    return sanitize_property(unit, remove_media=remove_media)


async def list_statuses(client: PropStackClient) -> List[Dict[str, Any]]:
    return await client.list_statuses()


async def overview_prompt(client: PropStackClient, status_filter: Optional[str] = None) -> str:
    """Build the summary prompt text for all (optionally status-filtered) properties."""
    params = SearchParams(per=OVERVIEW_LIMIT, status=status_filter or None)
    result = await client.search_properties(params)

    # Minimal overview: no media
    units = [sanitize_property(unit, remove_media=True) for unit in result.units]
    return f"Generate a summary overview for these {result.total} properties:\n{to_json(units)}"


def _tool_error(tool_name: str, error: Exception) -> ToolError:
    message = sanitize_error_message(str(error))
    logger.error("%s failed: %s", tool_name, message)
    return ToolError(f"Error: {message}")


# --- Server ---


def create_server(client: PropStackClient) -> FastMCP:
    """Register the PropStack tools, resources and prompts on a new FastMCP server."""
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Read-only access to PropStack real estate data. "
            "Use propstack_search_properties for an overview with unit_ids, then "
            "propstack_get_property for full details of a single property."
        ),
    )

    @mcp.tool(
        name="propstack_search_properties",
        description=(
            "Search properties with filters (IMPORTANT: Always use filters to reduce "
            "result set and context usage). Returns overview: id, unit_id, name, city, "
            "street, status, price, living_space, rooms. Use propstack_get_property for "
            "full details. BEST PRACTICE: Filter by status (e.g. \"vermarktung,reserviert\" "
            "for active listings) and limit results with \"per\" (default 500)."
        ),
    )
    async def search_properties_tool(
        status: Optional[str] = None,
        price_from: Optional[float] = None,
        price_to: Optional[float] = None,
        plot_area: Optional[float] = None,
        property_type: Optional[str] = None,
        per: Optional[int] = OVERVIEW_LIMIT,
        page: Optional[int] = None,
    ) -> str:
        """
        Args:
            status (Optional[str]): Status names (akquise, vorbereitung, vermarktung, reserviert,
                abgeschlossen) or IDs (e.g. 133880,133881), comma-separated.
            price_from (Optional[float]): Minimum price in EUR.
            price_to (Optional[float]): Maximum price in EUR.
            plot_area (Optional[float]): Minimum plot area in square meters.
            property_type (Optional[str]): Property type (e.g. APARTMENT, SINGLE_FAMILY_HOUSE, VILLA).
            per (Optional[int]): Items per page (default 500, max 500).
            page (Optional[int]): Page number, starting at 1.
        """
        logger.info("propstack_search_properties called: status=%s, page=%s", status, page)
        try:
            params = SearchParams(
                status=status,
                price_from=price_from,
                price_to=price_to,
                plot_area=plot_area,
                property_type=property_type,
                per=per,
                page=page,
            )
            return to_json(await search_overview(client, params))
        except Exception as e:
            raise _tool_error("propstack_search_properties", e) from e

    @mcp.tool(
        name="propstack_get_property",
        description=(
            "Get complete details for a specific property by unit_id. Returns all fields "
            "including images, descriptions, and detailed features (~275 fields). "
            "Use propstack_search_properties first to find unit_ids."
        ),
    )
    async def get_property_tool(unit_id: str) -> str:
        """
        Args:
            unit_id (str): PropStack unit_id from search results (e.g. "100", "2071903").
        """
        logger.info("propstack_get_property called: unit_id=%s", unit_id)
        try:
            return to_json(await property_detail(client, unit_id, remove_media=False))
        except Exception as e:
            raise _tool_error("propstack_get_property", e) from e

    @mcp.tool(
        name="propstack_list_statuses",
        description="List all available property statuses with their IDs",
    )
    async def list_statuses_tool() -> str:
        logger.info("propstack_list_statuses called")
        try:
            return to_json(await list_statuses(client))
        except Exception as e:
            raise _tool_error("propstack_list_statuses", e) from e

    @mcp.resource(
        "propstack://properties/all",
        name="All Properties",
        description="Overview of all properties (id, unit_id, name, city, street, status, price)",
        mime_type=JSON_MIME_TYPE,
    )
    async def all_properties() -> str:
        overview = await search_overview(client, SearchParams(per=OVERVIEW_LIMIT))
        return to_json({"properties": overview["properties"], "total": overview["total"]})

    @mcp.resource(
        "propstack://properties/active",
        name="Active Properties",
        description="Properties with status Vermarktung or Reserviert",
        mime_type=JSON_MIME_TYPE,
    )
    async def active_properties() -> str:
        params = SearchParams(per=OVERVIEW_LIMIT, status=ACTIVE_STATUS_IDS)
        overview = await search_overview(client, params)
        return to_json({"properties": overview["properties"], "total": overview["total"]})

    @mcp.resource(
        "propstack://properties/single/{unit_id}",
        name="Single Property (without media)",
        description=(
            "Complete property details WITHOUT media fields (images, documents, videos, "
            "360_views). Context-efficient for data analysis."
        ),
        mime_type=JSON_MIME_TYPE,
    )
    async def single_property(unit_id: str) -> str:
        return to_json(await property_detail(client, unit_id, remove_media=True))

    @mcp.resource(
        "propstack://properties/single_all/{unit_id}",
        name="Single Property (complete)",
        description=(
            "Complete property details WITH all media fields. Use when images or "
            "documents are needed. Larger context footprint."
        ),
        mime_type=JSON_MIME_TYPE,
    )
    async def single_property_with_media(unit_id: str) -> str:
        return to_json(await property_detail(client, unit_id, remove_media=False))

    @mcp.prompt(
        name="propstack-overview",
        description="Generate overview summary of all properties",
    )
    async def overview(status_filter: Optional[str] = None) -> str:
        """
        Args:
            status_filter (Optional[str]): Status filter, e.g. "133880,133881" for active listings.
        """
        return await overview_prompt(client, status_filter)

    return mcp


def main() -> None:
    try:
        settings = Settings.from_env()
    except ConfigurationError:
        print(f"Error: {API_KEY_ENV} environment variable is required", file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level)

    client = PropStackClient(api_key=settings.api_key)
    mcp = create_server(client)

    logger.info("PropStack MCP server running on stdio")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
