"""Pydantic models and status catalog for PropStack data."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# PropStack status IDs
AKQUISE = 133878
VORBEREITUNG = 133879
VERMARKTUNG = 133880
RESERVIERT = 133881
ABGESCHLOSSEN = 133882

STATUS_NAME_TO_ID: Dict[str, int] = {
    "akquise": AKQUISE,
    "vorbereitung": VORBEREITUNG,
    "vermarktung": VERMARKTUNG,
    "reserviert": RESERVIERT,
    "abgeschlossen": ABGESCHLOSSEN,
    # English names
    "acquisition": AKQUISE,
    "preparation": VORBEREITUNG,
    "marketing": VERMARKTUNG,
    "reserved": RESERVIERT,
    "completed": ABGESCHLOSSEN,
}

ACTIVE_STATUS_IDS = f"{VERMARKTUNG},{RESERVIERT}"

Number = Union[int, float]


class PropStackStatus(BaseModel):
    """A lifecycle stage from the status catalog."""

    id: int
    name: str
    color: Optional[str] = None
    position: Optional[int] = None
    nonpublic: bool = False


class SearchParams(BaseModel):
    """Filters for a property search. Only type coercion is applied."""

    price_from: Optional[Number] = Field(None, description="Minimum price in EUR")
    price_to: Optional[Number] = Field(None, description="Maximum price in EUR")
    plot_area: Optional[Number] = Field(
        None, description="Minimum plot area in square meters"
    )
    property_type: Optional[str] = Field(
        None, description="Property type (e.g. APARTMENT, SINGLE_FAMILY_HOUSE)"
    )
    status: Optional[str] = Field(
        None, description="Status names or IDs, comma-separated"
    )
    per: Optional[int] = Field(None, description="Items per page (default 500)")
    page: Optional[int] = Field(None, description="Page number, starting at 1")


class SearchResult(BaseModel):
    """Canonical search result, whatever envelope the API used."""

    units: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0


def extract_value(field: Any) -> Any:
    """Unwrap a ``{label, value}`` field to its value (None if it has none)."""
    if isinstance(field, dict):
        return field.get("value")
    return field


class PropertyOverview(BaseModel):
    """Reduced property record returned by searches.

    Values are passed through from the API as they are; only the status
    lookup and {label, value} unwrapping are applied.
    """

    id: Any = None
    unit_id: Any = None
    name: Any = None
    title: Any = None
    city: Any = None
    street: Any = None
    house_number: Any = None
    status: Any = "Unknown"
    status_id: Any = None
    price: Any = None
    living_space: Any = None
    rooms: Any = None

    @classmethod
    def from_unit(cls, unit: Dict[str, Any]) -> "PropertyOverview":
        # "status" without expand=1, "property_status" with it
        status_obj = unit.get("status") or unit.get("property_status")
        if not isinstance(status_obj, dict):
            status_obj = {}

        return cls(
            id=unit.get("id"),
            unit_id=unit.get("unit_id"),
            name=unit.get("name"),
            title=extract_value(unit.get("title")),
            city=unit.get("city"),
            street=unit.get("street"),
            house_number=unit.get("house_number"),
            status=status_obj.get("name") or "Unknown",
            status_id=status_obj.get("id"),
            price=extract_value(unit.get("price")),
            living_space=extract_value(unit.get("living_space")),
            rooms=extract_value(unit.get("number_of_rooms")),
        )
