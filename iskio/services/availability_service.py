from datetime import date

from iskio.core.dates import date_key
from iskio.models.availability import AvailabilitySlot, BulkRequest, BulkResult, DayHours
from iskio.services.api_client import ApiClient


async def get_disponibilidad_por_fecha(api: ApiClient, fecha: date | str) -> list[str]:
    """Hours still bookable on one day."""
    data = await api.get("/disponibilidad", params={"fecha": date_key(fecha)})
    return DayHours.model_validate(data or {}).horas or []


async def list_dias_disponibles(
    api: ApiClient, desde: date | str, hasta: date | str
) -> list[str]:
    """Days in [desde, hasta] with at least one active, unoccupied hour."""
    data = await api.get(
        "/disponibilidad",
        params={"desde": date_key(desde), "hasta": date_key(hasta), "modo": "dias"},
    )
    return [str(d) for d in data or []]


async def list_slots_disponibles(
    api: ApiClient, desde: date | str, hasta: date | str, include_inactive: bool = False
) -> list[AvailabilitySlot]:
    params = {"desde": date_key(desde), "hasta": date_key(hasta)}
    if include_inactive:
        params["include_inactive"] = "1"
    data = await api.get("/disponibilidad", params=params)
    return [AvailabilitySlot.model_validate(item) for item in data or []]


def _bulk_body(fechas: list[date | str], horas: list[str]) -> dict:
    return BulkRequest(fechas=[date_key(f) for f in fechas], horas=list(horas)).model_dump()


async def create_disponibilidad(
    api: ApiClient, fechas: list[date | str], horas: list[str]
) -> BulkResult:
    """Enable every (fecha, hora) pair of the cross product."""
    data = await api.post("/disponibilidad", json=_bulk_body(fechas, horas))
    return BulkResult.model_validate(data or {})


async def delete_disponibilidad(
    api: ApiClient, fechas: list[date | str], horas: list[str]
) -> BulkResult:
    """Disable every (fecha, hora) pair of the cross product."""
    data = await api.delete("/disponibilidad", json=_bulk_body(fechas, horas))
    return BulkResult.model_validate(data or {})
