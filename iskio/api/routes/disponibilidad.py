import logging
import re
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iskio.api.deps import get_store, require_admin
from iskio.api.store import Store
from iskio.core.dates import parse_date_key
from iskio.models.auth import AuthUser
from iskio.models.availability import BulkRequest, BulkResult
from iskio.models.common import normalize_hour

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/disponibilidad", tags=["disponibilidad"])

_HOUR_RE = re.compile(r"^\d{2}:\d{2}$")


def _require_date(value: str | None, name: str) -> date:
    parsed = parse_date_key(value)
    if parsed is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Fecha invalida: {name}")
    return parsed


def _validated_pairs(body: BulkRequest) -> tuple[list[str], list[str]]:
    if not body.fechas or not body.horas:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Debes enviar fechas y horas")
    fechas = [_require_date(f, "fechas").isoformat() for f in body.fechas]
    horas = [normalize_hour(h) for h in body.horas]
    bad = [h for h in horas if not _HOUR_RE.match(h)]
    if bad:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Hora invalida: {bad[0]}")
    return fechas, horas


@router.get("")
async def get_disponibilidad(
    fecha: str | None = Query(None),
    desde: str | None = Query(None),
    hasta: str | None = Query(None),
    modo: str | None = Query(None),
    include_inactive: int = Query(0),
    store: Store = Depends(get_store),
) -> dict | list:
    """Three read modes: one day's free hours, days with availability, or slot detail."""
    if fecha is not None:
        key = _require_date(fecha, "fecha").isoformat()
        horas = sorted(h for (f, h), r in store.slots.items() if f == key and r.activo and not r.ocupada)
        return {"fecha": key, "horas": horas}

    if desde is None or hasta is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Debes indicar fecha o rango desde/hasta",
        )
    start = _require_date(desde, "desde").isoformat()
    end = _require_date(hasta, "hasta").isoformat()
    in_range = sorted(
        (((f, h), r) for (f, h), r in store.slots.items() if start <= f <= end),
        key=lambda item: item[0],
    )

    if modo == "dias":
        return sorted({f for (f, _), r in in_range if r.activo and not r.ocupada})

    return [
        {"fecha": f, "hora": h, "activo": int(r.activo), "ocupada": int(r.ocupada)}
        for (f, h), r in in_range
        if include_inactive or r.activo
    ]


@router.post("", response_model=BulkResult)
async def create_disponibilidad(
    body: BulkRequest,
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> BulkResult:
    fechas, horas = _validated_pairs(body)
    total = sum(store.enable(f, h) for f in fechas for h in horas)
    logger.info("%s enabled %d slot(s)", admin.username, total)
    return BulkResult(message="Disponibilidad creada", total=total)


@router.delete("", response_model=BulkResult)
async def delete_disponibilidad(
    body: BulkRequest,
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> BulkResult:
    fechas, horas = _validated_pairs(body)
    total = sum(store.disable(f, h) for f in fechas for h in horas)
    logger.info("%s disabled %d slot(s)", admin.username, total)
    return BulkResult(message="Disponibilidad eliminada", total=total)
