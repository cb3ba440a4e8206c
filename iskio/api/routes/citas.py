import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iskio.api.deps import get_store, require_admin
from iskio.api.store import CitaRecord, Store
from iskio.core.dates import parse_date_key
from iskio.models.auth import AuthUser
from iskio.models.cita import AdminCita, CitaCreate, CitaCreated, CitaStatus, CitaUpdate, SuccessResponse
from iskio.models.common import normalize_hour

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/citas", tags=["citas"])


def _to_admin(cita: CitaRecord, store: Store) -> AdminCita:
    servicio = store.servicios.get(cita.servicio_id, {})
    return AdminCita(
        id=cita.id,
        cliente=cita.nombre,
        correo=cita.correo,
        telefono=cita.telefono,
        servicio=servicio.get("nombre", ""),
        servicio_id=cita.servicio_id,
        fecha=cita.fecha,
        hora=cita.hora,
        estado=cita.estado,
    )


def _get_or_404(store: Store, cita_id: int) -> CitaRecord:
    cita = store.citas.get(cita_id)
    if not cita:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cita no encontrada")
    return cita


@router.post("", response_model=CitaCreated, status_code=status.HTTP_201_CREATED)
async def create_cita(body: CitaCreate, store: Store = Depends(get_store)) -> CitaCreated:
    day = parse_date_key(body.fecha)
    if day is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Fecha invalida")
    if body.servicio_id not in store.servicios:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Servicio invalido")
    fecha, hora = day.isoformat(), normalize_hour(body.hora)
    if not store.is_bookable(fecha, hora):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="El horario seleccionado no esta disponible",
        )
    cita = CitaRecord(
        id=store.next_id(),
        nombre=body.nombre,
        correo=body.correo,
        telefono=body.telefono,
        servicio_id=body.servicio_id,
        fecha=fecha,
        hora=hora,
        rut=body.rut,
    )
    store.citas[cita.id] = cita
    store.set_occupied(fecha, hora, True)
    logger.info("Cita %d booked for %s %s", cita.id, fecha, hora)
    return CitaCreated(message="Cita creada", cita_id=cita.id)


@router.get("", response_model=list[AdminCita])
async def list_citas(
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> list[AdminCita]:
    citas = sorted(store.citas.values(), key=lambda c: (c.fecha, c.hora))
    return [_to_admin(c, store) for c in citas]


@router.put("", response_model=SuccessResponse)
async def update_cita(
    body: CitaUpdate,
    cita_id: int = Query(..., alias="id"),
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> SuccessResponse:
    cita = _get_or_404(store, cita_id)
    if body.estado is not None:
        cita.estado = CitaStatus(body.estado).value
    if body.fecha is not None:
        cita.fecha = body.fecha[:10]
    if body.hora is not None:
        cita.hora = normalize_hour(body.hora)
    if body.servicio_id is not None:
        cita.servicio_id = body.servicio_id
    return SuccessResponse(success=True, message="Cita actualizada")


@router.delete("", response_model=SuccessResponse)
async def delete_cita(
    cita_id: int = Query(..., alias="id"),
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> SuccessResponse:
    cita = _get_or_404(store, cita_id)
    del store.citas[cita.id]
    store.set_occupied(cita.fecha, cita.hora, False)
    return SuccessResponse(success=True, message="Cita eliminada")
