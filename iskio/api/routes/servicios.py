from fastapi import APIRouter, Depends, HTTPException, status

from iskio.api.deps import get_store, require_admin
from iskio.api.store import Store
from iskio.models.auth import AuthUser
from iskio.models.service import CreatedResponse, ServicePayload

router = APIRouter(tags=["servicios"])

_FLAGS = ("activo", "mostrar_servicios", "mostrar_empresas")


def _to_wire(service_id: int, data: dict) -> dict:
    """Flags go out as 0/1, the way the production API sends them."""
    row = {"id": service_id, **data}
    for flag in _FLAGS:
        row[flag] = int(bool(row.get(flag)))
    return row


@router.get("/servicios")
async def list_servicios(store: Store = Depends(get_store)) -> list[dict]:
    items = sorted(store.servicios.items(), key=lambda item: item[1].get("orden", 0))
    return [_to_wire(sid, data) for sid, data in items]


@router.post("/servicios", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_servicio(
    body: ServicePayload,
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> CreatedResponse:
    service_id = store.next_id()
    store.servicios[service_id] = body.model_dump()
    return CreatedResponse(id=service_id)


@router.put("/servicios/{service_id}")
async def update_servicio(
    service_id: int,
    body: ServicePayload,
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> dict:
    if service_id not in store.servicios:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servicio no encontrado")
    store.servicios[service_id].update(body.model_dump(exclude_unset=True))
    return {"message": "Servicio actualizado"}


@router.delete("/servicios/{service_id}")
async def delete_servicio(
    service_id: int,
    store: Store = Depends(get_store),
    admin: AuthUser = Depends(require_admin),
) -> dict:
    if store.servicios.pop(service_id, None) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Servicio no encontrado")
    return {"message": "Servicio eliminado"}


@router.get("/categorias")
async def list_categorias(store: Store = Depends(get_store)) -> list[dict]:
    items = sorted(store.categorias.items(), key=lambda item: item[1].get("orden", 0))
    return [{"id": cid, **data, "activo": int(bool(data.get("activo")))} for cid, data in items]
