from iskio.models.cita import AdminCita, CitaCreate, CitaCreated, CitaStatus, CitaUpdate, SuccessResponse
from iskio.services.api_client import ApiClient


async def create_cita(api: ApiClient, payload: CitaCreate) -> CitaCreated:
    data = await api.post("/citas", json=payload.model_dump(exclude_none=True))
    return CitaCreated.model_validate(data)


async def list_citas(api: ApiClient) -> list[AdminCita]:
    data = await api.get("/citas")
    return [AdminCita.model_validate(item) for item in data or []]


async def update_cita(api: ApiClient, cita_id: int, payload: CitaUpdate) -> SuccessResponse:
    data = await api.put(
        "/citas",
        json=payload.model_dump(mode="json", exclude_none=True),
        params={"id": cita_id},
    )
    return SuccessResponse.model_validate(data or {})


async def set_cita_status(api: ApiClient, cita_id: int, estado: CitaStatus | str) -> SuccessResponse:
    return await update_cita(api, cita_id, CitaUpdate(estado=CitaStatus(estado)))


async def delete_cita(api: ApiClient, cita_id: int) -> SuccessResponse:
    data = await api.delete("/citas", params={"id": cita_id})
    return SuccessResponse.model_validate(data or {})
