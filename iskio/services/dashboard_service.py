from iskio.models.cita import AdminCita
from iskio.models.content import DashboardOverview, TopService
from iskio.services.api_client import ApiClient


async def fetch_overview(api: ApiClient) -> DashboardOverview:
    data = await api.get("/dashboard/overview")
    return DashboardOverview.model_validate(data or {})


async def fetch_citas_hoy(api: ApiClient) -> list[AdminCita]:
    """Today's citas, in the same row shape as the admin cita list."""
    data = await api.get("/dashboard/citas-hoy")
    return [AdminCita.model_validate(item) for item in data or []]


async def fetch_top_servicios(api: ApiClient) -> list[TopService]:
    data = await api.get("/dashboard/top-servicios")
    return [TopService.model_validate(item) for item in data or []]
