from iskio.models.auth import AuthUser, LoginResponse, MeResponse
from iskio.models.availability import AvailabilitySlot, BulkRequest, BulkResult
from iskio.models.cita import AdminCita, CitaCreate, CitaCreated, CitaStatus, CitaUpdate
from iskio.models.content import DashboardOverview, HomeContent, InstagramPost
from iskio.models.service import Service, ServiceCategory, ServicePayload

__all__ = [
    "AuthUser",
    "LoginResponse",
    "MeResponse",
    "AvailabilitySlot",
    "BulkRequest",
    "BulkResult",
    "AdminCita",
    "CitaCreate",
    "CitaCreated",
    "CitaStatus",
    "CitaUpdate",
    "DashboardOverview",
    "HomeContent",
    "InstagramPost",
    "Service",
    "ServiceCategory",
    "ServicePayload",
]
