from pydantic import BaseModel

from iskio.models.common import Hour, WireBool


class AvailabilitySlot(BaseModel):
    fecha: str  # YYYY-MM-DD
    hora: Hour  # HH:MM
    activo: WireBool = False
    ocupada: WireBool = False

    @property
    def status_label(self) -> str:
        if self.ocupada:
            return "Ocupada"
        if self.activo:
            return "Disponible"
        return "Bloqueada"


class DayHours(BaseModel):
    fecha: str = ""
    horas: list[Hour] | None = None


class BulkRequest(BaseModel):
    fechas: list[str]
    horas: list[str]


class BulkResult(BaseModel):
    message: str = ""
    total: int = 0
