from enum import Enum

from pydantic import BaseModel

from iskio.models.common import Text


class CitaStatus(str, Enum):
    PENDIENTE = "pendiente"
    CONFIRMADA = "confirmada"
    CANCELADA = "cancelada"


class CitaCreate(BaseModel):
    nombre: str
    correo: str
    telefono: str
    fecha: str  # "YYYY-MM-DD 00:00:00"
    hora: str  # "HH:MM:00"
    servicio_id: int
    rut: str | None = None


class CitaCreated(BaseModel):
    message: str = ""
    cita_id: int


class AdminCita(BaseModel):
    id: int
    cliente: Text = ""
    correo: Text = ""
    telefono: Text = ""
    servicio: Text = ""
    servicio_id: int | None = None
    fecha: Text = ""
    hora: str | None = None
    estado: str = CitaStatus.PENDIENTE.value


class CitaUpdate(BaseModel):
    estado: CitaStatus | None = None
    fecha: str | None = None
    hora: str | None = None
    servicio_id: int | None = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str = ""
