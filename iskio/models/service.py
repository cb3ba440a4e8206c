from pydantic import BaseModel

from iskio.models.common import Benefits, FloatOrZero, IntOrZero, Text, WireBool


class ServiceBase(BaseModel):
    nombre: Text = ""
    etiqueta: str | None = None
    subtitulo: str | None = None
    descripcion: Text = ""
    beneficios: Benefits = []
    imagen_url: Text = ""
    precio: FloatOrZero = 0
    activo: WireBool = False
    orden: IntOrZero = 0
    categoria_id: int | None = None
    mostrar_servicios: WireBool = False
    mostrar_empresas: WireBool = False
    cta_primary_label: str | None = None
    cta_primary_url: str | None = None
    cta_secondary_label: str | None = None
    cta_secondary_url: str | None = None


class Service(ServiceBase):
    id: int


class ServicePayload(ServiceBase):
    """Body for create and update; unset fields are left out of updates."""

    activo: WireBool = True


class ServiceCategory(BaseModel):
    id: int
    nombre: Text = ""
    descripcion: str | None = None
    imagen_url: str | None = None
    activo: WireBool = False
    orden: IntOrZero = 0


class CreatedResponse(BaseModel):
    id: int | str
