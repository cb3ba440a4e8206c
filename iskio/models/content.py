from pydantic import BaseModel

from iskio.models.common import IntOrZero, Text, WireBool


class HomeContentBase(BaseModel):
    titulo: Text = ""
    subtitulo: Text = ""
    imagen_url: Text = ""
    video_embed: Text = ""


class HomeContent(HomeContentBase):
    id: int | str
    actualizado_en: str | None = None


class HomeContentPayload(HomeContentBase):
    pass


class InstagramPostBase(BaseModel):
    embed_url: Text = ""
    activo: WireBool = False
    orden: IntOrZero = 0


class InstagramPost(InstagramPostBase):
    id: int | str
    actualizado_en: str | None = None


class InstagramPayload(InstagramPostBase):
    activo: WireBool = True


class TopService(BaseModel):
    servicio_id: int
    servicio_nombre: Text = ""
    total_citas: IntOrZero = 0


class DashboardOverview(BaseModel):
    total_citas: int | None = None
    citas_hoy: int | None = None
    clientes: int | None = None
    servicios: int | None = None
    top_servicios_30d: list[TopService] = []
