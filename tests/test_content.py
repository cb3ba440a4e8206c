import json

import httpx
import pytest

from iskio.core.errors import ApiError
from iskio.models.cita import CitaCreate, CitaStatus, CitaUpdate
from iskio.models.content import InstagramPayload, InstagramPost
from iskio.services.availability_service import create_disponibilidad, get_disponibilidad_por_fecha
from iskio.services.cita_service import create_cita, delete_cita, list_citas, set_cita_status, update_cita
from iskio.services.content_service import (
    create_instagram_post,
    current_home_content,
    delete_home_content,
    list_instagram_posts,
    visible_posts,
)
from iskio.services.dashboard_service import fetch_citas_hoy, fetch_overview, fetch_top_servicios


def _booking(hora: str = "10:00:00") -> CitaCreate:
    return CitaCreate(
        nombre="Ana",
        correo="ana@example.com",
        telefono="+56 9 1234 5678",
        fecha="2025-03-10 00:00:00",
        hora=hora,
        servicio_id=200,
        rut="12.345.678-9",
    )


def test_visible_posts_filters_and_orders():
    posts = [
        InstagramPost(id=1, embed_url="https://instagram.com/p/a", activo=1, orden=2),
        InstagramPost(id=2, embed_url="", activo=1, orden=0),
        InstagramPost(id=3, embed_url="https://instagram.com/p/c", activo=0, orden=1),
        InstagramPost(id=4, embed_url="https://instagram.com/p/d", activo="1", orden=1),
    ]
    assert [p.id for p in visible_posts(posts)] == [4, 1]


async def test_instagram_list_decodes_flags(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[{"id": 7, "embed_url": "https://instagram.com/p/x", "activo": "0", "orden": None}],
        )

    (post,) = await list_instagram_posts(mock_api(handler))
    assert post.activo is False
    assert post.orden == 0


async def test_create_instagram_post_trims_url(mock_api):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": 9})

    created = await create_instagram_post(
        mock_api(handler), InstagramPayload(embed_url="  https://instagram.com/p/y  ", orden=3)
    )
    assert created.id == 9
    assert seen["body"] == {"embed_url": "https://instagram.com/p/y", "activo": True, "orden": 3}


async def test_current_home_content_is_first_entry(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {"id": 1, "titulo": "Bienvenida", "subtitulo": None, "imagen_url": None},
                {"id": 2, "titulo": "Otra"},
            ],
        )

    content = await current_home_content(mock_api(handler))
    assert content.titulo == "Bienvenida"
    assert content.subtitulo == ""


async def test_no_home_content(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    assert await current_home_content(mock_api(handler)) is None


async def test_delete_home_content_uses_id_query(mock_api):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["id"] = request.url.params["id"]
        return httpx.Response(200, json={"success": True})

    await delete_home_content(mock_api(handler), 5)
    assert seen == {"method": "DELETE", "id": "5"}


async def test_dashboard_overview(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/overview"):
            return httpx.Response(
                200,
                json={
                    "total_citas": 12,
                    "citas_hoy": 2,
                    "clientes": 9,
                    "servicios": 4,
                    "top_servicios_30d": [
                        {"servicio_id": 200, "servicio_nombre": "Masaje relajante", "total_citas": "5"}
                    ],
                },
            )
        return httpx.Response(200, json=None)

    api = mock_api(handler)
    overview = await fetch_overview(api)
    assert overview.total_citas == 12
    assert overview.top_servicios_30d[0].total_citas == 5
    assert await fetch_citas_hoy(api) == []


async def test_admin_manages_citas(admin_api):
    await create_disponibilidad(admin_api, ["2025-03-10"], ["10:00"])
    created = await create_cita(admin_api, _booking())

    (cita,) = await list_citas(admin_api)
    assert cita.id == created.cita_id
    assert (cita.cliente, cita.servicio, cita.estado) == ("Ana", "Masaje relajante", "pendiente")

    await set_cita_status(admin_api, cita.id, "confirmada")
    await update_cita(admin_api, cita.id, CitaUpdate(hora="10:00:00"))
    (cita,) = await list_citas(admin_api)
    assert cita.estado == CitaStatus.CONFIRMADA.value

    await delete_cita(admin_api, cita.id)
    assert await list_citas(admin_api) == []
    assert await get_disponibilidad_por_fecha(admin_api, "2025-03-10") == ["10:00"]


async def test_booking_unknown_slot_conflicts(api):
    with pytest.raises(ApiError) as excinfo:
        await create_cita(api, _booking("18:00:00"))
    assert excinfo.value.status_code == 409


async def test_cita_list_requires_admin(api):
    with pytest.raises(ApiError) as excinfo:
        await list_citas(api)
    assert excinfo.value.is_unauthorized


async def test_dashboard_lists_are_models(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/top-servicios"):
            return httpx.Response(
                200,
                json=[
                    {"servicio_id": 200, "servicio_nombre": "Masaje relajante", "total_citas": 7},
                    {"servicio_id": 201, "servicio_nombre": None, "total_citas": None},
                ],
            )
        return httpx.Response(
            200,
            json=[{"id": 3, "cliente": "Ana", "servicio": "Masaje relajante", "hora": "10:00:00"}],
        )

    api = mock_api(handler)
    top = await fetch_top_servicios(api)
    assert [(t.servicio_id, t.servicio_nombre, t.total_citas) for t in top] == [
        (200, "Masaje relajante", 7),
        (201, "", 0),
    ]
    (cita,) = await fetch_citas_hoy(api)
    assert (cita.id, cita.cliente, cita.estado) == (3, "Ana", "pendiente")
