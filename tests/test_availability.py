import pytest

from iskio.core.errors import ApiError
from iskio.models.cita import CitaCreate
from iskio.services.availability_service import (
    create_disponibilidad,
    delete_disponibilidad,
    get_disponibilidad_por_fecha,
    list_dias_disponibles,
    list_slots_disponibles,
)
from iskio.services.cita_service import create_cita


async def test_created_slots_are_listed_active_and_free(admin_api):
    result = await create_disponibilidad(admin_api, ["2025-03-10"], ["10:00", "11:00"])
    assert result.total == 2

    slots = await list_slots_disponibles(admin_api, "2025-03-10", "2025-03-10")
    assert [(s.fecha, s.hora, s.activo, s.ocupada) for s in slots] == [
        ("2025-03-10", "10:00", True, False),
        ("2025-03-10", "11:00", True, False),
    ]


async def test_bulk_create_is_a_cross_product(admin_api):
    result = await create_disponibilidad(
        admin_api, ["2025-03-10", "2025-03-11"], ["10:00", "11:00", "12:00"]
    )
    assert result.total == 6
    assert await list_dias_disponibles(admin_api, "2025-03-01", "2025-03-31") == [
        "2025-03-10",
        "2025-03-11",
    ]


async def test_create_then_delete_restores_inactive_state(admin_api):
    payload = (["2025-03-12"], ["15:00", "16:00"])
    await create_disponibilidad(admin_api, *payload)
    await delete_disponibilidad(admin_api, *payload)

    slots = await list_slots_disponibles(admin_api, "2025-03-12", "2025-03-12", include_inactive=True)
    assert slots and not any(s.activo for s in slots)
    assert await list_slots_disponibles(admin_api, "2025-03-12", "2025-03-12") == []


async def test_repeated_create_changes_nothing(admin_api):
    await create_disponibilidad(admin_api, ["2025-03-13"], ["10:00"])
    again = await create_disponibilidad(admin_api, ["2025-03-13"], ["10:00"])
    assert again.total == 0


async def test_hours_for_a_day_exclude_booked_slots(admin_api, store):
    await create_disponibilidad(admin_api, ["2025-03-14"], ["10:00", "11:00"])
    await create_cita(
        admin_api,
        CitaCreate(
            nombre="Ana",
            correo="ana@example.com",
            telefono="+56 9 1111 1111",
            fecha="2025-03-14 00:00:00",
            hora="10:00:00",
            servicio_id=200,
        ),
    )

    assert await get_disponibilidad_por_fecha(admin_api, "2025-03-14") == ["11:00"]
    slots = await list_slots_disponibles(admin_api, "2025-03-14", "2025-03-14")
    assert [(s.hora, s.ocupada) for s in slots] == [("10:00", True), ("11:00", False)]


async def test_occupied_slot_survives_bulk_delete(admin_api):
    await create_disponibilidad(admin_api, ["2025-03-15"], ["12:00"])
    await create_cita(
        admin_api,
        CitaCreate(
            nombre="Ana",
            correo="ana@example.com",
            telefono="1",
            fecha="2025-03-15 00:00:00",
            hora="12:00:00",
            servicio_id=200,
        ),
    )
    result = await delete_disponibilidad(admin_api, ["2025-03-15"], ["12:00"])
    assert result.total == 0


async def test_day_without_availability_has_no_hours(api):
    assert await get_disponibilidad_por_fecha(api, "2025-03-20") == []


async def test_bulk_create_requires_login(api, session):
    with pytest.raises(ApiError) as excinfo:
        await create_disponibilidad(api, ["2025-03-10"], ["10:00"])
    assert excinfo.value.status_code == 401
    assert session.get_access_token() is None


async def test_invalid_hour_is_rejected(admin_api):
    with pytest.raises(ApiError) as excinfo:
        await create_disponibilidad(admin_api, ["2025-03-10"], ["diez"])
    assert excinfo.value.status_code == 400
