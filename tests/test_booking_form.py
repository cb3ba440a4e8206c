import asyncio
from datetime import date, timedelta

import httpx
import pytest

from iskio.booking.form import BookingForm, BookingState, format_long_date, time_label
from iskio.core.errors import FormValidationError
from iskio.models.cita import CitaCreate
from iskio.services.availability_service import create_disponibilidad, get_disponibilidad_por_fecha
from iskio.services.cita_service import create_cita

TODAY = date(2025, 3, 3)  # Monday


def _hours_handler(request: httpx.Request) -> httpx.Response:
    params = request.url.params
    if "fecha" in params:
        return httpx.Response(200, json={"fecha": params["fecha"], "horas": ["10:00", "11:00"]})
    if params.get("modo") == "dias":
        return httpx.Response(200, json=[])
    return httpx.Response(200, json=[])


@pytest.fixture
def form(mock_api) -> BookingForm:
    return BookingForm(mock_api(_hours_handler), today=lambda: TODAY)


def _fill_contact(form: BookingForm) -> None:
    form.set_field("rut", "12.345.678-9")
    form.set_field("nombre", "Ana")
    form.set_field("correo", "ana@example.com")
    form.set_field("telefono", "+56 9 1234 5678")
    form.set_field("servicio_id", "200")


async def test_can_submit_requires_every_field(form):
    assert not form.can_submit
    _fill_contact(form)
    assert not form.can_submit

    await form.select_date(date(2025, 3, 10))
    assert not form.can_submit
    form.select_time("10:00")
    assert form.can_submit

    form.set_field("telefono", "   ")
    assert not form.can_submit


async def test_changing_date_clears_hour(form):
    await form.select_date(date(2025, 3, 10))
    form.select_time("11:00")

    await form.select_date(date(2025, 3, 11))
    assert form.time == ""
    assert form.state == BookingState.HOURS_READY


async def test_clearing_date_returns_to_idle(form):
    await form.select_date(date(2025, 3, 10))
    await form.select_date(None)
    assert form.state == BookingState.IDLE
    assert form.available_times == []


async def test_unknown_field_is_rejected(form):
    with pytest.raises(ValueError):
        form.set_field("email", "x")


async def test_hour_must_be_offered(form):
    await form.select_date(date(2025, 3, 10))
    with pytest.raises(FormValidationError):
        form.select_time("19:00")


async def test_empty_month_disables_every_open_day(form):
    # Before the month's days arrive only past days and Sundays are disabled.
    assert not form.is_day_disabled(date(2025, 3, 4))
    assert form.is_day_disabled(date(2025, 3, 9))

    await form.set_month(date(2025, 3, 1))

    assert form.days_loaded
    day = date(2025, 3, 1)
    while day.month == 3:
        assert form.is_day_disabled(day), day
        day += timedelta(days=1)


async def test_past_days_and_sundays_always_disabled(form):
    form.available_days = {"2025-03-02", "2025-03-09", "2025-03-10"}
    form.days_loaded = True
    assert form.is_day_disabled(date(2025, 3, 2))  # past and Sunday
    assert form.is_day_disabled(date(2025, 3, 9))  # Sunday
    assert not form.is_day_disabled(date(2025, 3, 10))


async def test_disabled_day_cannot_be_selected(form):
    with pytest.raises(FormValidationError):
        await form.select_date(date(2025, 3, 9))
    assert form.date is None


async def test_day_without_hours_is_not_an_error(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"fecha": request.url.params["fecha"], "horas": []})

    form = BookingForm(mock_api(handler), today=lambda: TODAY)
    await form.select_date(date(2025, 3, 10))
    assert form.state == BookingState.HOURS_READY
    assert form.no_slots
    assert form.error_message is None


async def test_stale_hours_response_is_ignored(mock_api):
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        fecha = request.url.params["fecha"]
        if fecha == "2025-03-10":
            await release.wait()
            return httpx.Response(200, json={"fecha": fecha, "horas": ["10:00"]})
        return httpx.Response(200, json={"fecha": fecha, "horas": ["15:00", "16:00"]})

    form = BookingForm(mock_api(handler), today=lambda: TODAY)
    first = asyncio.create_task(form.select_date(date(2025, 3, 10)))
    await asyncio.sleep(0)
    await form.select_date(date(2025, 3, 11))
    release.set()
    await first

    assert form.date == date(2025, 3, 11)
    assert form.available_times == ["15:00", "16:00"]
    assert form.state == BookingState.HOURS_READY


async def test_failed_days_fetch_counts_as_empty(mock_api):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    form = BookingForm(mock_api(handler), today=lambda: TODAY)
    await form.set_month(date(2025, 3, 1))
    assert form.days_loaded
    assert form.is_day_disabled(date(2025, 3, 10))


async def test_incomplete_submit_sends_nothing(mock_api):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    form = BookingForm(mock_api(handler), today=lambda: TODAY)
    assert not await form.submit()
    assert form.state == BookingState.ERROR
    assert calls == []


async def test_submit_books_slot_and_keeps_service(admin_api):
    await create_disponibilidad(admin_api, ["2025-03-10"], ["10:00", "11:00"])
    form = BookingForm(admin_api, today=lambda: TODAY)

    await form.load_services()
    assert form.servicio_id == "200"

    await form.set_month(date(2025, 3, 1))
    assert not form.is_day_disabled(date(2025, 3, 10))
    assert form.is_day_disabled(date(2025, 3, 11))

    await form.select_date(date(2025, 3, 10))
    assert form.available_times == ["10:00", "11:00"]
    form.select_time("11:00")
    _fill_contact(form)

    assert await form.submit()
    assert form.state == BookingState.SUCCESS
    assert form.success_message == (
        "Reserva confirmada para el lunes, 10 de marzo de 2025 a las 11:00 AM."
    )
    assert form.servicio_id == "200"
    assert (form.nombre, form.date, form.time) == ("", None, "")
    assert await get_disponibilidad_por_fecha(admin_api, "2025-03-10") == ["10:00"]


async def test_submit_failure_keeps_form_and_shows_server_text(admin_api):
    await create_disponibilidad(admin_api, ["2025-03-10"], ["10:00"])
    form = BookingForm(admin_api, today=lambda: TODAY)
    await form.select_date(date(2025, 3, 10))
    form.select_time("10:00")
    _fill_contact(form)

    # Someone else takes the slot first.
    await create_cita(
        admin_api,
        CitaCreate(
            nombre="Otro",
            correo="otro@example.com",
            telefono="1",
            fecha="2025-03-10 00:00:00",
            hora="10:00:00",
            servicio_id=200,
        ),
    )

    assert not await form.submit()
    assert form.state == BookingState.ERROR
    assert "no esta disponible" in form.error_message
    assert form.nombre == "Ana"
    assert form.time == "10:00"


def test_time_label():
    assert time_label("13:00") == "01:00 PM"
    assert time_label("10:30") == "10:30 AM"
    assert time_label("12:00") == "12:00 PM"
    assert time_label("00:00") == "12:00 AM"


def test_format_long_date():
    assert format_long_date(date(2025, 3, 9)) == "domingo, 9 de marzo de 2025"


async def test_rejected_day_stops_pending_hours_load(mock_api):
    started, release = asyncio.Event(), asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await release.wait()
        return httpx.Response(200, json={"fecha": request.url.params["fecha"], "horas": ["10:00"]})

    form = BookingForm(mock_api(handler), today=lambda: TODAY)
    pending = asyncio.create_task(form.select_date(date(2025, 3, 10)))
    await started.wait()
    assert form.is_loading_times

    with pytest.raises(FormValidationError):
        await form.select_date(date(2025, 3, 9))
    release.set()
    await pending

    assert not form.is_loading_times
    assert form.date is None
    assert form.available_times == []
    assert form.state == BookingState.IDLE
