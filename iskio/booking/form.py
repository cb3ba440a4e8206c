"""Public booking form: contact fields, calendar, hour picker and submission.

The form keeps the availability it last fetched and exposes the same derived
flags the UI renders (disabled days, ``no_slots``, ``can_submit``). Days and
hours are fetched with a monotonically increasing request id; a response is
applied only if no newer request was issued meanwhile.
"""
import logging
from collections.abc import Callable
from datetime import date
from enum import Enum

from iskio.core.config import settings
from iskio.core.dates import date_key, month_bounds, sunday_first_weekday
from iskio.core.errors import ApiError, FormValidationError, error_message
from iskio.models.cita import CitaCreate
from iskio.models.service import Service
from iskio.services.api_client import ApiClient
from iskio.services.availability_service import (
    get_disponibilidad_por_fecha,
    list_dias_disponibles,
)
from iskio.services.catalog_service import list_services
from iskio.services.cita_service import create_cita

logger = logging.getLogger(__name__)

_WEEKDAY_NAMES = ["domingo", "lunes", "martes", "miércoles", "jueves", "viernes", "sábado"]
_MONTH_NAMES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

SUBMIT_ERROR = "Error al agendar la cita"
INCOMPLETE_ERROR = "Completa todos los campos obligatorios."
UNAVAILABLE_DAY_ERROR = "La fecha seleccionada no esta disponible."
UNAVAILABLE_HOUR_ERROR = "La hora seleccionada no esta disponible."


class BookingState(str, Enum):
    IDLE = "idle"
    LOADING_HOURS = "loading-hours"
    HOURS_READY = "hours-ready"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


def time_label(time: str) -> str:
    """12-hour label: "13:00" -> "01:00 PM"."""
    hour_text, _, minute = time.partition(":")
    try:
        hour = int(hour_text)
    except ValueError:
        return time
    period = "PM" if hour >= 12 else "AM"
    display_hour = ((hour + 11) % 12) + 1
    return f"{display_hour:02d}:{minute or '00'} {period}"


def format_long_date(day: date) -> str:
    """Spanish long date, e.g. "lunes, 10 de marzo de 2025"."""
    return (
        f"{_WEEKDAY_NAMES[sunday_first_weekday(day)]}, "
        f"{day.day} de {_MONTH_NAMES[day.month - 1]} de {day.year}"
    )


class BookingForm:
    CONTACT_FIELDS = ("rut", "nombre", "correo", "telefono")

    def __init__(
        self,
        api: ApiClient,
        today: Callable[[], date] = date.today,
        closed_weekdays: list[int] | None = None,
    ) -> None:
        self.api = api
        self.today = today
        self.closed_weekdays = set(
            settings.closed_weekdays if closed_weekdays is None else closed_weekdays
        )

        self.rut = ""
        self.nombre = ""
        self.correo = ""
        self.telefono = ""
        self.servicio_id = ""
        self.date: date | None = None
        self.time = ""

        self.services: list[Service] = []
        self.calendar_month: date = today()
        self.available_days: set[str] = set()
        self.days_loaded = False
        self.available_times: list[str] = []
        self.is_loading_times = False

        self.state = BookingState.IDLE
        self.success_message: str | None = None
        self.error_message: str | None = None

        self._days_request = 0
        self._hours_request = 0

    # Fields

    def set_field(self, name: str, value: str) -> None:
        if name not in (*self.CONTACT_FIELDS, "servicio_id"):
            raise ValueError(f"Unknown booking field: {name}")
        setattr(self, name, value)

    @property
    def can_submit(self) -> bool:
        required = [getattr(self, f) for f in (*self.CONTACT_FIELDS, "servicio_id")]
        return all(v.strip() for v in required) and self.date is not None and bool(self.time)

    @property
    def is_submitting(self) -> bool:
        return self.state == BookingState.SUBMITTING

    @property
    def no_slots(self) -> bool:
        return self.date is not None and not self.is_loading_times and not self.available_times

    # Services

    async def load_services(self) -> list[Service]:
        try:
            data = await list_services(self.api)
        except ApiError as e:
            logger.warning("Could not load services: %s", e.message)
            data = []
        self.services = [s for s in data if s.activo]
        if not self.servicio_id and self.services:
            self.servicio_id = str(self.services[0].id)
        return self.services

    # Calendar

    async def set_month(self, month: date) -> None:
        """Show ``month`` and fetch which of its days have availability."""
        self.calendar_month = month
        self.days_loaded = False
        self._days_request += 1
        request_id = self._days_request

        start, end = month_bounds(month)
        try:
            dias = set(await list_dias_disponibles(self.api, start, end))
        except ApiError as e:
            logger.warning("Could not load available days: %s", e.message)
            dias = set()

        if request_id != self._days_request:
            logger.debug("Discarding stale days response for %s", date_key(month)[:7])
            return
        self.available_days = dias
        self.days_loaded = True

    def is_day_disabled(self, day: date) -> bool:
        if day < self.today() or sunday_first_weekday(day) in self.closed_weekdays:
            return True
        # Until the month's days arrive nothing else is disabled.
        if self.days_loaded:
            return date_key(day) not in self.available_days
        return False

    async def select_date(self, day: date | None) -> None:
        self.date = day
        self.time = ""
        self._hours_request += 1
        request_id = self._hours_request

        if day is None:
            self.available_times = []
            self.is_loading_times = False
            self.state = BookingState.IDLE
            return
        if self.is_day_disabled(day):
            self.date = None
            self.available_times = []
            self.is_loading_times = False
            self.state = BookingState.IDLE
            raise FormValidationError(UNAVAILABLE_DAY_ERROR)

        self.state = BookingState.LOADING_HOURS
        self.is_loading_times = True
        try:
            horas = await get_disponibilidad_por_fecha(self.api, day)
        except ApiError as e:
            logger.warning("Could not load hours for %s: %s", day, e.message)
            horas = []

        if request_id != self._hours_request:
            logger.debug("Discarding stale hours response for %s", day)
            return
        self.available_times = horas
        self.is_loading_times = False
        self.state = BookingState.HOURS_READY

    def select_time(self, hour: str) -> None:
        if self.date is None or hour not in self.available_times:
            raise FormValidationError(UNAVAILABLE_HOUR_ERROR)
        self.time = hour

    # Submission

    def _payload(self, day: date) -> CitaCreate:
        return CitaCreate(
            rut=self.rut.strip(),
            nombre=self.nombre.strip(),
            correo=self.correo.strip(),
            telefono=self.telefono.strip(),
            servicio_id=int(self.servicio_id),
            fecha=f"{date_key(day)} 00:00:00",
            hora=f"{self.time}:00",
        )

    def _reset(self) -> None:
        self.rut = ""
        self.nombre = ""
        self.correo = ""
        self.telefono = ""
        self.date = None
        self.time = ""
        self.available_times = []
        self.is_loading_times = False
        self._hours_request += 1

    async def submit(self) -> bool:
        """Post the appointment. Errors are kept in ``error_message``; no retry."""
        if self.is_submitting:
            return False
        self.error_message = None
        self.success_message = None
        booked_date, booked_time = self.date, self.time
        if booked_date is None or not self.can_submit:
            self.error_message = INCOMPLETE_ERROR
            self.state = BookingState.ERROR
            return False

        self.state = BookingState.SUBMITTING
        try:
            await create_cita(self.api, self._payload(booked_date))
        except (ApiError, ValueError) as e:
            self.error_message = error_message(e, SUBMIT_ERROR)
            self.state = BookingState.ERROR
            return False

        self.success_message = (
            f"Reserva confirmada para el {format_long_date(booked_date)} "
            f"a las {time_label(booked_time)}."
        )
        self._reset()
        self.state = BookingState.SUCCESS
        logger.info("Booked %s %s", date_key(booked_date), booked_time)
        return True
