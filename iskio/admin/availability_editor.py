import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import date, timedelta

from iskio.core.config import settings
from iskio.core.dates import date_key, parse_date_key, sunday_first_weekday
from iskio.core.errors import ApiError, error_message
from iskio.models.availability import AvailabilitySlot
from iskio.services.api_client import ApiClient
from iskio.services.availability_service import (
    create_disponibilidad,
    delete_disponibilidad,
    list_slots_disponibles,
)

logger = logging.getLogger(__name__)


def build_date_range(
    start: date | str | None, end: date | str | None, weekdays: Iterable[int]
) -> list[str]:
    """Date keys from start to end inclusive whose weekday (0=Sunday) is selected."""
    start_date = start if isinstance(start, date) else parse_date_key(start)
    end_date = end if isinstance(end, date) else parse_date_key(end)
    if start_date is None or end_date is None or start_date > end_date:
        return []

    selected = set(weekdays)
    result: list[str] = []
    cursor = start_date
    while cursor <= end_date:
        if sunday_first_weekday(cursor) in selected:
            result.append(date_key(cursor))
        cursor += timedelta(days=1)
    return result


def _toggle(items: list, value) -> list:
    return [i for i in items if i != value] if value in items else [*items, value]


class AvailabilityEditor:
    """Admin view over a date range of slots with bulk enable/disable.

    Every mutation is followed by a full reload of the range; local state is
    never patched optimistically. While one mutation is in flight (``loading``)
    further mutations are ignored.
    """

    def __init__(self, api: ApiClient, today: Callable[[], date] = date.today) -> None:
        self.api = api
        start = today()
        self.desde = date_key(start)
        self.hasta = date_key(start + timedelta(days=settings.editor_default_span_days))
        self.weekdays: list[int] = list(settings.editor_default_weekdays)
        self.hours: list[str] = list(settings.default_hours)
        self.slots: list[AvailabilitySlot] = []
        self.loading = False
        self.message: str | None = None
        self.error: str | None = None

    def toggle_weekday(self, value: int) -> None:
        self.weekdays = _toggle(self.weekdays, value)

    def toggle_hour(self, value: str) -> None:
        self.hours = _toggle(self.hours, value)

    @property
    def selected_dates(self) -> list[str]:
        return build_date_range(self.desde, self.hasta, self.weekdays)

    @property
    def total_slots(self) -> int:
        return len(self.selected_dates) * len(self.hours)

    @property
    def grouped_slots(self) -> dict[str, list[AvailabilitySlot]]:
        groups: dict[str, list[AvailabilitySlot]] = {}
        for slot in self.slots:
            groups.setdefault(slot.fecha, []).append(slot)
        return groups

    def day_has_active(self, fecha: str) -> bool:
        return any(s.activo for s in self.grouped_slots.get(fecha, []))

    def _start(self) -> None:
        self.loading = True
        self.error = None
        self.message = None

    async def load_slots(self) -> bool:
        if not self.desde or not self.hasta:
            self.message = None
            self.error = "Debes definir un rango de fechas."
            return False
        self._start()
        try:
            self.slots = await list_slots_disponibles(
                self.api, self.desde, self.hasta, include_inactive=True
            )
            return True
        except ApiError as e:
            self.error = error_message(e, "Error al cargar disponibilidad")
            return False
        finally:
            self.loading = False

    async def _mutate(self, action: Callable[[], Awaitable[str]], fallback_error: str) -> bool:
        """Run one mutation, record its message, then reload the range."""
        if self.loading:
            logger.debug("Mutation ignored while another is in flight")
            return False
        self._start()
        try:
            message = await action()
        except ApiError as e:
            self.error = error_message(e, fallback_error)
            self.loading = False
            return False
        await self.load_slots()
        self.message = message
        return True

    async def save(self) -> bool:
        """Enable every selected date × hour."""
        dates, hours = self.selected_dates, list(self.hours)
        if not dates or not hours:
            self.message = None
            self.error = "Selecciona fechas y horas validas."
            return False

        async def action() -> str:
            result = await create_disponibilidad(self.api, dates, hours)
            logger.info("Enabled %d slot(s) over %d day(s)", result.total, len(dates))
            return f"Horarios habilitados: {result.total}"

        return await self._mutate(action, "Error al guardar horarios")

    async def delete(self) -> bool:
        """Disable every selected date × hour."""
        dates, hours = self.selected_dates, list(self.hours)
        if not dates or not hours:
            self.message = None
            self.error = "Selecciona fechas y horas validas."
            return False

        async def action() -> str:
            result = await delete_disponibilidad(self.api, dates, hours)
            logger.info("Disabled %d slot(s) over %d day(s)", result.total, len(dates))
            return f"Horarios bloqueados: {result.total}"

        return await self._mutate(action, "Error al eliminar horarios")

    def hours_for_day(self, fecha: str) -> list[str]:
        """Hours already recorded for ``fecha``, or the default list."""
        group = self.grouped_slots.get(fecha)
        if not group:
            return list(settings.default_hours)
        return list(dict.fromkeys(s.hora for s in group))

    async def toggle_day(self, fecha: str, active: bool) -> bool:
        hours = self.hours_for_day(fecha)
        if not hours:
            return False

        async def action() -> str:
            if active:
                result = await create_disponibilidad(self.api, [fecha], hours)
                return f"Dia habilitado ({result.total})"
            result = await delete_disponibilidad(self.api, [fecha], hours)
            return f"Dia bloqueado ({result.total})"

        return await self._mutate(action, "Error al actualizar dia")

    async def toggle_slot(self, slot: AvailabilitySlot) -> bool:
        async def action() -> str:
            if slot.activo:
                await delete_disponibilidad(self.api, [slot.fecha], [slot.hora])
                return "Hora bloqueada"
            await create_disponibilidad(self.api, [slot.fecha], [slot.hora])
            return "Hora habilitada"

        return await self._mutate(action, "Error al actualizar horario")
