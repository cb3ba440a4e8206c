"""In-memory state behind the reference API. One instance per app."""
from dataclasses import dataclass, field
from typing import Any

from iskio.core.config import settings
from iskio.core.security import hash_password
from iskio.models.auth import AuthUser


@dataclass
class SlotRecord:
    activo: bool = True
    ocupada: bool = False


@dataclass
class CitaRecord:
    id: int
    nombre: str
    correo: str
    telefono: str
    servicio_id: int
    fecha: str
    hora: str
    rut: str | None = None
    estado: str = "pendiente"


@dataclass
class Store:
    users: dict[int, tuple[AuthUser, str]] = field(default_factory=dict)  # user, bcrypt hash
    slots: dict[tuple[str, str], SlotRecord] = field(default_factory=dict)
    citas: dict[int, CitaRecord] = field(default_factory=dict)
    servicios: dict[int, dict[str, Any]] = field(default_factory=dict)
    categorias: dict[int, dict[str, Any]] = field(default_factory=dict)
    _next_id: int = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def find_user(self, username: str) -> tuple[AuthUser, str] | None:
        for user, password in self.users.values():
            if user.username == username:
                return user, password
        return None

    def enable(self, fecha: str, hora: str) -> bool:
        """Create or reactivate one slot. Returns whether anything changed."""
        record = self.slots.get((fecha, hora))
        if record is None:
            self.slots[(fecha, hora)] = SlotRecord()
            return True
        if not record.activo:
            record.activo = True
            return True
        return False

    def disable(self, fecha: str, hora: str) -> bool:
        """Deactivate one free slot. Occupied slots are left alone."""
        record = self.slots.get((fecha, hora))
        if record is None or not record.activo or record.ocupada:
            return False
        record.activo = False
        return True

    def is_bookable(self, fecha: str, hora: str) -> bool:
        record = self.slots.get((fecha, hora))
        return record is not None and record.activo and not record.ocupada

    def set_occupied(self, fecha: str, hora: str, ocupada: bool) -> None:
        record = self.slots.get((fecha, hora))
        if record is not None:
            record.ocupada = ocupada


def seeded_store() -> Store:
    store = Store()
    admin_id = store.next_id()
    store.users[admin_id] = (
        AuthUser(id=admin_id, username=settings.admin_username, rol="admin", email=settings.admin_email),
        hash_password(settings.admin_password),
    )
    return store
