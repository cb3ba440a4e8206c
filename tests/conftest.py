import os
from datetime import date

import httpx
import pytest

# Minimum bcrypt cost keeps the per-test seeded admin cheap to hash.
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from iskio.api.store import Store, seeded_store  # noqa: E402
from iskio.core.config import settings  # noqa: E402
from iskio.core.session import AuthSession  # noqa: E402
from iskio.core.storage import MemoryStore  # noqa: E402
from iskio.main import create_app  # noqa: E402
from iskio.services.api_client import ApiClient  # noqa: E402
from iskio.services.auth_service import login  # noqa: E402

BASE_URL = "http://testserver/api"
TODAY = date(2025, 3, 3)  # a Monday


@pytest.fixture
def store() -> Store:
    store = seeded_store()
    store.categorias[100] = {"nombre": "Masajes", "descripcion": None, "activo": True, "orden": 1}
    store.servicios[200] = {
        "nombre": "Masaje relajante",
        "descripcion": "Sesion de 60 minutos",
        "beneficios": ["Reduce estres"],
        "activo": True,
        "orden": 1,
        "categoria_id": 100,
        "mostrar_servicios": True,
        "mostrar_empresas": False,
    }
    return store


@pytest.fixture
def session() -> AuthSession:
    return AuthSession(MemoryStore(), MemoryStore())


@pytest.fixture
async def api(store, session):
    transport = httpx.ASGITransport(app=create_app(store))
    client = ApiClient(session, base_url=BASE_URL, transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
async def admin_api(api):
    await login(api, settings.admin_username, settings.admin_password)
    return api


@pytest.fixture
async def mock_api(session):
    """Factory for an ApiClient whose requests are answered by ``handler``."""
    clients: list[ApiClient] = []

    def make(handler) -> ApiClient:
        client = ApiClient(session, base_url=BASE_URL, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield make
    for client in clients:
        await client.aclose()
