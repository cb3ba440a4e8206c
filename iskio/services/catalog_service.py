import logging

from iskio.models.catalog import (
    CategoryGroup,
    Cta,
    DynamicCatalog,
    ListingContext,
    ServiceCard,
    ServiceListing,
    StaticCatalog,
)
from iskio.models.service import CreatedResponse, Service, ServiceCategory, ServicePayload
from iskio.services.api_client import ApiClient
from iskio.services.static_catalog import BUSINESS_SERVICES, PERSONAL_SERVICES

logger = logging.getLogger(__name__)

OTHER_GROUP_ID = "otros"
OTHER_GROUP_NAME = "Otros servicios"
OTHER_GROUP_DESCRIPTION = "Opciones adicionales disponibles para agendar."
DEFAULT_GROUP_DESCRIPTION = "Selecciona la experiencia ideal para ti."

_STATIC_DEFAULTS = {
    ListingContext.PERSONAL: PERSONAL_SERVICES,
    ListingContext.BUSINESS: BUSINESS_SERVICES,
}


async def list_services(api: ApiClient) -> list[Service]:
    data = await api.get("/servicios")
    return [Service.model_validate(item) for item in data or []]


async def list_categories(api: ApiClient) -> list[ServiceCategory]:
    data = await api.get("/categorias")
    return [ServiceCategory.model_validate(item) for item in data or []]


async def create_service(api: ApiClient, payload: ServicePayload) -> CreatedResponse:
    data = await api.post("/servicios", json=payload.model_dump())
    return CreatedResponse.model_validate(data)


async def update_service(api: ApiClient, service_id: int, payload: ServicePayload) -> dict:
    """Partial update: only fields explicitly set on ``payload`` are sent."""
    return await api.put(f"/servicios/{service_id}", json=payload.model_dump(exclude_unset=True))


async def delete_service(api: ApiClient, service_id: int) -> dict:
    return await api.delete(f"/servicios/{service_id}")


def is_visible(service: Service, context: ListingContext) -> bool:
    if not service.activo:
        return False
    if context == ListingContext.BUSINESS:
        return service.mostrar_empresas
    return service.mostrar_servicios


def service_card(service: Service) -> ServiceCard:
    return ServiceCard(
        title=(service.etiqueta or "").strip() or "Servicio",
        subtitle=(service.subtitulo or "").strip() or service.nombre,
        description=service.descripcion,
        bullets=service.beneficios,
        image=service.imagen_url or None,
        cta_primary=Cta(
            label=service.cta_primary_label or "Agendar",
            to=service.cta_primary_url or "/contacto",
        ),
        cta_secondary=Cta(
            label=service.cta_secondary_label or "Ver disponibilidad",
            to=service.cta_secondary_url or "/contacto",
        ),
    )


def _by_orden(services: list[Service]) -> list[Service]:
    return sorted(services, key=lambda s: s.orden)


def select_listing(services: list[Service], context: ListingContext) -> ServiceListing:
    """Visible services for a page, or the built-in cards when none qualify."""
    visible = [s for s in services if is_visible(s, context)]
    if not visible:
        logger.debug("No visible %s services; using static catalog", context.value)
        return StaticCatalog(cards=list(_STATIC_DEFAULTS[context]))
    return DynamicCatalog(cards=[service_card(s) for s in _by_orden(visible)])


def group_by_category(
    services: list[Service],
    categories: list[ServiceCategory],
    context: ListingContext = ListingContext.PERSONAL,
) -> list[CategoryGroup]:
    """Group visible services under active categories.

    Categories keep their ``orden``; empty ones are dropped. Services with no
    active category go to a trailing "Otros servicios" group. Returns an empty
    list when no service is visible.
    """
    visible = [s for s in services if is_visible(s, context)]
    if not visible:
        return []

    active = sorted((c for c in categories if c.activo), key=lambda c: c.orden)
    by_id = {c.id: c for c in active}
    grouped: dict[int, list[Service]] = {}
    without_category: list[Service] = []
    for service in visible:
        if service.categoria_id and service.categoria_id in by_id:
            grouped.setdefault(service.categoria_id, []).append(service)
        else:
            without_category.append(service)

    result: list[CategoryGroup] = []
    for category in by_id.values():
        items = grouped.get(category.id)
        if not items:
            continue
        result.append(
            CategoryGroup(
                id=str(category.id),
                name=category.nombre,
                description=category.descripcion or DEFAULT_GROUP_DESCRIPTION,
                items=[service_card(s) for s in _by_orden(items)],
            )
        )
    if without_category:
        result.append(
            CategoryGroup(
                id=OTHER_GROUP_ID,
                name=OTHER_GROUP_NAME,
                description=OTHER_GROUP_DESCRIPTION,
                items=[service_card(s) for s in _by_orden(without_category)],
            )
        )
    return result
