"""Built-in cards shown when the API has no visible services for a listing."""
from iskio.models.catalog import Cta, ServiceCard

PERSONAL_SERVICES: list[ServiceCard] = [
    ServiceCard(
        title="Masaje",
        subtitle="Drenaje Linfático",
        description=(
            "Técnica suave orientada a estimular el sistema linfático para apoyar "
            "la eliminación de líquidos y la sensación de liviandad corporal."
        ),
        bullets=[
            "Mejora la circulación linfática",
            "Apoya la reducción de inflamación",
            "Favorece la sensación de descanso",
        ],
        cta_primary=Cta(label="Agendar", to="/contacto"),
        cta_secondary=Cta(label="Ver disponibilidad", to="/contacto"),
    ),
    ServiceCard(
        title="Masaje",
        subtitle="Descontracturante",
        description=(
            "Ideal para aliviar tensión muscular en espalda, cuello y hombros."
        ),
        bullets=[
            "Alivia dolor y tensión muscular",
            "Mejora postura y flexibilidad",
            "Reduce estrés acumulado",
        ],
        cta_primary=Cta(label="Reservar ahora", to="/contacto"),
        cta_secondary=Cta(label="Hablar por WhatsApp", to="/contacto"),
    ),
    ServiceCard(
        title="Masaje",
        subtitle="Relajante",
        description=(
            "Una experiencia tranquila para desconectar, bajar el estrés y "
            "mejorar el bienestar general."
        ),
        bullets=[
            "Reduce estrés y ansiedad",
            "Mejora el descanso y ánimo",
            "Favorece la relajación profunda",
        ],
        cta_primary=Cta(label="Agendar", to="/contacto"),
        cta_secondary=Cta(label="Ver servicios", to="/servicios"),
    ),
    ServiceCard(
        title="Giftcard",
        subtitle="Experiencia de regalo",
        description="Regala una experiencia de bienestar equivalente a un masaje.",
        bullets=[
            "Regalo útil y memorable",
            "Perfecto para fechas especiales",
        ],
        cta_primary=Cta(label="Comprar / Consultar", to="/contacto"),
        cta_secondary=Cta(label="Empresas (beneficios)", to="/empresas"),
    ),
]

BUSINESS_SERVICES: list[ServiceCard] = [
    ServiceCard(
        title="Masaje",
        subtitle="Descontracturante (Oficina)",
        description="Sesiones breves en la oficina para liberar tensión del trabajo.",
        bullets=["Menos tensión cervical", "Pausa activa para equipos"],
        cta_primary=Cta(label="Cotizar para empresas", to="/empresas"),
        cta_secondary=Cta(label="Hablar por WhatsApp", to="/contacto"),
    ),
    ServiceCard(
        title="Masaje",
        subtitle="Deportivo (Equipos / Actividad)",
        description="Apoyo muscular para activaciones, corridas y eventos deportivos.",
        bullets=["Preparación y recuperación", "Atención en terreno"],
        cta_primary=Cta(label="Cotizar evento", to="/empresas"),
        cta_secondary=Cta(label="Hablar por WhatsApp", to="/contacto"),
    ),
    ServiceCard(
        title="Giftcard",
        subtitle="Para colaboradores",
        description="Beneficios de bienestar para reconocer a tu equipo.",
        bullets=["Regalo corporativo", "Coordinación simple"],
        cta_primary=Cta(label="Quiero giftcards", to="/empresas"),
        cta_secondary=Cta(label="Consultar", to="/contacto"),
    ),
]
