from cardsift.api.cards import router as cards_router
from cardsift.api.health import router as health_router
from cardsift.api.maintenance import router as maintenance_router

__all__ = [
    "cards_router",
    "health_router",
    "maintenance_router",
]
