from __future__ import annotations
from typing import Optional

from wayfinder.shared.config.settings import settings
from wayfinder.shared.llm.structured import StructuredGenerationClient
from wayfinder.shared.places.gateway import PlacesConfig, PlacesGateway

_gateway: Optional[PlacesGateway] = None
_generator: Optional[StructuredGenerationClient] = None


def get_places_gateway() -> PlacesGateway:
    global _gateway
    if _gateway is None:
        _gateway = PlacesGateway(PlacesConfig.from_settings(settings))
    return _gateway


def get_generator() -> StructuredGenerationClient:
    global _generator
    if _generator is None:
        _generator = StructuredGenerationClient()
    return _generator
