"""Use cases do gateway Green-API."""

from app.use_cases.green_api.gateway import GreenApiGatewayUseCase

__all__ = ["GreenApiGatewayUseCase"]
