"""Participation service - events, claims, and claim links."""

from src.services.participation.service import (
    ParticipationService,
    generate_qr_code_data,
    get_participation_service,
)

__all__ = ["ParticipationService", "generate_qr_code_data", "get_participation_service"]
