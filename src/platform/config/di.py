"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.booking.app.command.booking_session import BookingSession
from src.service.booking.driven_adapter.gateway.http_booking_gateway import HttpBookingGateway


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Museum API client (one httpx connection pool per process)
    booking_gateway = providers.Singleton(
        HttpBookingGateway,
        base_url=config_service.provided.API_BASE_URL,
        timeout_seconds=config_service.provided.API_TIMEOUT_SECONDS,
    )

    # One booking session per visitor
    booking_session = providers.Factory(
        BookingSession,
        gateway=booking_gateway,
        booking_source=config_service.provided.BOOKING_SOURCE,
        max_concurrent_probes=config_service.provided.MAX_CONCURRENT_AVAILABILITY_PROBES,
    )
