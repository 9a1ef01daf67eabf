"""
HTTP Booking Gateway

httpx client for the museum API. Translates HTTP failures into the platform
exception hierarchy so the booking core never sees httpx types.
"""

from typing import Any, List, Optional, Type, TypeVar

import httpx
import orjson
from pydantic import BaseModel, TypeAdapter

from src.platform.exception.exceptions import (
    GatewayError,
    GatewayValidationError,
    NetworkError,
    NotFoundError,
    ServerError,
)
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.dto.create_booking_payload import CreateBookingPayload
from src.service.booking.app.interface.i_booking_gateway import IBookingGateway
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.ticket_type_entity import TicketType
from src.service.booking.domain.entity.time_slot_entity import TimeSlot
from src.service.booking.driven_adapter.gateway.schema import (
    BookingSchema,
    TicketTypeSchema,
    TimeSlotSchema,
)


_SchemaT = TypeVar('_SchemaT', bound=BaseModel)


class HttpBookingGateway(IBookingGateway):
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={'Content-Type': 'application/json', 'Accept': 'application/json'},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    @Logger.io
    async def get_ticket_types(self) -> List[TicketType]:
        data = await self._request('GET', '/tickets/types')
        return self._parse_list(TicketTypeSchema, data)

    @Logger.io
    async def get_time_slots(self, *, ticket_type_id: str, iso_date: str) -> List[TimeSlot]:
        data = await self._request(
            'GET', f'/tickets/time-slots/{ticket_type_id}', params={'date': iso_date}
        )
        return self._parse_list(TimeSlotSchema, data)

    @Logger.io
    async def create_booking(self, *, payload: CreateBookingPayload) -> Booking:
        data = await self._request('POST', '/bookings', body=payload.to_json_dict())
        return self._parse(BookingSchema, data)

    @Logger.io
    async def get_booking(self, *, booking_id: str) -> Booking:
        data = await self._request('GET', f'/bookings/{booking_id}')
        return self._parse(BookingSchema, data)

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[dict[str, str]] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                endpoint,
                params=params,
                content=orjson.dumps(body) if body is not None else None,
            )
        except httpx.TimeoutException as e:
            raise NetworkError('Request timeout', endpoint) from e
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or 'Network connection failed', endpoint) from e

        if response.is_error:
            raise self._to_gateway_error(response, endpoint)
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        content_type = response.headers.get('content-type', '')
        if 'application/json' in content_type and response.content:
            try:
                return orjson.loads(response.content)
            except orjson.JSONDecodeError:
                return {'message': response.text}
        return {'message': response.text or 'Success'}

    @staticmethod
    def _to_gateway_error(response: httpx.Response, endpoint: str) -> GatewayError:
        data = HttpBookingGateway._decode(response) if response.content else None
        detail = None
        if isinstance(data, dict):
            detail = data.get('detail') or data.get('message')
        if not detail:
            detail = f'HTTP {response.status_code}: {response.reason_phrase}'
        elif not isinstance(detail, str):
            # FastAPI 422 bodies carry a list of field errors
            detail = str(detail)

        status_code = response.status_code
        if status_code == 404:
            return NotFoundError(detail, endpoint)
        if status_code in (400, 422):
            return GatewayValidationError(detail, status_code, endpoint)
        if status_code >= 500:
            return ServerError(detail, status_code, endpoint)
        return GatewayError(detail, status_code, endpoint)

    @staticmethod
    def _parse(schema: Type[_SchemaT], data: Any) -> Any:
        # ValueError covers both pydantic ValidationError and entity invariants
        try:
            return schema.model_validate(data).to_entity()  # type: ignore[attr-defined]
        except ValueError as e:
            raise ServerError(f'Malformed {schema.__name__} response: {e}') from e

    @staticmethod
    def _parse_list(schema: Type[_SchemaT], data: Any) -> List[Any]:
        try:
            items = TypeAdapter(List[schema]).validate_python(data)  # type: ignore[valid-type]
            return [item.to_entity() for item in items]  # type: ignore[attr-defined]
        except ValueError as e:
            raise ServerError(f'Malformed {schema.__name__} list response: {e}') from e
