from fastapi import APIRouter, Depends, status

from booking_engine.api.dependencies import (
    CANCEL_RESERVATION,
    CREATE_RESERVATION,
    LOOKUP_RESERVATION,
    get_use_cases,
)
from booking_engine.api.rate_limit import RateLimit
from booking_engine.api.schemas.reservations import (
    CancelReservationRequest,
    CancelReservationResponse,
    CreateReservationRequest,
    CreateReservationResponse,
    LookupReservationRequest,
    ReservationDetailResponse,
)
from booking_engine.application.result import Err

router = APIRouter()


@router.post(
    "/reservations",
    response_model=CreateReservationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(RateLimit(CREATE_RESERVATION))],
)
async def create_reservation(
    payload: CreateReservationRequest,
    use_cases=Depends(get_use_cases),
) -> CreateReservationResponse:
    result = await use_cases["create_reservation"].execute(payload.to_dto())
    if isinstance(result, Err):
        raise result.error
    created = result.value
    return CreateReservationResponse(
        reservation_id=created.reservation_id,
        reservation_number=created.reservation_number,
        customer_id=created.customer_id,
    )


@router.post(
    "/reservations/lookup",
    response_model=ReservationDetailResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(RateLimit(LOOKUP_RESERVATION))],
)
async def lookup_reservation(
    payload: LookupReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationDetailResponse:
    result = await use_cases["lookup_reservation"].execute(
        reservation_number=payload.reservation_number,
        email=str(payload.email),
    )
    if isinstance(result, Err):
        raise result.error
    return ReservationDetailResponse.from_details(result.value)


@router.post(
    "/reservations/{reservation_number}/cancel",
    response_model=CancelReservationResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(RateLimit(CANCEL_RESERVATION))],
)
async def cancel_reservation(
    reservation_number: str,
    payload: CancelReservationRequest,
    use_cases=Depends(get_use_cases),
) -> CancelReservationResponse:
    result = await use_cases["cancel_reservation"].execute(
        reservation_number=reservation_number,
        email=str(payload.email),
        reason=payload.reason,
    )
    if isinstance(result, Err):
        raise result.error
    return CancelReservationResponse.from_cancellation(result.value)
