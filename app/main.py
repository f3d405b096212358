from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import LOG_LEVEL
from app.database import engine, get_db
from app.models import Base

from fastapi import Depends, Path, status
from sqlalchemy.orm import Session
from app.auth import get_current_user_id
from app.errors import BookingError, to_http_exception
from app.repositories import (
    SqlBookingRepository,
    SqlEnrollmentRepository,
    SqlRoomRepository,
    SqlTicketRepository,
)
from app.schemas import BookingBody, BookingIdRead, BookingRead, MAX_ROW_ID
from app.services import BookingService, TicketEligibilityChecker
import logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield

app = FastAPI(title="Hotel Booking API", lifespan=lifespan)

logger = logging.getLogger("bookings")
logging.basicConfig(level=LOG_LEVEL, force=True)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # dev-friendly; tighten in prod
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold the raw exception object, which JSONResponse cannot encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    eligibility = TicketEligibilityChecker(SqlEnrollmentRepository(db), SqlTicketRepository(db))
    return BookingService(SqlBookingRepository(db), SqlRoomRepository(db), eligibility)


def booking_failure(e: Exception):
    # anything that is not a booking rule violation answers 404
    if not isinstance(e, BookingError):
        logger.warning(f"Booking request failed, error={type(e).__name__}")
    return to_http_exception(e)


@app.get("/health")
def health():
    return {"status": "ok"}

#Booking
@app.get("/booking", response_model=BookingRead, summary="Get the current user's booking")
def get_booking(
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
):
    try:
        return BookingRead.model_validate(service.get_booking(user_id))
    except Exception as e:
        raise booking_failure(e)


@app.post("/booking", response_model=BookingIdRead, summary="Book a room")
def post_booking(
    payload: BookingBody,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
    db: Session = Depends(get_db),
):
    try:
        booking = service.post_booking_room(user_id, payload.room_id)
        db.commit()
        return BookingIdRead(booking_id=booking.id)
    except Exception as e:
        raise booking_failure(e)


@app.put("/booking/{booking_id}", response_model=BookingIdRead, summary="Move a booking to another room")
def put_booking(
    payload: BookingBody,
    booking_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
    db: Session = Depends(get_db),
):
    try:
        booking = service.put_booking_room(user_id, booking_id, payload.room_id)
        db.commit()
        return BookingIdRead(booking_id=booking.id)
    except Exception as e:
        raise booking_failure(e)
