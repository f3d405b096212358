import logging

from app.errors import CannotBookingError, NotFoundError
from app.models import BookingDB, RoomDB, TicketStatus
from app.repositories import (
    BookingRepository,
    EnrollmentRepository,
    RoomRepository,
    TicketRepository,
)

logger = logging.getLogger("bookings")


class TicketEligibilityChecker:
    """Decides whether a user's enrollment and ticket grant a hotel room.

    Only a paid, in-person ticket whose type includes the hotel qualifies.
    Nothing is cached; every call reads the current enrollment and ticket.
    """

    def __init__(self, enrollment_repo: EnrollmentRepository, ticket_repo: TicketRepository):
        self.enrollment_repo = enrollment_repo
        self.ticket_repo = ticket_repo

    def ensure_can_book(self, user_id: int) -> None:
        enrollment = self.enrollment_repo.find_by_user_id(user_id)
        if enrollment is None:
            raise CannotBookingError("User has no enrollment.")

        ticket = self.ticket_repo.find_by_enrollment_id(enrollment.id)
        if ticket is None:
            raise CannotBookingError("User has no ticket.")
        if ticket.status == TicketStatus.RESERVED:
            raise CannotBookingError("Ticket has not been paid.")
        if ticket.ticket_type.is_remote:
            raise CannotBookingError("Remote tickets do not include a hotel.")
        if not ticket.ticket_type.includes_hotel:
            raise CannotBookingError("Ticket type does not include a hotel.")

    def can_book(self, user_id: int) -> bool:
        try:
            self.ensure_can_book(user_id)
        except CannotBookingError:
            return False
        return True


class BookingService:
    """Admission control for hotel room bookings."""

    def __init__(
        self,
        booking_repo: BookingRepository,
        room_repo: RoomRepository,
        eligibility: TicketEligibilityChecker,
    ):
        self.booking_repo = booking_repo
        self.room_repo = room_repo
        self.eligibility = eligibility

    def get_booking(self, user_id: int) -> BookingDB:
        booking = self.booking_repo.find_by_user_id(user_id)
        if booking is None:
            raise NotFoundError("User has no booking.")
        return booking

    def post_booking_room(self, user_id: int, room_id: int) -> BookingDB:
        try:
            self.eligibility.ensure_can_book(user_id)
        except CannotBookingError as e:
            logger.info(f"Booking rejected user_id={user_id} room_id={room_id}: {e.message}")
            raise

        room = self._find_room(room_id)
        self._ensure_vacancy(room, user_id=user_id)

        booking = self.booking_repo.create(user_id, room.id)
        logger.info(f"Booking created booking_id={booking.id} user_id={user_id} room_id={room.id}")
        return booking

    def put_booking_room(self, user_id: int, booking_id: int, room_id: int) -> BookingDB:
        room = self._find_room(room_id)

        booking = self.booking_repo.find_by_id(booking_id)
        if booking is None or booking.user_id != user_id:
            logger.info(f"Booking change rejected user_id={user_id} booking_id={booking_id}: not the owner")
            raise CannotBookingError("User does not own this booking.")

        # the booking being moved never counts against its own target room
        self._ensure_vacancy(room, user_id=user_id, exclude_booking_id=booking.id)

        updated = self.booking_repo.update_room(booking.id, room.id)
        logger.info(f"Booking moved booking_id={booking.id} user_id={user_id} room_id={room.id}")
        return updated

    def _find_room(self, room_id: int) -> RoomDB:
        room = self.room_repo.find_by_id(room_id)
        if room is None:
            raise NotFoundError("Room not found.")
        return room

    def _ensure_vacancy(self, room: RoomDB, *, user_id: int, exclude_booking_id: int | None = None) -> None:
        occupants = [b for b in self.booking_repo.find_by_room_id(room.id) if b.id != exclude_booking_id]
        if len(occupants) >= room.capacity:
            logger.info(f"Booking rejected user_id={user_id} room_id={room.id}: room is full ({room.capacity})")
            raise CannotBookingError("Room is at full capacity.")
