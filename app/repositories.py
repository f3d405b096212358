from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.models import BookingDB, EnrollmentDB, RoomDB, TicketDB


class BookingRepository(ABC):
    """Bookings by user and by room."""

    @abstractmethod
    def find_by_id(self, booking_id: int) -> Optional[BookingDB]:
        raise NotImplementedError

    @abstractmethod
    def find_by_user_id(self, user_id: int) -> Optional[BookingDB]:
        """Returns the user's booking with its room loaded, or None."""
        raise NotImplementedError

    @abstractmethod
    def find_by_room_id(self, room_id: int) -> List[BookingDB]:
        """Returns every booking currently referencing the room."""
        raise NotImplementedError

    @abstractmethod
    def create(self, user_id: int, room_id: int) -> BookingDB:
        raise NotImplementedError

    @abstractmethod
    def update_room(self, booking_id: int, room_id: int) -> BookingDB:
        """Moves an existing booking to another room."""
        raise NotImplementedError


class RoomRepository(ABC):

    @abstractmethod
    def find_by_id(self, room_id: int) -> Optional[RoomDB]:
        raise NotImplementedError


class EnrollmentRepository(ABC):

    @abstractmethod
    def find_by_user_id(self, user_id: int) -> Optional[EnrollmentDB]:
        raise NotImplementedError


class TicketRepository(ABC):

    @abstractmethod
    def find_by_enrollment_id(self, enrollment_id: int) -> Optional[TicketDB]:
        """Returns the enrollment's ticket with its ticket type loaded, or None."""
        raise NotImplementedError


# ----------------------------
# SQLAlchemy implementations
# ----------------------------

class SqlBookingRepository(BookingRepository):
    # Writes are flushed, never committed; the request handler owns the transaction.

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_id(self, booking_id: int) -> Optional[BookingDB]:
        return self.db.get(BookingDB, booking_id)

    def find_by_user_id(self, user_id: int) -> Optional[BookingDB]:
        stmt = (
            select(BookingDB)
            .where(BookingDB.user_id == user_id)
            .options(selectinload(BookingDB.room))
            .order_by(BookingDB.id)
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def find_by_room_id(self, room_id: int) -> List[BookingDB]:
        stmt = select(BookingDB).where(BookingDB.room_id == room_id).order_by(BookingDB.id)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, room_id: int) -> BookingDB:
        booking = BookingDB(user_id=user_id, room_id=room_id)
        self.db.add(booking)
        self.db.flush()
        return booking

    def update_room(self, booking_id: int, room_id: int) -> BookingDB:
        booking = self.db.get(BookingDB, booking_id)
        if booking is None:
            raise LookupError(f"booking {booking_id} does not exist")
        booking.room_id = room_id
        self.db.flush()
        self.db.refresh(booking)
        return booking


class SqlRoomRepository(RoomRepository):

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_id(self, room_id: int) -> Optional[RoomDB]:
        return self.db.get(RoomDB, room_id)


class SqlEnrollmentRepository(EnrollmentRepository):

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_user_id(self, user_id: int) -> Optional[EnrollmentDB]:
        stmt = select(EnrollmentDB).where(EnrollmentDB.user_id == user_id)
        return self.db.execute(stmt).scalars().first()


class SqlTicketRepository(TicketRepository):

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_enrollment_id(self, enrollment_id: int) -> Optional[TicketDB]:
        stmt = (
            select(TicketDB)
            .where(TicketDB.enrollment_id == enrollment_id)
            .options(selectinload(TicketDB.ticket_type))
        )
        return self.db.execute(stmt).scalars().first()
