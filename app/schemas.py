from datetime import datetime
from typing import Annotated
from annotated_types import Ge, Le
from pydantic import BaseModel, ConfigDict, Field

# ---------- Reusable type aliases ----------
# ids are INTEGER columns; anything wider cannot name a row
MAX_ROW_ID = 2_147_483_647
PositiveInt = Annotated[int, Ge(1)]
RowId = Annotated[int, Ge(1), Le(MAX_ROW_ID)]



class BookingBody(BaseModel):
   room_id: RowId = Field(alias="roomId")

class RoomRead(BaseModel):
   id: int
   name: str
   capacity: PositiveInt
   hotel_id: int = Field(serialization_alias="hotelId")
   created_at: datetime = Field(serialization_alias="createdAt")
   updated_at: datetime = Field(serialization_alias="updatedAt")

   model_config = ConfigDict(from_attributes=True)

class BookingRead(BaseModel):
   id: int
   room: RoomRead = Field(serialization_alias="Room")

   model_config = ConfigDict(from_attributes=True)

class BookingIdRead(BaseModel):
   booking_id: int = Field(serialization_alias="bookingId")
