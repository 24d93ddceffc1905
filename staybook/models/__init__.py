# Ontology Models
from staybook.models.ontology import (
    RoomType, Room, GuestProfile, Reservation, RoomNight, SystemSetting
)

__all__ = [
    'RoomType', 'Room', 'GuestProfile', 'Reservation', 'RoomNight', 'SystemSetting'
]
