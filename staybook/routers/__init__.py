# API Routers
from staybook.routers import availability, reservations, admin, rooms, guests

__all__ = ['availability', 'reservations', 'admin', 'rooms', 'guests']
