# Business Services
from staybook.services.inventory_service import InventoryService
from staybook.services.reservation_store import ReservationStore
from staybook.services.availability_service import AvailabilityService
from staybook.services.price_service import PriceService
from staybook.services.guest_service import GuestService
from staybook.services.reservation_service import ReservationService
