# Park Pulse — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.kv_record import KeyValueRecord             # noqa
from app.models.hazard_report import HazardReport           # noqa
from app.models.parking_occupancy import ParkingOccupancy   # noqa
from app.models.court_state import CourtState, CourtComment  # noqa
from app.models.move import Move, MoveComment               # noqa
