# app/errors.py
"""
Error taxonomy.
Validation errors surface to the caller (HTTP 422), lookups of unknown
courts or moves as HTTP 404.
Persistence and remote sync errors are contained inside the report log
and the replication task, they never reach status reads.
"""


class ParkPulseError(Exception):
    """Base class for all application errors."""


class InvalidLevel(ParkPulseError, ValueError):
    def __init__(self, level):
        self.level = level
        super().__init__(f"Invalid activity level {level!r}: expected one of Light, Medium, Busy")


class UnknownArea(ParkPulseError, ValueError):
    def __init__(self, area_id):
        self.area_id = area_id
        super().__init__(f"Unknown area '{area_id}'")


class InvalidHazardReport(ParkPulseError, ValueError):
    pass


class PersistenceWriteFailure(ParkPulseError):
    pass


class PersistenceReadFailure(ParkPulseError):
    pass


class RemoteSyncFailure(ParkPulseError):
    pass


class UnknownCourt(ParkPulseError, LookupError):
    def __init__(self, court_id):
        self.court_id = court_id
        super().__init__(f"Unknown court '{court_id}'")


class InvalidCourtUpdate(ParkPulseError, ValueError):
    pass


class UnknownMove(ParkPulseError, LookupError):
    def __init__(self, move_id):
        self.move_id = move_id
        super().__init__(f"Move {move_id} not found")


class InvalidMove(ParkPulseError, ValueError):
    pass
