from enum import Enum

class MaintenanceStatus(str, Enum):
    """Enum for different statuses of maintenance requests"""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"

    def __str__(self):
        return self.value
