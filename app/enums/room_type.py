from enum import Enum


class RoomType(str, Enum):
    """Enum for different types of rooms"""

    SINGLE = "SINGLE"
    SELF_CON = "SELF_CON"
    MINI_FLAT = "MINI_FLAT"

    def __str__(self):
        return self.value
