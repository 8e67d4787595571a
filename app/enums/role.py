from enum import Enum


class Role(str, Enum):
    """Enum for the roles a user can hold"""

    STUDENT = "STUDENT"
    LANDLORD = "LANDLORD"
    ADMIN = "ADMIN"

    def __str__(self):
        return self.value
