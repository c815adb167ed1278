from enum import Enum


class OrderDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UnknownValuePolicy(str, Enum):
    """What to do with a database value of a kind the projector does not know."""

    DROP = "drop"
    STRINGIFY = "stringify"
