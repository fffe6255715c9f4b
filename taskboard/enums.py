import enum


class Priority(str, enum.Enum):
    """Priority level for a todo, declared from lowest to highest."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return list(Priority).index(self)


class StatusFilter(str, enum.Enum):
    ALL = "all"
    DONE = "done"
    UPCOMING = "upcoming"
