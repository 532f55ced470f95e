"""
Base, generic classes supporting other more specialized classes.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

__all__ = [
    "AbstractDataclass",
    "SpcEntity",
    "SpcSyntaxError",
]


@dataclass
class AbstractDataclass(ABC):
    """An abstract base class for dataclasses."""

    def __new__(cls, *args, **kwargs):
        if cls == AbstractDataclass or cls.__bases__[0] == AbstractDataclass:
            raise TypeError("Cannot instantiate abstract class.")
        return super().__new__(cls)


class SpcEntity(ABC):
    """An abstract base class for objects that directly represent an entity in SPC file format."""

    @abstractmethod
    def to_spc_string(self) -> str:
        """Convert the object to its string representation in SPC file format."""
        pass


class SpcSyntaxError(ValueError):
    """Raised when a line of SPC text does not follow the SPC grammar."""

    pass
