"""Value object bases.

Identities, visitor keys and global post ids are compared by value and
never mutated once built.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Frozen pydantic model compared by field values."""

    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Frozen wrapper around one primitive, read through ``.root``."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
