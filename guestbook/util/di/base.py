"""Provider base class and implementation lookup."""

from typing import ClassVar, Literal, Type

from dishka import Provider

# Swappable infrastructure; "persistence" is PostgreSQL vs the in-memory store
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Root of every guestbook provider.

    A provider with no subclasses is concrete and used as is. A provider
    that names a ``__mock_component__`` is an abstract slot filled by one
    production subclass and, in the test tree, one subclass flagged with
    ``__is_mock__``.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False


def get_provider(base: Type[ProviderBase], use_mock: bool = False) -> Type[ProviderBase]:
    """Pick the provider class that fills ``base``.

    Args:
        base: A concrete provider or a component slot
        use_mock: Pick the mock implementation of a component slot

    Raises:
        ValueError: If the slot has no implementation of the requested kind
    """
    candidates = [c for c in base.__subclasses__() if c.__is_mock__ == use_mock]
    if not base.__subclasses__():
        return base
    if candidates:
        return candidates[0]

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} provider for {base.__mock_component__ or base.__name__}")
