"""Provider metadata shared by every DI provider."""

from typing import ClassVar, Literal, Type

from dishka import Provider

# Components with a production and an in-process test implementation
Component = Literal["clock", "persistence"]


class ProviderBase(Provider):
    """Provider carrying the metadata used to pick implementations.

    A provider class with no subclasses is used as is. A mockable component
    is declared as a base class naming ``__mock_component__`` with one
    subclass per implementation, told apart by ``__is_mock__``.
    ``__depends_on__`` names components that must be switched to their real
    implementation together with this one.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[set[Component]] = set()


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Return the provider class to instantiate for ``base``.

    Raises:
        ValueError: If ``base`` has implementations but none of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ is use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"{base.__mock_component__ or base.__name__} has no {kind} implementation"
    )
