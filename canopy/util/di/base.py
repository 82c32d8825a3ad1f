"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal, Self

from dishka import Provider

# Infrastructure that tests swap for in-memory fakes
Component = Literal["notifications", "persistence"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider class with subclasses is a mockable component: its subclasses
    are the production and mock implementations, told apart by ``__is_mock__``.
    A provider class without subclasses is used as is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        """Whether implementations of this component exist."""
        return bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool = False) -> type[Self]:
        """Pick the production or mock implementation of this component.

        Raises:
            ValueError: If no implementation of the requested kind exists
        """
        if not cls.is_mockable():
            return cls

        impl = next(
            (c for c in cls.__subclasses__() if c.__is_mock__ == use_mock), None
        )
        if impl is None:
            kind = "mock" if use_mock else "production"
            name = cls.__mock_component__ or cls.__name__
            raise ValueError(f"No {kind} implementation for {name}")
        return impl
