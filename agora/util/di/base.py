"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal, Type

from dishka import Provider

# Infrastructure components that tests may swap for in-memory fakes
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for every Agora provider.

    A provider base that declares ``__mock_component__`` is swappable: its
    subclasses are the candidate implementations, told apart by
    ``__is_mock__``. A provider without subclasses is used as is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def implementation(cls, use_mock: bool = False) -> Type["ProviderBase"]:
        """Pick the concrete provider class for this base.

        Raises:
            ValueError: No subclass matches ``use_mock``
        """
        candidates = cls.__subclasses__()
        if not candidates:
            return cls

        for candidate in candidates:
            if candidate.__is_mock__ == use_mock:
                return candidate

        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {cls.__mock_component__ or cls.__name__}"
        )
