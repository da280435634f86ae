"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components a test container can swap between mock and production
Component = Literal["github", "casdoor", "persistence", "redis"]


class ProviderBase(Provider):
    """Provider tagged with the component it belongs to.

    A mockable component is a base class naming ``__mock_component__`` with
    one production and one mock subclass; ``get_provider`` picks between them
    by ``__is_mock__``. Concrete providers leave both unset.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
