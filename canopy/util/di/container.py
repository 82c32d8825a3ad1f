"""Container assembly.

The production service and the test suite build their containers the same
way; they only differ in which mockable components are swapped for fakes.
"""

from collections.abc import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from canopy.util.di import PROVIDERS, Component, get_provider


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.is_mockable() and base.__mock_component__ is not None
    }


def build_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build a container, using mocks for the ``mocked`` components.

    Mock providers register themselves by subclassing a component base, so
    the module defining them must be imported before ``mocked`` names them.

    Raises:
        ValueError: If a named component is unknown or has no mock
    """
    unknown = set(mocked) - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]
    # FastapiProvider makes the incoming Request resolvable in REQUEST scope
    return make_async_container(*providers, FastapiProvider())


def create_container() -> AsyncContainer:
    """Build the production container."""
    return build_container()


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Install ``container`` on ``app`` for ``FromDishka`` injection."""
    setup_dishka(container, app)
