"""Test container builder with selective unmocking."""

from dishka import AsyncContainer

from canopy.util.di import Component
from canopy.util.di.container import build_container, mockable_components


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked by default.

    Args:
        unmock: Components to use production implementations for

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit tests - in-memory comments, recorded notifications
        container = build_test_container()

        # Real webhook delivery, assumes NOTIFICATIONS__WEBHOOK_URL is set
        container = build_test_container(unmock={"notifications"})
    """
    unmock = unmock or set()
    available = mockable_components()
    unknown = unmock - available
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return build_container(mocked=available - unmock)
