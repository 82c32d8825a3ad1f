"""Current user as supplied by the identity provider."""

from pydantic import Field

from canopy.domain.model.common import DomainModel
from canopy.domain.value import UserId


class CurrentUser(DomainModel):
    """Authenticated user making a request.

    Canopy does not own accounts; this is what the verified token says.
    """

    id: UserId
    display_name: str = Field(min_length=1, max_length=255)
