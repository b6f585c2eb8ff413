"""Company entity."""

from onboard.domain.model.common import DomainModel
from onboard.domain.value import CompanyId


class Company(DomainModel):
    """Tenant that company admins and trainees belong to."""

    id: CompanyId
    name: str
