"""Company repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from onboard.domain.model.company import Company
from onboard.domain.value import CompanyId


class CompanyRepository(ABC):
    """Read-only access to companies."""

    @abstractmethod
    async def find_by_id(self, company_id: CompanyId) -> Optional[Company]:
        pass
