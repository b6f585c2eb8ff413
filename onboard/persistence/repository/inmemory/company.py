"""In-memory company repository for testing."""

from typing import Optional

from onboard.domain.model import Company
from onboard.domain.repository import CompanyRepository
from onboard.domain.value import CompanyId


class InMemoryCompanyRepository(CompanyRepository):
    """Companies are seeded directly through ``add``."""

    def __init__(self) -> None:
        self._companies: dict[CompanyId, Company] = {}

    def add(self, company: Company) -> Company:
        self._companies[company.id] = company
        return company

    async def find_by_id(self, company_id: CompanyId) -> Optional[Company]:
        return self._companies.get(company_id)
