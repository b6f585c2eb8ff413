"""Company and user name lookups used when rendering notifications."""

from typing import Optional

import logfire

from onboard.domain.error import NotFoundError
from onboard.domain.model import Company
from onboard.domain.repository import CompanyRepository, UserRepository
from onboard.domain.value import CompanyId, UserId
from onboard.util.cache import NameCache

from .base import Service


class DirectoryService(Service):
    """Resolves companies and display names.

    Display names are read through a shared TTL cache; a renamed company may
    show its old name in emails until the entry lapses.
    """

    def __init__(
        self,
        company_repository: CompanyRepository,
        user_repository: UserRepository,
        name_cache: NameCache,
    ) -> None:
        self.company_repository = company_repository
        self.user_repository = user_repository
        self.name_cache = name_cache

    async def get_company(self, company_id: CompanyId) -> Company:
        """Get a company by ID.

        Raises:
            NotFoundError: If the company does not exist
        """
        with logfire.span(
            "directory_service.get_company", company_id=str(company_id)
        ):
            company = await self.company_repository.find_by_id(company_id)
            if company is None:
                logfire.warn("Company not found", company_id=str(company_id))
                raise NotFoundError("Company", str(company_id))
            self.name_cache.set(f"company:{company.id}", company.name)
            return company

    async def company_name(self, company_id: CompanyId) -> Optional[str]:
        async def load() -> Optional[str]:
            company = await self.company_repository.find_by_id(company_id)
            return company.name if company else None

        return await self.name_cache.get_or_load(f"company:{company_id}", load)

    async def user_name(self, user_id: UserId) -> Optional[str]:
        async def load() -> Optional[str]:
            user = await self.user_repository.find_by_id(user_id)
            return user.display_name if user else None

        return await self.name_cache.get_or_load(f"user:{user_id}", load)
