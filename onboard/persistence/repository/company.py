"""PostgreSQL implementation of Company repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from onboard.domain.model import Company
from onboard.domain.repository import CompanyRepository
from onboard.domain.value import CompanyId
from onboard.persistence.mappers import row_to_company
from onboard.persistence.tables import companies_table


class PostgresCompanyRepository(CompanyRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, company_id: CompanyId) -> Optional[Company]:
        stmt = select(companies_table).where(companies_table.c.id == company_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_company(dict(row)) if row else None
