import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import select

from database.models import Company
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CompanyRepository(BaseRepository):
    def get_by_id(self, company_id: Any) -> Optional[Company]:
        stmt = select(Company).where(Company.id == company_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_company(self, name: str, scoring_config: Optional[Dict[str, Any]] = None) -> Company:
        company = Company(name=name, scoring_config=scoring_config)
        return self._add(company)

    def set_scoring_config(self, company: Company, scoring_config: Optional[Dict[str, Any]]) -> Company:
        company.scoring_config = scoring_config
        company.scoring_updated_at = datetime.now(timezone.utc)
        self.db.flush()
        logger.info(
            f"Company {company.id} scoring config "
            f"{'updated' if scoring_config else 'reset to system default'}"
        )
        return company
