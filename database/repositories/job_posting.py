import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from database.models import JobPosting
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class JobPostingRepository(BaseRepository):
    def get_by_id(self, job_id: Any) -> Optional[JobPosting]:
        stmt = (
            select(JobPosting)
            .options(joinedload(JobPosting.company))
            .where(JobPosting.id == job_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_ids_for_company(self, company_id: Any) -> List[Any]:
        stmt = select(JobPosting.id).where(JobPosting.company_id == company_id)
        return list(self.db.execute(stmt).scalars().all())

    def create_job(
        self,
        company_id: Any,
        title: str,
        category: Optional[str] = None,
        required_skills: Optional[List[str]] = None,
        scoring_config: Optional[Dict[str, Any]] = None
    ) -> JobPosting:
        job = JobPosting(
            company_id=company_id,
            title=title,
            category=category,
            required_skills=required_skills or [],
            scoring_config=scoring_config,
        )
        return self._add(job)

    def set_scoring_config(self, job: JobPosting, scoring_config: Optional[Dict[str, Any]]) -> JobPosting:
        job.scoring_config = scoring_config
        job.scoring_updated_at = datetime.now(timezone.utc)
        self.db.flush()
        logger.info(f"Job {job.id} scoring config updated")
        return job
