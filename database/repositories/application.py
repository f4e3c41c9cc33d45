import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from database.models import Application
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    def get_application(self, job_id: Any, applicant_id: Any) -> Optional[Application]:
        stmt = select(Application).where(
            Application.job_id == job_id,
            Application.applicant_id == applicant_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create_application(self, job_id: Any, applicant_id: Any, status: str = 'applied') -> Application:
        application = Application(job_id=job_id, applicant_id=applicant_id, status=status)
        return self._add(application)

    def get_applications_for_job(self, job_id: Any) -> List[Application]:
        stmt = select(Application).where(Application.job_id == job_id)
        return list(self.db.execute(stmt).scalars().all())

    def save_score(
        self,
        application: Application,
        match_score: float,
        match_details: Dict[str, Any],
        scoring_system_used: str,
        scored_at: Optional[datetime] = None
    ) -> Application:
        """Replace the application's score with a new breakdown."""
        application.match_score = round(match_score, 2)
        application.match_details = match_details
        application.scoring_system_used = scoring_system_used
        application.score_status = 'scored'
        application.invalidated_reason = None
        application.scored_at = scored_at or datetime.now(timezone.utc)
        self.db.flush()
        return application

    def invalidate_scores_for_job(
        self,
        job_id: Any,
        reason: str = "Job scoring changed"
    ) -> int:
        return self.batch_invalidate_scores_for_jobs([job_id], reason)

    def batch_invalidate_scores_for_jobs(
        self,
        job_ids: List[Any],
        reason: str = "Scoring configuration changed"
    ) -> int:
        if not job_ids:
            return 0

        stmt = select(Application).where(
            Application.job_id.in_(job_ids),
            Application.score_status.in_(('scored', 'failed'))
        )
        applications = self.db.execute(stmt).scalars().all()

        count = 0
        for application in applications:
            application.score_status = 'stale'
            application.invalidated_reason = reason
            count += 1

        if count > 0:
            logger.info(f"Invalidated {count} application scores for {len(job_ids)} job(s): {reason}")

        return count

    def invalidate_scores_for_applicant(
        self,
        applicant_id: Any,
        reason: str = "Applicant profile changed"
    ) -> int:
        stmt = select(Application).where(
            Application.applicant_id == applicant_id,
            Application.score_status.in_(('scored', 'failed'))
        )
        applications = self.db.execute(stmt).scalars().all()

        count = 0
        for application in applications:
            application.score_status = 'stale'
            application.invalidated_reason = reason
            count += 1

        if count > 0:
            logger.info(f"Invalidated {count} application scores for applicant {applicant_id}: {reason}")

        return count

    def mark_score_failed(self, application: Application, reason: str) -> Application:
        """Take an application out of the rescoring queue until its inputs change."""
        application.score_status = 'failed'
        application.invalidated_reason = reason
        self.db.flush()
        return application

    def get_stale_applications(self, limit: int = 100) -> List[Application]:
        stmt = select(Application).where(
            Application.score_status.in_(('stale', 'unscored'))
        ).order_by(Application.created_at, Application.id).limit(limit)
        return list(self.db.execute(stmt).scalars().all())
