from typing import Any, Dict, Optional

from sqlalchemy import select

from database.models import ApplicantProfileRecord
from database.repositories.base import BaseRepository


class ApplicantRepository(BaseRepository):
    def get_profile(self, applicant_id: Any) -> Optional[ApplicantProfileRecord]:
        stmt = select(ApplicantProfileRecord).where(ApplicantProfileRecord.applicant_id == applicant_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def save_profile(
        self,
        profile_data: Dict[str, Any],
        applicant_id: Any = None,
        display_name: Optional[str] = None
    ) -> ApplicantProfileRecord:
        existing = self.get_profile(applicant_id) if applicant_id is not None else None

        if existing:
            existing.profile_data = profile_data
            if display_name is not None:
                existing.display_name = display_name
            record = existing
        else:
            record = ApplicantProfileRecord(
                applicant_id=applicant_id,
                display_name=display_name,
                profile_data=profile_data,
            )
            self.db.add(record)

        self.db.flush()
        return record
