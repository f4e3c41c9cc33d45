from sqlalchemy.orm import Session

from database.repositories import (
    CompanyRepository,
    JobPostingRepository,
    ApplicantRepository,
    ApplicationRepository,
)


class PortalRepository:
    """Facade over the per-aggregate repositories sharing one Session."""

    def __init__(self, db: Session):
        self.db = db
        self.companies = CompanyRepository(db)
        self.jobs = JobPostingRepository(db)
        self.applicants = ApplicantRepository(db)
        self.applications = ApplicationRepository(db)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
