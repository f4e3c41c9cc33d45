import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Numeric, Uuid, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONDocument


class Application(Base):
    """
    An applicant's application to a job posting.

    Score fields:
    - match_score: overall PDS percentage (0-100) of the latest breakdown
    - match_details: the full PDSScoreBreakdown document
    - score_status: unscored|scored|stale|failed; stale scores are kept for
      display until the application is rescored. failed applications are left
      out of stale rescoring until their job or applicant changes
    """
    __tablename__ = 'application'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid(as_uuid=True), ForeignKey('job_posting.id', ondelete='CASCADE'), nullable=False)
    applicant_id = Column(Uuid(as_uuid=True), ForeignKey('applicant_profile.applicant_id', ondelete='CASCADE'), nullable=False)

    status = Column(Text, nullable=False, default='applied')  # applied|screening|interview|offered|hired|rejected|withdrawn

    match_score = Column(Numeric(5, 2))
    match_details = Column(JSONDocument, nullable=True)
    scoring_system_used = Column(Text)
    score_status = Column(Text, nullable=False, default='unscored')
    invalidated_reason = Column(Text, nullable=True)
    scored_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    job = relationship("JobPosting", back_populates="applications")

    __table_args__ = (
        UniqueConstraint('job_id', 'applicant_id', name='uq_application_job_applicant'),
        Index('idx_application_job', 'job_id'),
        Index('idx_application_applicant', 'applicant_id'),
        Index('idx_application_score', 'match_score'),
        Index('idx_application_score_status', 'score_status'),
    )
