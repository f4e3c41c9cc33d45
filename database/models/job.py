import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Uuid, Index, func
from sqlalchemy.orm import relationship

from .base import Base, JSONDocument


class JobPosting(Base):
    __tablename__ = 'job_posting'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid(as_uuid=True), ForeignKey('company.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=False)
    category = Column(Text)
    required_skills = Column(JSONDocument, default=list)
    status = Column(Text, nullable=False, default='active')  # active|closed|draft

    # JobScoringConfig document: useCompanyDefault, useSystemDefault, customScoring
    scoring_config = Column(JSONDocument, nullable=True)
    scoring_updated_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_job_posting_company', 'company_id'),
        Index('idx_job_posting_status', 'status'),
    )
