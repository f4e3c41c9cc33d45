import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONDocument


class Company(Base):
    """
    Employer account.

    scoring_config holds the company's sparse ScoringOverride document
    (camelCase keys). NULL means the company uses the system default.
    """
    __tablename__ = 'company'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)

    scoring_config = Column(JSONDocument, nullable=True)
    scoring_updated_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    jobs = relationship("JobPosting", back_populates="company")
