import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, func

from .base import Base, JSONDocument


class ApplicantProfileRecord(Base):
    """
    Parsed PDS fields for an applicant.

    profile_data is the output of the PDS parser and is read as an
    ApplicantProfile (core.scoring.measurement). Parsing itself happens
    upstream.
    """
    __tablename__ = 'applicant_profile'

    applicant_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    display_name = Column(Text)
    profile_data = Column(JSONDocument, nullable=False, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
