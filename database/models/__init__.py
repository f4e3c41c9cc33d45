from .base import Base, JSONDocument
from .company import Company
from .job import JobPosting
from .applicant import ApplicantProfileRecord
from .application import Application

__all__ = [
    'Base',
    'JSONDocument',
    'Company',
    'JobPosting',
    'ApplicantProfileRecord',
    'Application',
]
