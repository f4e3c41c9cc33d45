from database.repositories.base import BaseRepository
from database.repositories.company import CompanyRepository
from database.repositories.job_posting import JobPostingRepository
from database.repositories.applicant import ApplicantRepository
from database.repositories.application import ApplicationRepository

__all__ = [
    'BaseRepository',
    'CompanyRepository',
    'JobPostingRepository',
    'ApplicantRepository',
    'ApplicationRepository',
]
