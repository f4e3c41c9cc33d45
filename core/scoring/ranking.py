#!/usr/bin/env python3
"""
Applicant ranking for a job.

Scored applications are ordered by percentage (desc), total score (desc),
application date (asc) and applicant id (asc), so equal scores always rank in
the same order. Unscored, stale and failed applications follow without a
rank; stale and failed rows still show their last score.
"""

import csv
from dataclasses import dataclass
from io import StringIO
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from core.scoring.breakdown import score_rating

SCORED = "scored"

EXPORT_FIELDS = [
    "rank",
    "application_id",
    "applicant_id",
    "score_status",
    "percentage",
    "total_score",
    "max_possible_score",
    "rating",
    "scoring_system_used",
    "applied_at",
]


@dataclass
class RankedApplication:
    """One row of a job's ranking."""
    application_id: str
    applicant_id: str
    rank: Optional[int]
    score_status: str
    percentage: Optional[float] = None
    total_score: Optional[float] = None
    max_possible_score: Optional[float] = None
    scoring_system_used: Optional[str] = None
    applied_at: Optional[datetime] = None

    @property
    def rating(self) -> str:
        return score_rating(self.percentage)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "application_id": self.application_id,
            "applicant_id": self.applicant_id,
            "rank": self.rank,
            "score_status": self.score_status,
            "percentage": self.percentage,
            "total_score": self.total_score,
            "max_possible_score": self.max_possible_score,
            "scoring_system_used": self.scoring_system_used,
            "rating": self.rating,
            "applied_at": self.applied_at.isoformat() if self.applied_at else None,
        }


def _to_row(application: Any) -> RankedApplication:
    details = application.match_details or {}
    status = application.score_status or "unscored"
    has_score = application.match_score is not None
    return RankedApplication(
        application_id=str(application.id),
        applicant_id=str(application.applicant_id),
        rank=None,
        score_status=status,
        percentage=float(application.match_score) if has_score else None,
        total_score=float(details.get("totalScore", 0)) if has_score else None,
        max_possible_score=float(details.get("maxPossibleScore", 0)) if has_score else None,
        scoring_system_used=details.get("scoringSystemUsed") if has_score else None,
        applied_at=application.created_at,
    )


def _is_ranked(row: RankedApplication) -> bool:
    return row.score_status == SCORED and row.percentage is not None


def _rank_key(row: RankedApplication):
    # datetime.max sorts undated applications last among equal scores
    applied = row.applied_at.replace(tzinfo=None) if row.applied_at else datetime.max
    return (-row.percentage, -row.total_score, applied, row.applicant_id)


def rank_applications(applications: Iterable[Any]) -> List[RankedApplication]:
    """Rank application records (anything with the Application attributes)."""
    rows = [_to_row(application) for application in applications]

    scored = sorted((row for row in rows if _is_ranked(row)), key=_rank_key)
    for position, row in enumerate(scored, start=1):
        row.rank = position

    unranked = sorted(
        (row for row in rows if not _is_ranked(row)),
        key=lambda row: (row.applied_at.replace(tzinfo=None) if row.applied_at else datetime.max, row.applicant_id),
    )
    return scored + unranked


def rankings_to_csv(rows: Iterable[RankedApplication]) -> str:
    """CSV export of a ranking, one line per application in ranking order."""
    output = StringIO()
    writer = csv.DictWriter(output, fieldnames=EXPORT_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row.to_dict())
    return output.getvalue()
