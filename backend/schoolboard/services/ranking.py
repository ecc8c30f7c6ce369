"""
Ranking engine - exam result ranks and leaderboards.

Ranks use dense competition ordering: tied values share a rank and the next
distinct value is ranked after everyone above it.

    scores  90  90  80  70
    ranks    1   1   3   4

FLOW (per-subject):
1. Read every exam result in the exact scope (school, class, section, subject)
   ordered by score descending
2. Walk the ordered scores assigning ranks
3. Write rank_in_class and rank_in_section (same value) onto each record,
   one write per record

FLOW (overall):
1. Read every exam result in (school, class, section), all subjects
2. Group by student, sum score and max marks
3. average_percentage = 100 * total_score / total_max_marks
4. Sort descending, rank with the same walk, truncate to top_n

Rank writes are not transactional: if a write fails midway, records already
written keep their new rank.
"""

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pymongo import ASCENDING, DESCENDING

from ..config.settings import settings
from ..errors import InvalidScopeError, RankingError, StoreError
from ..models.results import StudentAverage
from ..repositories.stores import ResultStore, StudentDirectory
from ..utils import calculate_percentage, utc_now_iso

logger = logging.getLogger(__name__)

# Score descending; student_id makes the order of tied records deterministic
SCORE_ORDER: List[Tuple[str, int]] = [("score", DESCENDING), ("student_id", ASCENDING)]

# One lock per scope, serializing rank computations within this process
_scope_locks: "weakref.WeakValueDictionary[Tuple[str, ...], asyncio.Lock]" = weakref.WeakValueDictionary()


@asynccontextmanager
async def _scope_lock(scope: Dict[str, str]):
    key = tuple(scope[field] for field in sorted(scope))
    lock = _scope_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _scope_locks[key] = lock
    async with lock:
        yield


def assign_competition_ranks(values: Sequence[float]) -> List[int]:
    """
    Rank a sequence that is already sorted in descending order.

    Args:
        values: Scores or percentages, highest first

    Returns:
        Ranks aligned with ``values``, e.g. [90, 90, 80, 70] -> [1, 1, 3, 4]

    Raises:
        ValueError: If a value is greater than the one before it
    """
    ranks: List[int] = []
    current_rank = 0
    tie_run = 0  # Members of the current tie beyond the first
    previous: Optional[float] = None

    for value in values:
        if previous is None:
            current_rank = 1
        elif value < previous:
            current_rank += tie_run + 1
            tie_run = 0
        elif value == previous:
            tie_run += 1
        else:
            raise ValueError("values must be sorted in descending order")

        ranks.append(current_rank)
        previous = value

    return ranks


def _require_scope(**identifiers: Optional[str]) -> Dict[str, str]:
    """Validate that every scope identifier is a non-blank string."""
    missing = [
        name for name, value in identifiers.items()
        if not isinstance(value, str) or not value.strip()
    ]
    if missing:
        raise InvalidScopeError(f"Missing required scope fields: {', '.join(missing)}")
    return {name: value for name, value in identifiers.items()}


def _require_top_n(top_n: Any) -> int:
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
        raise InvalidScopeError("top_n must be a positive integer")
    return top_n


class RankingEngine:
    """Computes and persists exam ranks and answers leaderboard queries."""

    def __init__(self, results: ResultStore, directory: StudentDirectory):
        self.results = results
        self.directory = directory

    # ============ PER-SUBJECT RANKING ============

    async def compute_and_assign_ranks(
        self,
        school_id: str,
        class_id: str,
        section_id: str,
        subject_id: str
    ) -> None:
        """
        Rank every result in one subject scope and write the ranks back.

        Raises:
            InvalidScopeError: A scope identifier is missing (no store access)
            RankingError: A store read or write failed
        """
        scope = _require_scope(
            school_id=school_id,
            class_id=class_id,
            section_id=section_id,
            subject_id=subject_id
        )

        async with _scope_lock(scope):
            try:
                records = await self.results.find(scope, sort=SCORE_ORDER)
                ranks = assign_competition_ranks([record["score"] for record in records])

                for record, rank in zip(records, ranks):
                    await self.results.update(
                        record["result_id"],
                        {
                            "rank_in_class": rank,
                            "rank_in_section": rank,
                            "updated_at": utc_now_iso()
                        }
                    )
            except StoreError as e:
                logger.error(f"Error calculating and assigning ranks for {scope}: {e}")
                raise RankingError("Failed to calculate and assign ranks.") from e

        logger.info(f"Assigned ranks to {len(records)} results for {scope}")

    # ============ LEADERBOARDS ============

    async def get_top_students_by_subject(
        self,
        school_id: str,
        class_id: str,
        section_id: str,
        subject_id: str,
        top_n: int = settings.DEFAULT_TOP_N
    ) -> List[Dict[str, Any]]:
        """
        Highest-scoring results for one subject.

        Reads only: the rank fields are whatever compute_and_assign_ranks
        last wrote. Ties at the top_n boundary are cut at the limit.
        """
        scope = _require_scope(
            school_id=school_id,
            class_id=class_id,
            section_id=section_id,
            subject_id=subject_id
        )
        top_n = _require_top_n(top_n)

        try:
            return await self.results.find(scope, sort=SCORE_ORDER, limit=top_n)
        except StoreError as e:
            logger.error(f"Error getting top students by subject for {scope}: {e}")
            raise RankingError("Failed to retrieve top students by subject.") from e

    async def get_overall_top_students(
        self,
        school_id: str,
        class_id: str,
        section_id: str,
        top_n: int = settings.DEFAULT_TOP_N
    ) -> List[StudentAverage]:
        """
        Highest average percentage across all subjects in a section.

        The average is sum(score) / sum(max_marks), not a mean of per-subject
        percentages. Duplicate records for a student are all counted.
        """
        scope = _require_scope(
            school_id=school_id,
            class_id=class_id,
            section_id=section_id
        )
        top_n = _require_top_n(top_n)

        try:
            records = await self.results.find(scope)

            grouped: Dict[str, Dict[str, Any]] = {}
            for record in records:
                totals = grouped.setdefault(
                    record["student_id"],
                    {"total_score": 0, "total_max_marks": 0, "results": []}
                )
                totals["total_score"] += record["score"]
                totals["total_max_marks"] += record["max_marks"]
                totals["results"].append(record)

            averages: List[StudentAverage] = []
            for student_id, totals in grouped.items():
                student = await self.directory.get_student(student_id) or {}
                averages.append(StudentAverage(
                    student_id=student_id,
                    total_score=totals["total_score"],
                    total_max_marks=totals["total_max_marks"],
                    subject_count=len(totals["results"]),
                    average_percentage=calculate_percentage(
                        totals["total_score"],
                        totals["total_max_marks"]
                    ),
                    first_name=student.get("first_name"),
                    last_name=student.get("last_name"),
                    roll_number=student.get("roll_number"),
                    subject_results=totals["results"]
                ))
        except StoreError as e:
            logger.error(f"Error getting overall top students for {scope}: {e}")
            raise RankingError("Failed to retrieve overall top students.") from e

        averages.sort(key=lambda entry: (-entry.average_percentage, entry.student_id))
        ranks = assign_competition_ranks([entry.average_percentage for entry in averages])
        for entry, rank in zip(averages, ranks):
            entry.rank = rank

        return averages[:top_n]
