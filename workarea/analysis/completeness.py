"""
Completeness scoring for the records inside a work area

Blends category coverage (how many canonical utilities have at least one
record) with a saturating record density score, and lists the gaps.
"""

import math
from typing import Dict, List, Optional, Sequence
from loguru import logger

from ..config import ScoringConfig
from ..models import CompletenessResult, Record, UtilityCategory
from .classifier import RecordClassifier


class CompletenessScorer:
    """Score a fixed snapshot of in-area records"""

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        classifier: Optional[RecordClassifier] = None
    ):
        self.config = config or ScoringConfig()
        self.classifier = classifier or RecordClassifier(self.config)
        self.targets = [UtilityCategory(c) for c in self.config.target_categories]

    def score(self, records: Sequence[Record]) -> CompletenessResult:
        """
        Compute the completeness of the given (already contained) records

        Records that do not classify are left out of category coverage
        but still count toward record density.
        """
        record_count = len(records)

        category_counts = self.count_by_category(records)
        present = [c for c in self.targets if category_counts[c.display_name] > 0]
        missing = [c for c in self.targets if category_counts[c.display_name] == 0]

        records_by_type: Dict[str, int] = {}
        for record in records:
            record_type = self.classifier.classify_record_type(record)
            records_by_type[record_type] = records_by_type.get(record_type, 0) + 1

        coverage_score = self.utility_coverage_score(len(present))
        density_score = self.record_density_score(record_count)
        completeness_pct = self.blend(coverage_score, density_score)

        gaps = self.build_gaps(missing, record_count, records_by_type)

        logger.debug(
            f"Completeness {completeness_pct}% "
            f"(coverage {coverage_score:.1f}, density {density_score:.1f}, {record_count} records)"
        )

        return CompletenessResult(
            completeness_pct=completeness_pct,
            record_count=record_count,
            utility_coverage_score=coverage_score,
            record_density_score=density_score,
            categories_present=[c.display_name for c in present],
            categories_missing=[c.display_name for c in missing],
            category_counts=category_counts,
            records_by_type=records_by_type,
            records_with_files=sum(1 for r in records if r.files),
            gaps=gaps,
        )

    def count_by_category(self, records: Sequence[Record]) -> Dict[str, int]:
        """Record count per target category, zero-filled, keyed by display name"""
        counts = {c.display_name: 0 for c in self.targets}
        for record in records:
            category = self.classifier.classify_utility(record)
            if category is not None and category.display_name in counts:
                counts[category.display_name] += 1
        return counts

    # ============================================================
    # Sub-scores
    # ============================================================

    def utility_coverage_score(self, present_count: int) -> float:
        if not self.targets:
            return 0.0
        return present_count / len(self.targets) * 100.0

    def record_density_score(self, record_count: int) -> float:
        """Diminishing returns: approaches but never exceeds max_score"""
        if record_count <= 0:
            return 0.0
        return min(
            self.config.max_score,
            math.log(record_count + 1) * self.config.density_log_multiplier
        )

    def blend(self, coverage_score: float, density_score: float) -> int:
        blended = (
            self.config.coverage_weight * coverage_score
            + self.config.density_weight * density_score
        )
        # Half-up rounding
        rounded = int(math.floor(blended + 0.5))
        return max(0, min(int(self.config.max_score), rounded))

    # ============================================================
    # Gaps
    # ============================================================

    def build_gaps(
        self,
        missing: Sequence[UtilityCategory],
        record_count: int,
        records_by_type: Dict[str, int]
    ) -> List[str]:
        """Advisory gap lines, each independent of the others"""
        gaps = []

        if missing:
            gaps.append(f"No records for: {', '.join(c.display_name for c in missing)}")

        if record_count == 0:
            gaps.append("No records found in this work area.")
        elif record_count < self.config.few_records_threshold:
            gaps.append("Very few records found in this work area.")

        if self.config.require_as_built and record_count > 0:
            has_as_built = any(self.classifier.is_as_built(t) for t in records_by_type)
            if not has_as_built:
                gaps.append("No As-Built drawings found.")

        return gaps
