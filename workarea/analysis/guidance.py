"""
Guidance reporting - what should still be submitted for a work area

Cross-references the flattened taxonomy against the record type paths
present inside the work area.
"""

from typing import Dict, List, Optional, Sequence, Set, Tuple
from loguru import logger

from ..models import (
    GuidanceGroup, GuidanceItem, GuidanceReport, GuidanceTotals,
    InventoryCategory, InventoryItem, Record, UtilityCategory
)
from ..taxonomy import Taxonomy, flatten_taxonomy
from .classifier import RecordClassifier


# Sorts fully complete groups after every group with a missing item
NO_MISSING_PRIORITY = 99


class GuidanceReporter:
    """Builds the per-group missing record type report and checklist"""

    CHECKLIST_HEADER = "Recommended submissions (missing):"

    def __init__(self, classifier: Optional[RecordClassifier] = None):
        self.classifier = classifier or RecordClassifier()

    def build(self, taxonomy: Taxonomy, records: Sequence[Record]) -> GuidanceReport:
        """
        Partition every taxonomy leaf into present / missing

        Groups are ordered by their most urgent missing item, then by domain
        name. A group with nothing missing is kept and marked Complete.
        """
        present_paths = self.present_paths(records)

        grouped: Dict[Tuple[str, str], List[GuidanceItem]] = {}
        for row in flatten_taxonomy(taxonomy):
            grouped.setdefault((row.owner, row.domain), []).append(GuidanceItem(
                id=row.id,
                path=row.path,
                label=row.label,
                priority=int(row.priority),
                present=self.normalize_path(row.path) in present_paths,
            ))

        groups = []
        for (owner, domain), items in grouped.items():
            items.sort(key=lambda i: (i.priority, i.label.lower(), i.label))
            missing = [i for i in items if not i.present]
            groups.append(GuidanceGroup(
                owner=owner,
                domain=domain,
                color=self.classifier.color_for_domain(domain),
                items=items,
                missing=missing,
                present_count=len(items) - len(missing),
                highest_missing_priority=min(i.priority for i in missing) if missing else None,
                status="Incomplete" if missing else "Complete",
            ))

        groups.sort(key=lambda g: (
            g.highest_missing_priority if g.highest_missing_priority is not None else NO_MISSING_PRIORITY,
            g.domain.lower(),
        ))

        totals = GuidanceTotals(
            missing=sum(len(g.missing) for g in groups),
            present=sum(g.present_count for g in groups),
            total=sum(len(g.items) for g in groups),
        )

        if totals.missing > 0:
            summary = f"{totals.missing} missing of {totals.total} total types."
        else:
            summary = "All covered - nothing missing right now."

        logger.debug(f"Guidance: {summary}")

        return GuidanceReport(
            groups=groups,
            totals=totals,
            summary=summary,
            checklist=self.checklist(groups),
        )

    def checklist(self, groups: Sequence[GuidanceGroup]) -> str:
        """Copyable checklist of missing items; complete groups are skipped"""
        lines = [self.CHECKLIST_HEADER]
        for group in groups:
            if not group.missing:
                continue
            lines.append(f"- {group.owner} / {group.domain}")
            for item in group.missing:
                lines.append(f"  - [ ] {item.label} (P{item.priority})")
        return "\n".join(lines)

    def present_paths(self, records: Sequence[Record]) -> Set[str]:
        return {
            self.normalize_path(r.record_type_path)
            for r in records
            if r.record_type_path
        }

    @staticmethod
    def normalize_path(path: str) -> str:
        """Case and spacing insensitive form of an 'owner / domain / type' path"""
        return "/".join(RecordClassifier.tokenize(path))

    # ============================================================
    # Inventory
    # ============================================================

    def build_inventory(self, records: Sequence[Record]) -> List[InventoryCategory]:
        """
        Group in-area records by canonical utility category

        Items are sorted by owner then label; empty categories are left out
        and unclassified records are not listed.
        """
        buckets: Dict[UtilityCategory, List[InventoryItem]] = {}
        for record in records:
            category = self.classifier.classify_utility(record)
            if category is None:
                continue
            buckets.setdefault(category, []).append(InventoryItem(
                record_id=record.id,
                label=self.classifier.record_type_label(record),
                owner=record.org_name or "Unknown",
                path=record.record_type_path,
            ))

        inventory = []
        for category, items in buckets.items():
            items.sort(key=lambda i: (i.owner.lower(), i.label.lower()))
            inventory.append(InventoryCategory(
                category=category.value,
                display_name=category.display_name,
                items=items,
            ))

        inventory.sort(key=lambda c: c.display_name)
        return inventory
