"""
Taxonomy construction and flattening
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from loguru import logger

from .models import (
    FlatTaxonomyItem, Priority, Taxonomy, TaxonomyGroup, TaxonomyLeaf,
    TaxonomyLeafRow, TaxonomyOwner
)


PATH_SEPARATOR = " / "


def slugify(value: str) -> str:
    """Lowercase, strip punctuation, collapse whitespace to '-'"""
    slug = re.sub(r"[^\w\s-]", "", value.lower()).strip()
    return re.sub(r"\s+", "-", slug)


def leaf_id(owner: str, domain: str, label: str) -> str:
    return f"{slugify(owner)}__{slugify(domain)}__{slugify(label)}"


def leaf_path(owner: str, domain: str, label: str) -> str:
    return PATH_SEPARATOR.join([owner, domain, label])


def with_generated_ids(raw: Iterable[Mapping[str, Any]]) -> Taxonomy:
    """
    Build a Taxonomy from nested owner/groups/records mappings

    Record entries need a label and a priority; ids are generated from
    owner, domain and label so they stay stable across runs.
    """
    owners = []
    for o in raw:
        owner = o["owner"]
        groups = []
        for g in o.get("groups", []):
            domain = g["domain"]
            leaves = tuple(
                TaxonomyLeaf(
                    id=leaf_id(owner, domain, r["label"]),
                    label=r["label"],
                    priority=Priority(int(r.get("priority", Priority.CRITICAL))),
                )
                for r in g.get("records", [])
            )
            groups.append(TaxonomyGroup(domain=domain, records=leaves))
        owners.append(TaxonomyOwner(owner=owner, groups=tuple(groups)))
    return Taxonomy(owners=tuple(owners))


def build_taxonomy_from_flat(
    items: Sequence[FlatTaxonomyItem],
    excluded_owners: Optional[Iterable[str]] = None
) -> Taxonomy:
    """
    Group a flat catalog into Owner -> Domain -> Record type

    Owners keep their first-seen order; domains and record types are sorted
    alphabetically. Excluded owners are dropped before grouping and a
    repeated owner/domain/label keeps its most urgent priority.
    """
    excluded = set(excluded_owners or [])
    owners: Dict[str, Dict[str, Dict[str, Priority]]] = {}

    for item in items:
        if item.owner in excluded:
            continue
        domains = owners.setdefault(item.owner, {})
        labels = domains.setdefault(item.domain, {})
        current = labels.get(item.record_type)
        priority = Priority(item.priority)
        labels[item.record_type] = priority if current is None else min(current, priority)

    raw = []
    for owner, domains in owners.items():
        groups = []
        for domain in sorted(domains, key=_sort_key):
            labels = domains[domain]
            groups.append({
                "domain": domain,
                "records": [
                    {"label": label, "priority": labels[label]}
                    for label in sorted(labels, key=_sort_key)
                ],
            })
        raw.append({"owner": owner, "groups": groups})

    taxonomy = with_generated_ids(raw)
    logger.debug(
        f"Built taxonomy: {len(taxonomy)} owners, "
        f"{len(flatten_taxonomy(taxonomy))} record types "
        f"({len(excluded)} owners excluded)"
    )
    return taxonomy


def flatten_taxonomy(taxonomy: Taxonomy) -> List[TaxonomyLeafRow]:
    """One row per leaf in owner, domain, label declaration order"""
    return [
        TaxonomyLeafRow(
            id=leaf.id,
            owner=owner.owner,
            domain=group.domain,
            label=leaf.label,
            priority=leaf.priority,
            path=leaf_path(owner.owner, group.domain, leaf.label),
        )
        for owner in taxonomy
        for group in owner.groups
        for leaf in group.records
    ]


def _sort_key(value: str):
    return (value.lower(), value)
