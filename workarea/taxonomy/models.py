"""
Taxonomy data models

Owner -> Domain -> Record type catalog of the records a work area is
expected to have. Built once, read-only afterwards.
"""

from typing import List, Tuple
from dataclasses import dataclass, field
from enum import IntEnum


class Priority(IntEnum):
    """Record type priority tiers"""
    CRITICAL = 1
    IMPORTANT = 2
    NICE_TO_HAVE = 3


@dataclass(frozen=True)
class TaxonomyLeaf:
    """
    An expected record type

    Owner and domain are not stored here: they come from the enclosing
    TaxonomyOwner and TaxonomyGroup (or are copied onto TaxonomyLeafRow when
    flattened). The id is generated from owner, domain and label together.
    """
    id: str
    label: str
    priority: Priority


@dataclass(frozen=True)
class TaxonomyGroup:
    domain: str
    records: Tuple[TaxonomyLeaf, ...] = ()


@dataclass(frozen=True)
class TaxonomyOwner:
    owner: str
    groups: Tuple[TaxonomyGroup, ...] = ()


@dataclass(frozen=True)
class TaxonomyLeafRow:
    """One flattened leaf with its owner, domain and full path"""
    id: str
    owner: str
    domain: str
    label: str
    priority: Priority
    path: str


@dataclass(frozen=True)
class FlatTaxonomyItem:
    """One row of a flat catalog before grouping"""
    owner: str
    domain: str
    record_type: str
    priority: Priority = Priority.CRITICAL


@dataclass(frozen=True)
class Taxonomy:
    """Ordered collection of owners"""
    owners: Tuple[TaxonomyOwner, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.owners)

    def __len__(self) -> int:
        return len(self.owners)

    def owner_names(self) -> List[str]:
        return [o.owner for o in self.owners]
