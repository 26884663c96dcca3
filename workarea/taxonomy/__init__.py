"""
Taxonomy module

Hierarchical catalog of expected record types:
- models: Owner / Domain / Record type dataclasses and priorities
- builder: Grouping, stable id generation and flattening
- catalog: Default catalog of record types
"""

from .models import (
    Priority, Taxonomy, TaxonomyOwner, TaxonomyGroup, TaxonomyLeaf,
    TaxonomyLeafRow, FlatTaxonomyItem
)
from .builder import (
    slugify, build_taxonomy_from_flat, with_generated_ids, flatten_taxonomy
)
from .catalog import DEFAULT_CATALOG, build_default_taxonomy

__all__ = [
    "Priority",
    "Taxonomy",
    "TaxonomyOwner",
    "TaxonomyGroup",
    "TaxonomyLeaf",
    "TaxonomyLeafRow",
    "FlatTaxonomyItem",
    "slugify",
    "build_taxonomy_from_flat",
    "with_generated_ids",
    "flatten_taxonomy",
    "DEFAULT_CATALOG",
    "build_default_taxonomy",
]
