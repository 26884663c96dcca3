"""
Default record type catalog
"""

from typing import List, Optional

from ..config import TaxonomyConfig
from .builder import build_taxonomy_from_flat
from .models import FlatTaxonomyItem, Taxonomy


_COMMON_MUNICIPAL = [
    "As-Builts",
    "Locates",
    "Municipal Activity Record (Permit)",
]

_UTILITY_COMPANY = [
    "As-Built Drawings",
    "Issued Permits",
    "Locates",
]


def _rows(owner: str, domain: str, record_types: List[str]) -> List[FlatTaxonomyItem]:
    return [FlatTaxonomyItem(owner=owner, domain=domain, record_type=rt) for rt in record_types]


DEFAULT_CATALOG: List[FlatTaxonomyItem] = [
    *_rows("Local Municipality", "Water", _COMMON_MUNICIPAL + ["Work Orders"]),
    *_rows("Local Municipality", "Wastewater/Sanitary", _COMMON_MUNICIPAL + ["Work Orders"]),
    *_rows("Local Municipality", "Stormwater", _COMMON_MUNICIPAL + ["Work Orders"]),

    *_rows("Upper Tier Municipality", "Water", _COMMON_MUNICIPAL),
    *_rows("Upper Tier Municipality", "Wastewater", _COMMON_MUNICIPAL),
    *_rows("Upper Tier Municipality", "Stormwater", _COMMON_MUNICIPAL),
    *_rows("Upper Tier Municipality", "Roads & Surface", _COMMON_MUNICIPAL + ["Road Centre Lines"]),

    *_rows("Gas Utility", "Natural Gas", _UTILITY_COMPANY),
    *_rows("Telecom Utility", "Telco", _UTILITY_COMPANY),
    *_rows("Hydro / Electric Utility", "Power", _UTILITY_COMPANY),

    *_rows("Contractor / Consultant", "Third Party", [
        "IFC (Issued for Construction) Drawings",
        "Final As-Built Drawings",
    ]),

    *_rows("Coordination & System Generated Intelligence", "Analytics", [
        "Conflicting Permits in the Zone",
        "Completeness",
        "High-Risk Zones (Historic Strike Density)",
        "GPT-Generated Confidence Summary (optional)",
    ]),
]


def build_default_taxonomy(config: Optional[TaxonomyConfig] = None) -> Taxonomy:
    """Build the default taxonomy, leaving out non-contributable owners"""
    config = config or TaxonomyConfig()
    return build_taxonomy_from_flat(DEFAULT_CATALOG, config.excluded_owners)
