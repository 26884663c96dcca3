"""
Configuration settings for the Work Area Coverage Engine
"""

from dataclasses import dataclass, field
from typing import List, Tuple


KNOWN_CATEGORIES = ("water", "gas", "electric", "telecom", "storm", "wastewater")

@dataclass
class GeometryConfig:
    """Planar geometry approximation settings"""
    # Flat degree-to-meter factor used for both axes (rough, small extents only)
    meters_per_degree: float = 111000.0

    # A work area with fewer vertices than this is inactive
    min_polygon_vertices: int = 3


@dataclass
class ScoringConfig:
    """Completeness scoring settings"""
    # Canonical utility categories a complete work area should cover
    target_categories: List[str] = field(default_factory=lambda: [
        "water",
        "gas",
        "electric",
        "telecom",
        "storm",
        "wastewater",
    ])

    # Blend of category coverage and record density (0-100 each)
    coverage_weight: float = 0.5
    density_weight: float = 0.5

    # density = min(max_score, ln(count + 1) * density_log_multiplier)
    density_log_multiplier: float = 35.0
    max_score: float = 100.0

    # Gap rules
    few_records_threshold: int = 3
    require_as_built: bool = True
    as_built_synonyms: Tuple[str, ...] = ("as built", "as-built", "asbuilt")


@dataclass
class TaxonomyConfig:
    """Taxonomy construction settings"""
    # Informational / system-generated owners nobody can contribute records for
    excluded_owners: List[str] = field(default_factory=lambda: [
        "Upper Tier Municipality",
        "Contractor / Consultant",
        "Coordination & System Generated Intelligence",
    ])


@dataclass
class EngineConfig:
    """Engine configuration"""
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    taxonomy: TaxonomyConfig = field(default_factory=TaxonomyConfig)


def get_config() -> EngineConfig:
    """Get a freshly constructed default configuration"""
    return EngineConfig()


def validate_config(config: EngineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.geometry is None:
        errors.append("geometry configuration is required but not set")
    else:
        if config.geometry.meters_per_degree is None or config.geometry.meters_per_degree <= 0:
            errors.append(
                f"geometry.meters_per_degree must be positive, got {config.geometry.meters_per_degree}"
            )
        if config.geometry.min_polygon_vertices is None or config.geometry.min_polygon_vertices < 3:
            errors.append(
                f"geometry.min_polygon_vertices must be at least 3, got {config.geometry.min_polygon_vertices}"
            )

    if config.scoring is None:
        errors.append("scoring configuration is required but not set")
    else:
        scoring = config.scoring
        if not scoring.target_categories:
            errors.append("scoring.target_categories must not be empty")
        unknown = [c for c in scoring.target_categories if c not in KNOWN_CATEGORIES]
        if unknown:
            errors.append(f"scoring.target_categories has unknown categories: {', '.join(unknown)}")
        if scoring.coverage_weight < 0 or scoring.density_weight < 0:
            errors.append("scoring weights must not be negative")
        elif scoring.coverage_weight + scoring.density_weight == 0:
            errors.append("scoring weights must not both be zero")
        if scoring.density_log_multiplier <= 0:
            errors.append(
                f"scoring.density_log_multiplier must be positive, got {scoring.density_log_multiplier}"
            )
        if scoring.max_score <= 0:
            errors.append(f"scoring.max_score must be positive, got {scoring.max_score}")
        if scoring.few_records_threshold < 1:
            errors.append(
                f"scoring.few_records_threshold must be at least 1, got {scoring.few_records_threshold}"
            )

    if config.taxonomy is None:
        errors.append("taxonomy configuration is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
