"""
Main Pipeline Orchestrator for Work Area Coverage Analysis

Data flow:

  1. Input: drawn work area polygon + candidate records (+ taxonomy)
  2. Containment: keep records with a georeferenced file inside the polygon
  3. Classification: bucket records by canonical utility category
  4. Completeness: coverage + density score and gap list
  5. Guidance: missing record types per owner/domain, checklist
  6. Assemble WorkAreaAnalysis

Every run works on a fixed snapshot of its inputs and returns new objects.
"""

import json
import os
from typing import Any, Dict, List, Optional, Sequence, Union
from loguru import logger
from pydantic import ValidationError

from .config import EngineConfig, get_config, validate_config
from .models import Point, Record, WorkAreaAnalysis, WorkAreaRequest
from .taxonomy import Taxonomy, build_default_taxonomy
from .analysis import (
    GeometryUtils, RecordClassifier, ContainmentFilter, CompletenessScorer, GuidanceReporter
)


class WorkAreaAnalysisPipeline:
    """
    Pipeline to analyse record coverage of a work area

    Usage:
        pipeline = WorkAreaAnalysisPipeline()
        result = pipeline.run(polygon=points, records=records)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        taxonomy: Optional[Taxonomy] = None
    ):
        self.config = config or get_config()
        validate_config(self.config)

        self.taxonomy = taxonomy or build_default_taxonomy(self.config.taxonomy)

        self.classifier = RecordClassifier(self.config.scoring)
        self.containment = ContainmentFilter(self.config.geometry)
        self.scorer = CompletenessScorer(self.config.scoring, self.classifier)
        self.reporter = GuidanceReporter(self.classifier)

    def run(
        self,
        polygon: Optional[Sequence[Point]],
        records: Sequence[Union[Record, Dict[str, Any]]],
        work_area_id: Optional[str] = None,
        title: Optional[str] = None
    ) -> WorkAreaAnalysis:
        """
        Analyse one work area

        Args:
            polygon: Work area vertices, implicitly closed
            records: Candidate records (models or raw dicts)
            work_area_id: Optional id carried into the result
            title: Optional title carried into the result

        Returns:
            WorkAreaAnalysis; inactive when the polygon has too few vertices
        """
        polygon = list(polygon or [])
        vertex_count = len(polygon)

        if not self.containment.is_active(polygon):
            logger.info(f"Work area inactive ({vertex_count} vertices), skipping analysis")
            return WorkAreaAnalysis(
                work_area_id=work_area_id,
                title=title,
                active=False,
                vertex_count=vertex_count,
            )

        candidates = self.coerce_records(records)
        area_sq_meters = GeometryUtils.planar_area_sq_meters(
            polygon, self.config.geometry.meters_per_degree
        )
        logger.info(
            f"Analysing work area: {vertex_count} vertices, "
            f"~{area_sq_meters:,.0f} sqm, {len(candidates)} candidate records"
        )

        logger.info("Stage 1: Filtering records inside work area...")
        inside = self.containment.records_inside(polygon, candidates)
        logger.info(f"{len(inside)} of {len(candidates)} records inside")

        logger.info("Stage 2: Scoring completeness...")
        completeness = self.scorer.score(inside)
        logger.info(
            f"Completeness {completeness.completeness_pct}%, "
            f"missing: {', '.join(completeness.categories_missing) or 'none'}"
        )

        logger.info("Stage 3: Building guidance...")
        guidance = self.reporter.build(self.taxonomy, inside)
        inventory = self.reporter.build_inventory(inside)
        logger.info(guidance.summary)

        return WorkAreaAnalysis(
            work_area_id=work_area_id,
            title=title,
            active=True,
            vertex_count=vertex_count,
            area_sq_meters=round(area_sq_meters, 1),
            record_ids_inside=[r.id for r in inside],
            completeness=completeness,
            guidance=guidance,
            inventory=inventory,
        )

    def run_request(self, request: WorkAreaRequest) -> WorkAreaAnalysis:
        return self.run(
            polygon=request.polygon,
            records=request.records,
            work_area_id=request.id,
            title=request.title,
        )

    @staticmethod
    def coerce_records(records: Sequence[Union[Record, Dict[str, Any]]]) -> List[Record]:
        """Accept Record models or raw dicts; anything else is skipped"""
        coerced = []
        for i, record in enumerate(records or []):
            if isinstance(record, Record):
                coerced.append(record)
            elif isinstance(record, dict):
                try:
                    coerced.append(Record.model_validate(record))
                except ValidationError as e:
                    logger.debug(f"Skipping record {i}: {e.error_count()} invalid fields")
            else:
                logger.debug(f"Skipping record {i}: unsupported type {type(record).__name__}")
        return coerced

    # ============================================================
    # File I/O
    # ============================================================

    @staticmethod
    def load_request(input_path: str) -> WorkAreaRequest:
        """
        Load a work area request JSON file

        The polygon may be a list of {lat, lng} points, [lng, lat] pairs,
        a GeoJSON Polygon or an ArcGIS rings geometry.
        Raises ValueError when the file cannot be read or parsed.
        """
        try:
            with open(input_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Cannot read work area request {input_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Work area request {input_path} must be a JSON object")

        data["polygon"] = GeometryUtils.ring_from_geometry(data.get("polygon"))

        try:
            return WorkAreaRequest.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid work area request {input_path}: {e}") from e

    def save(self, analysis: WorkAreaAnalysis, output_path: str) -> str:
        """Save work area analysis to JSON file"""
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(analysis.model_dump(), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved work area analysis to {output_path}")
        return output_path
