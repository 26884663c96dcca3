"""
Containment filter - narrows a record pool to the records inside a work area
"""

from typing import List, Optional, Sequence
from loguru import logger

from ..config import GeometryConfig
from ..models import Point, Record, RecordFile
from .geometry_utils import GeometryUtils


class ContainmentFilter:
    """
    Select records with at least one georeferenced file inside a polygon

    A record is inside when ANY of its files has a centroid inside the
    polygon. A file's centroid is its explicit lat/lng, otherwise the
    centroid of its path.
    """

    def __init__(self, config: Optional[GeometryConfig] = None):
        config = config or GeometryConfig()
        self.min_vertices = config.min_polygon_vertices

    def is_active(self, polygon: Optional[Sequence[Point]]) -> bool:
        return GeometryUtils.is_active_polygon(polygon, self.min_vertices)

    def records_inside(
        self,
        polygon: Optional[Sequence[Point]],
        records: Sequence[Record]
    ) -> List[Record]:
        """
        Return the records inside the polygon, in input order

        An inactive polygon returns an empty list straight away; callers
        should check is_active() to tell that apart from zero coverage.
        """
        if not self.is_active(polygon):
            return []

        inside = [r for r in records if self.record_is_inside(r, polygon)]
        logger.debug(f"{len(inside)}/{len(records)} records inside work area")
        return inside

    def record_is_inside(self, record: Record, polygon: Sequence[Point]) -> bool:
        for f in record.files or []:
            point = self.file_centroid(f)
            if point is not None and GeometryUtils.point_in_polygon(point, polygon):
                return True
        return False

    @staticmethod
    def file_centroid(f: RecordFile) -> Optional[Point]:
        """Location used for containment, or None if the file has none"""
        if not f.is_georeferenced:
            return None

        if f.lat is not None and f.lng is not None:
            return Point(lat=f.lat, lng=f.lng)

        if f.path:
            return GeometryUtils.centroid(f.path)

        logger.debug(f"File '{f.name or f.id}' is georeferenced but has no location")
        return None
