"""
Geometry utilities for work area containment and area calculations

All calculations are planar on raw lat/lng degrees. Good enough for
small work areas, not geodesically correct.
"""

from typing import List, Sequence, Any, Optional

from ..models import Point


class GeometryUtils:
    """Utility functions for geometric operations"""

    @staticmethod
    def centroid(points: Sequence[Point]) -> Point:
        """
        Arithmetic mean of lat and lng

        Returns (0, 0) for an empty input. Callers must not treat that as
        a real location.
        """
        if not points:
            return Point(lat=0.0, lng=0.0)

        n = len(points)
        sum_lat = sum(p.lat for p in points)
        sum_lng = sum(p.lng for p in points)

        return Point(lat=sum_lat / n, lng=sum_lng / n)

    @staticmethod
    def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
        """Point-in-polygon check (ray casting, even-odd rule)"""
        n = len(polygon)
        inside = False

        x = point.lng
        y = point.lat

        j = n - 1
        for i in range(n):
            xi, yi = polygon[i].lng, polygon[i].lat
            xj, yj = polygon[j].lng, polygon[j].lat

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside
            j = i

        return inside

    @staticmethod
    def planar_area_sq_meters(
        polygon: Sequence[Point],
        meters_per_degree: float = 111000.0
    ) -> float:
        """Calculate polygon area in square meters using the shoelace formula"""
        if len(polygon) < 3:
            return 0.0

        n = len(polygon)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += polygon[i].lng * polygon[j].lat
            area -= polygon[j].lng * polygon[i].lat

        return abs(area) / 2.0 * meters_per_degree * meters_per_degree

    @staticmethod
    def is_active_polygon(polygon: Optional[Sequence[Point]], min_vertices: int = 3) -> bool:
        """A work area polygon needs at least min_vertices points to be analysed"""
        return polygon is not None and len(polygon) >= min_vertices

    @staticmethod
    def ring_from_geometry(geometry: Any) -> List[Point]:
        """
        Convert a drawn geometry into an ordered list of Points

        Accepts GeoJSON Polygon/LineString dicts, ArcGIS geometries with
        rings or paths, lists of [lng, lat] pairs, or lists of {lat, lng}
        dicts. Only the outer ring is used and a closing duplicate point
        is dropped. Anything unrecognised gives an empty list.
        """
        if geometry is None:
            return []

        coords: Any = geometry
        if isinstance(geometry, dict):
            geom_type = geometry.get("type")
            if geom_type == "Polygon":
                rings = geometry.get("coordinates") or []
                coords = rings[0] if rings else []
            elif geom_type == "LineString":
                coords = geometry.get("coordinates") or []
            elif "rings" in geometry or "paths" in geometry:
                rings = geometry.get("rings") or geometry.get("paths") or []
                coords = rings[0] if rings else []
            else:
                return []

        if not isinstance(coords, (list, tuple)):
            return []

        points = []
        for coord in coords:
            point = GeometryUtils._to_point(coord)
            if point is not None:
                points.append(point)

        if len(points) > 1 and points[0] == points[-1]:
            points = points[:-1]

        return points

    @staticmethod
    def _to_point(coord: Any) -> Optional[Point]:
        """Convert a single [lng, lat] pair, {lat, lng} dict or Point"""
        if isinstance(coord, Point):
            return coord

        if isinstance(coord, dict):
            lat = coord.get("lat")
            lng = coord.get("lng", coord.get("lon"))
        elif isinstance(coord, (list, tuple)) and len(coord) >= 2:
            lng, lat = coord[0], coord[1]
        else:
            return None

        if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
            return None

        return Point(lat=float(lat), lng=float(lng))
