"""
Shared fixtures for work area coverage tests
"""

from typing import List, Optional

import pytest

from workarea.models import Point, Record, RecordFile


def _square(size: float = 10.0) -> List[Point]:
    return [
        Point(lat=0, lng=0),
        Point(lat=0, lng=size),
        Point(lat=size, lng=size),
        Point(lat=size, lng=0),
    ]


@pytest.fixture
def square():
    """Work area [{0,0},{0,10},{10,10},{10,0}]"""
    return _square()


@pytest.fixture
def make_record():
    """Factory for a record with a single file"""
    counter = {"n": 0}

    def _make(
        record_type_path: str,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        path: Optional[List[Point]] = None,
        status: str = "Georeferenced",
        org_name: Optional[str] = None,
        record_id: Optional[str] = None,
    ) -> Record:
        counter["n"] += 1
        rid = record_id or f"rec-{counter['n']}"
        f = RecordFile(
            id=f"{rid}-file",
            name=f"{rid}.pdf",
            status=status,
            lat=lat,
            lng=lng,
            path=path or [],
        )
        return Record(
            id=rid,
            record_type_path=record_type_path,
            org_name=org_name,
            files=[f],
        )

    return _make
