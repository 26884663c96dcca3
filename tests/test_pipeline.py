"""
End-to-end tests for the work area analysis pipeline
"""

import json

import pytest

from workarea.models import Point, WorkAreaAnalysis
from workarea.pipeline import WorkAreaAnalysisPipeline
from workarea.taxonomy import with_generated_ids


@pytest.fixture
def pipeline():
    return WorkAreaAnalysisPipeline()


def test_inactive_polygon_has_no_coverage(pipeline, square, make_record):
    record = make_record("Local Municipality / Water / As-Builts", lat=5, lng=5)

    for polygon in [None, [], square[:2]]:
        result = pipeline.run(polygon, [record])
        assert result.active is False
        assert result.completeness is None
        assert result.guidance is None
        assert result.inventory is None
        assert result.record_ids_inside == []


def test_single_water_as_built_inside(pipeline, square, make_record):
    inside = make_record("Local Municipality / Water / As-Builts", lat=5, lng=5, record_id="in")
    outside = make_record("Gas Utility / Natural Gas / Locates", lat=50, lng=50, record_id="out")

    result = pipeline.run(square, [inside, outside], work_area_id="wa-1", title="Main St")

    assert result.active is True
    assert result.work_area_id == "wa-1"
    assert result.title == "Main St"
    assert result.vertex_count == 4
    assert result.record_ids_inside == ["in"]
    assert result.completeness.completeness_pct == 20
    assert result.completeness.categories_present == ["Water"]
    assert [c.display_name for c in result.inventory] == ["Water"]

    water = next(g for g in result.guidance.groups if g.domain == "Water" and g.owner == "Local Municipality")
    assert [i.label for i in water.items if i.present] == ["As-Builts"]


def test_no_records_is_active_zero_coverage(pipeline, square):
    result = pipeline.run(square, [])

    assert result.active is True
    assert result.completeness.completeness_pct == 0
    assert any("no records found" in g.lower() for g in result.completeness.gaps)
    assert result.completeness.categories_missing == [
        "Water", "Gas", "Electric", "Telecom", "Storm", "Wastewater"
    ]
    assert result.inventory == []


def test_area_uses_planar_approximation(pipeline):
    side = 0.001
    polygon = [
        Point(lat=43.0, lng=-79.0),
        Point(lat=43.0, lng=-79.0 + side),
        Point(lat=43.0 + side, lng=-79.0 + side),
        Point(lat=43.0 + side, lng=-79.0),
    ]
    result = pipeline.run(polygon, [])
    assert result.area_sq_meters == pytest.approx(12321.0, abs=0.5)


def test_raw_dict_records_are_accepted(pipeline, square):
    records = [
        {
            "id": "camel",
            "recordTypePath": "Telecom Utility / Telco / As-Built Drawings",
            "files": [{"id": "f1", "status": "Georeferenced", "geomType": "Point", "lat": 2, "lng": 2}],
        },
        {"id": "nofiles", "recordTypePath": "Gas Utility / Natural Gas / Locates", "files": None},
        {"id": "broken", "files": [{"status": "Georeferenced", "lat": "not-a-number", "lng": 1}]},
        "not a record",
    ]
    result = pipeline.run(square, records)

    assert result.record_ids_inside == ["camel"]
    assert result.completeness.categories_present == ["Telecom"]


def test_numeric_ids_do_not_drop_records(pipeline, square):
    records = [{
        "id": 42,
        "recordTypePath": "Local Municipality / Water / As-Builts",
        "files": [{"id": 1, "status": "Georeferenced", "lat": 5, "lng": 5}],
    }]
    result = pipeline.run(square, records)

    assert result.completeness.record_count == 1
    assert result.record_ids_inside == ["42"]


def test_bad_file_drops_only_that_file(pipeline, square):
    records = [{
        "id": "mixed",
        "recordTypePath": "Local Municipality / Water / As-Builts",
        "files": [
            {"name": None, "status": "Not Georeferenced"},
            {"name": "b.pdf", "status": "Georeferenced", "lat": "not-a-number", "lng": 5},
            {"name": "a.pdf", "status": "Georeferenced", "lat": 5, "lng": 5},
        ],
    }]
    result = pipeline.run(square, records)

    assert result.completeness.record_count == 1
    assert result.record_ids_inside == ["mixed"]


def test_custom_taxonomy(square, make_record):
    taxonomy = with_generated_ids([
        {"owner": "Town", "groups": [
            {"domain": "Water", "records": [
                {"label": "As-Builts", "priority": 1},
                {"label": "Photos", "priority": 3},
            ]},
        ]},
    ])
    pipeline = WorkAreaAnalysisPipeline(taxonomy=taxonomy)
    record = make_record("Town / Water / Photos", lat=5, lng=5)

    result = pipeline.run(square, [record])

    assert result.guidance.totals.total == 2
    assert result.guidance.checklist.splitlines()[1:] == ["- Town / Water", "  - [ ] As-Builts (P1)"]


def test_repeat_runs_give_identical_analysis(pipeline, square, make_record):
    records = [
        make_record("Local Municipality / Water / As-Builts", lat=5, lng=5),
        make_record("Local Municipality / Stormwater / Locates", path=[Point(lat=1, lng=1), Point(lat=3, lng=3)]),
    ]
    first = pipeline.run(square, records)
    second = pipeline.run(square, records)

    assert first.completeness == second.completeness
    assert first.guidance == second.guidance
    assert first.inventory == second.inventory


def test_load_request_with_geojson_polygon(tmp_path):
    request_path = tmp_path / "request.json"
    request_path.write_text(json.dumps({
        "id": "share-1",
        "title": "Corridor",
        "createdAt": "2025-01-01T00:00:00Z",
        "polygon": {
            "type": "Polygon",
            "coordinates": [[[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]],
        },
        "records": [{
            "id": "r1",
            "recordTypePath": "Local Municipality / Water / As-Builts",
            "orgName": "Town",
            "priority": 1,
            "files": [{"id": "f1", "name": "a.pdf", "status": "Georeferenced", "lat": 5, "lng": 5}],
        }],
    }))

    request = WorkAreaAnalysisPipeline.load_request(str(request_path))

    assert request.id == "share-1"
    assert len(request.polygon) == 4
    assert request.records[0].org_name == "Town"
    assert request.records[0].files[0].is_georeferenced


def test_load_request_rejects_bad_files(tmp_path):
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json")
    not_object = tmp_path / "list.json"
    not_object.write_text("[]")

    with pytest.raises(ValueError):
        WorkAreaAnalysisPipeline.load_request(str(bad_json))
    with pytest.raises(ValueError):
        WorkAreaAnalysisPipeline.load_request(str(not_object))
    with pytest.raises(ValueError):
        WorkAreaAnalysisPipeline.load_request(str(tmp_path / "missing.json"))


def test_run_request_and_save(pipeline, tmp_path):
    request_path = tmp_path / "request.json"
    request_path.write_text(json.dumps({
        "id": "share-2",
        "polygon": [{"lat": 0, "lng": 0}, {"lat": 0, "lng": 10}, {"lat": 10, "lng": 10}, {"lat": 10, "lng": 0}],
        "records": [{
            "id": "r1",
            "recordTypePath": "Gas Utility / Natural Gas / As-Built Drawings",
            "files": [{"id": "f", "status": "Georeferenced", "path": [{"lat": 1, "lng": 1}, {"lat": 3, "lng": 3}]}],
        }],
    }))
    result = pipeline.run_request(pipeline.load_request(str(request_path)))

    output_path = tmp_path / "out" / "analysis.json"
    pipeline.save(result, str(output_path))
    saved = json.loads(output_path.read_text())

    assert saved["work_area_id"] == "share-2"
    assert saved["record_ids_inside"] == ["r1"]
    assert saved["completeness"]["categories_present"] == ["Gas"]
    assert WorkAreaAnalysis.model_validate(saved) == result


def test_invalid_config_rejected():
    from workarea.config import EngineConfig, ScoringConfig

    with pytest.raises(ValueError):
        WorkAreaAnalysisPipeline(EngineConfig(scoring=ScoringConfig(density_log_multiplier=0)))
