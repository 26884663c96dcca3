"""
Tests for utility category and record type classification
"""

import pytest

from workarea.analysis.classifier import RecordClassifier
from workarea.config import ScoringConfig
from workarea.models import Record, UtilityCategory


@pytest.fixture
def classifier():
    return RecordClassifier()


@pytest.mark.parametrize("path, expected", [
    ("Local Municipality / Water / Locates", UtilityCategory.WATER),
    ("Local Municipality / Wastewater/Sanitary / As-Builts", UtilityCategory.WASTEWATER),
    ("Local Municipality / Stormwater / Work Orders", UtilityCategory.STORM),
    ("Gas Utility / Natural Gas / Issued Permits", UtilityCategory.GAS),
    ("Hydro / Electric Utility / Power / Locates", UtilityCategory.ELECTRIC),
    ("Telecom Utility / Telco / As-Built Drawings", UtilityCategory.TELECOM),
    ("wastewater/sanitary", UtilityCategory.WASTEWATER),
    ("  STORM  / as built", UtilityCategory.STORM),
    ("Sewer Authority / Mains", UtilityCategory.WASTEWATER),
])
def test_classify_path(classifier, path, expected):
    assert classifier.classify_utility(path) == expected


@pytest.mark.parametrize("path", [
    "",
    "Local Municipality / Roads & Surface / Road Centre Lines",
    "free text that means nothing",
    "///",
])
def test_unrecognised_paths_do_not_classify(classifier, path):
    assert classifier.classify_utility(path) is None


def test_none_does_not_classify(classifier):
    assert classifier.classify_utility(None) is None


def test_water_rule_skips_waste_and_storm_segments(classifier):
    # First segment would only match water without its veto
    assert classifier.classify_path("Stormwater Division / Ponds") == UtilityCategory.STORM
    assert classifier.classify_path("Wastewater Plant") == UtilityCategory.WASTEWATER
    assert classifier.classify_path("Water") == UtilityCategory.WATER


def test_owner_segment_is_checked_before_domain(classifier):
    assert classifier.classify_path("Gas Utility / Water Crossing / Locates") == UtilityCategory.GAS


def test_explicit_utility_attribute_wins(classifier):
    record = Record(
        id="r1",
        record_type_path="Local Municipality / Water / Locates",
        utility_type="Telecom",
    )
    assert classifier.classify_utility(record) == UtilityCategory.TELECOM


def test_unrecognised_utility_attribute_falls_back_to_path(classifier):
    record = Record(
        id="r1",
        record_type_path="Local Municipality / Water / Locates",
        utility_type="Unknown",
    )
    assert classifier.classify_utility(record) == UtilityCategory.WATER


@pytest.mark.parametrize("attributes, expected", [
    ({"utility_type": "Natural Gas"}, UtilityCategory.GAS),
    ({"utilityType": "Hydro"}, UtilityCategory.ELECTRIC),
    ({"recordTypePath": "Telecom Utility / Telco / Locates"}, UtilityCategory.TELECOM),
    ({"utilityType": "", "record_type_path": "Stormwater / Locates"}, UtilityCategory.STORM),
    ({"something": "else"}, None),
])
def test_classify_attribute_mappings(classifier, attributes, expected):
    assert classifier.classify_utility(attributes) == expected


@pytest.mark.parametrize("value, expected", [
    ("Local Municipality / Water / As-Builts", "AsBuilt"),
    ("Gas Utility / Natural Gas / As-Built Drawings", "AsBuilt"),
    ("Local Municipality / Water / Locates", "Locate"),
    ("Local Municipality / Water / Municipal Activity Record (Permit)", "Permit"),
    ("Gas Utility / Natural Gas / Scanned Document", "PDF"),
    ("Local Municipality / Water / Work Orders", "Work Orders"),
    ("Water", "Other"),
    ("", "Other"),
    ({"recordType": "as built"}, "AsBuilt"),
    ({"record_type": "ASBUILT package"}, "AsBuilt"),
])
def test_classify_record_type(classifier, value, expected):
    assert classifier.classify_record_type(value) == expected


def test_as_built_synonyms_come_from_config():
    classifier = RecordClassifier(ScoringConfig(as_built_synonyms=("record drawing",)))
    assert classifier.classify_record_type("Water / Record Drawing") == "AsBuilt"
    assert classifier.classify_record_type("Water / As-Builts") == "As-Builts"


def test_record_type_label_keeps_raw_token(classifier):
    assert classifier.record_type_label("Local Municipality / Water / As-Builts") == "As-Builts"
    assert classifier.record_type_label("Water") == "Water"


@pytest.mark.parametrize("domain, color", [
    ("Power", RecordClassifier.ELECTRIC_COLOR),
    ("Natural Gas", RecordClassifier.GAS_COLOR),
    ("Telco", RecordClassifier.TELECOM_COLOR),
    ("Water", RecordClassifier.WATER_COLOR),
    ("Wastewater/Sanitary", RecordClassifier.SEWER_COLOR),
    ("Stormwater", RecordClassifier.SEWER_COLOR),
    ("Roads & Surface", RecordClassifier.ROADS_COLOR),
    ("Analytics", RecordClassifier.FALLBACK_COLOR),
    (None, RecordClassifier.FALLBACK_COLOR),
])
def test_color_for_domain(domain, color):
    assert RecordClassifier.color_for_domain(domain) == color
