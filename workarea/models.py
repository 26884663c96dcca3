"""
Pydantic models for work area coverage analysis
Input records as produced by the upload workflow, and the analysis results
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any, Literal
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import uuid


# ============================================================
# Canonical Utility Categories
# ============================================================

class UtilityCategory(str, Enum):
    """Top-level utility domains used for coverage scoring"""
    WATER = "water"
    GAS = "gas"
    ELECTRIC = "electric"
    TELECOM = "telecom"
    STORM = "storm"
    WASTEWATER = "wastewater"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# ============================================================
# Geometry Types
# ============================================================

GEOREFERENCED = "Georeferenced"
NOT_GEOREFERENCED = "Not Georeferenced"

FileStatus = Literal["Georeferenced", "Not Georeferenced"]
GeomType = Literal["Point", "LineString", "Polygon"]


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


# ============================================================
# Record Models
# ============================================================

def _as_list(value: Any) -> List[Any]:
    # Missing, null or non-list collections count as empty
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _as_str(value: Any, default: str = "") -> str:
    # Feature services hand out numeric ids; null means unset
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _as_optional_str(value: Any) -> Optional[str]:
    return None if value is None else _as_str(value)


class RecordFile(BaseModel):
    """
    One uploaded file of a record

    Counts toward containment only when georeferenced and it has either an
    explicit lat/lng or a non-empty path to take the centroid of.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    name: str = ""
    status: FileStatus = NOT_GEOREFERENCED
    geom_type: Optional[GeomType] = Field(default=None, alias="geomType")
    lat: Optional[float] = None
    lng: Optional[float] = None
    path: List[Point] = Field(default_factory=list)

    @field_validator("id", "name", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> str:
        # Anything but an exact "Georeferenced" cannot be trusted for location
        return GEOREFERENCED if v == GEOREFERENCED else NOT_GEOREFERENCED

    @field_validator("geom_type", mode="before")
    @classmethod
    def coerce_geom_type(cls, v: Any) -> Optional[str]:
        return v if v in ("Point", "LineString", "Polygon") else None

    @field_validator("path", mode="before")
    @classmethod
    def coerce_path(cls, v: Any) -> List[Any]:
        return _as_list(v)

    @property
    def is_georeferenced(self) -> bool:
        return self.status == GEOREFERENCED


class Record(BaseModel):
    """An uploaded / indexed infrastructure record"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    record_type_path: str = Field(default="", alias="recordTypePath")
    record_type_id: Optional[str] = Field(default=None, alias="recordTypeId")
    org_name: Optional[str] = Field(default=None, alias="orgName")
    priority: Optional[int] = None

    # Raw attribute fields some record sources carry instead of a path
    utility_type: Optional[str] = Field(default=None, alias="utilityType")
    record_type: Optional[str] = Field(default=None, alias="recordType")

    uploader_name: Optional[str] = Field(default=None, alias="uploaderName")
    uploaded_at: Optional[str] = Field(default=None, alias="uploadedAt")
    notes: Optional[str] = None
    files: List[RecordFile] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator(
        "record_type_id", "org_name", "utility_type", "record_type",
        "uploader_name", "uploaded_at", "notes",
        mode="before"
    )
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        return _as_optional_str(v)

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> Optional[int]:
        try:
            return None if v is None else int(v)
        except (TypeError, ValueError):
            return None

    @field_validator("files", mode="before")
    @classmethod
    def coerce_files(cls, v: Any) -> List[Any]:
        """Validate files one by one; a bad file is dropped, not its record"""
        files = []
        for i, raw in enumerate(_as_list(v)):
            if isinstance(raw, RecordFile):
                files.append(raw)
                continue
            try:
                files.append(RecordFile.model_validate(raw))
            except ValidationError as e:
                logger.debug(f"Dropping file {i}: {e.error_count()} invalid fields")
        return files

    @field_validator("record_type_path", mode="before")
    @classmethod
    def coerce_record_type_path(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""


class WorkAreaRequest(BaseModel):
    """A drawn work area together with the candidate records for it"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    deadline: Optional[str] = None
    polygon: List[Point] = Field(default_factory=list)
    records: List[Record] = Field(default_factory=list)

    @field_validator("polygon", "records", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any) -> List[Any]:
        return _as_list(v)


# ============================================================
# Completeness Models
# ============================================================

class CompletenessResult(BaseModel):
    completeness_pct: int
    record_count: int
    utility_coverage_score: float
    record_density_score: float
    categories_present: List[str] = Field(default_factory=list)
    categories_missing: List[str] = Field(default_factory=list)
    category_counts: Dict[str, int] = Field(default_factory=dict)
    records_by_type: Dict[str, int] = Field(default_factory=dict)
    records_with_files: int = 0
    gaps: List[str] = Field(default_factory=list)


# ============================================================
# Guidance Models
# ============================================================

class GuidanceItem(BaseModel):
    id: str
    path: str
    label: str
    priority: int
    present: bool


class GuidanceGroup(BaseModel):
    owner: str
    domain: str
    color: str
    items: List[GuidanceItem] = Field(default_factory=list)
    missing: List[GuidanceItem] = Field(default_factory=list)
    present_count: int = 0
    highest_missing_priority: Optional[int] = None
    status: Literal["Complete", "Incomplete"] = "Incomplete"


class GuidanceTotals(BaseModel):
    missing: int
    present: int
    total: int


class GuidanceReport(BaseModel):
    groups: List[GuidanceGroup] = Field(default_factory=list)
    totals: GuidanceTotals
    summary: str
    checklist: str


# ============================================================
# Inventory Models
# ============================================================

class InventoryItem(BaseModel):
    record_id: str
    label: str
    owner: str
    path: str


class InventoryCategory(BaseModel):
    category: str
    display_name: str
    items: List[InventoryItem] = Field(default_factory=list)


# ============================================================
# Main Work Area Analysis Model
# ============================================================

class WorkAreaAnalysis(BaseModel):
    """
    Complete analysis of one work area

    An inactive analysis (polygon with too few vertices) carries no
    completeness, guidance or inventory. That is different from an active
    analysis with zero coverage.
    """
    analysis_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())
    work_area_id: Optional[str] = None
    title: Optional[str] = None

    active: bool
    vertex_count: int
    area_sq_meters: Optional[float] = None
    record_ids_inside: List[str] = Field(default_factory=list)

    completeness: Optional[CompletenessResult] = None
    guidance: Optional[GuidanceReport] = None
    inventory: Optional[List[InventoryCategory]] = None
