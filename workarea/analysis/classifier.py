"""
Record classifier

Maps a record's free-text taxonomy path ("owner / domain / type") or its raw
utility/record-type attributes onto canonical utility categories and
normalized record types. Unrecognised input is not an error, it simply
does not classify.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union
from loguru import logger

from ..config import ScoringConfig
from ..models import Record, UtilityCategory


RecordLike = Union[Record, Mapping[str, Any], str, None]


class RecordClassifier:
    """Classifies records into canonical utility categories and record types"""

    # Precedence-ordered (category, substrings that match, substrings that veto)
    UTILITY_RULES: List[Tuple[UtilityCategory, Tuple[str, ...], Tuple[str, ...]]] = [
        (UtilityCategory.WASTEWATER, ("wastewater", "sanitary", "sewer"), ()),
        (UtilityCategory.STORM, ("storm",), ()),
        (UtilityCategory.GAS, ("gas",), ()),
        (UtilityCategory.ELECTRIC, ("electric", "power", "hydro"), ()),
        (UtilityCategory.TELECOM, ("telecom", "telco"), ()),
        (UtilityCategory.WATER, ("water",), ("waste", "storm")),
    ]

    # Record type tokens, checked after the as-built synonyms
    RECORD_TYPE_RULES: List[Tuple[str, Tuple[str, ...]]] = [
        ("Locate", ("locate",)),
        ("Permit", ("permit",)),
        ("PDF", ("pdf", "document")),
    ]
    AS_BUILT = "AsBuilt"
    OTHER = "Other"

    # APWA-inspired palette (stroke colors)
    ELECTRIC_COLOR = "#dc2626"  # Red
    GAS_COLOR = "#ca8a04"       # Yellow
    TELECOM_COLOR = "#ea580c"   # Orange
    WATER_COLOR = "#2563eb"     # Blue
    SEWER_COLOR = "#059669"     # Green (sanitary and storm)
    ROADS_COLOR = "#6b7280"     # White-gray
    FALLBACK_COLOR = "#475569"  # Slate

    def __init__(self, config: Optional[ScoringConfig] = None):
        config = config or ScoringConfig()
        self.as_built_synonyms = tuple(s.lower() for s in config.as_built_synonyms)

    # ============================================================
    # Utility category
    # ============================================================

    def classify_utility(self, value: RecordLike) -> Optional[UtilityCategory]:
        """
        Classify a record, attribute mapping or path string

        An explicit utility_type / utilityType attribute wins over the
        record type path. Returns None when nothing matches.
        """
        explicit = self._utility_attribute(value)
        if explicit:
            category = self.classify_path(explicit)
            if category is not None:
                return category

        path = self._path_of(value)
        category = self.classify_path(path)
        if category is None and path:
            logger.debug(f"No utility category for path '{path}'")
        return category

    def classify_path(self, path: Optional[str]) -> Optional[UtilityCategory]:
        """Match path segments in order against the precedence-ordered rules"""
        for segment in self.tokenize(path):
            for category, needles, vetoes in self.UTILITY_RULES:
                if any(n in segment for n in needles) and not any(v in segment for v in vetoes):
                    return category
        return None

    @staticmethod
    def tokenize(path: Optional[str]) -> List[str]:
        """Split a path on '/', lowercase and trim segments, drop empty ones"""
        if not path or not isinstance(path, str):
            return []
        return [s.strip().lower() for s in path.split("/") if s.strip()]

    # ============================================================
    # Record type
    # ============================================================

    def classify_record_type(self, value: RecordLike) -> str:
        """
        Normalize the record type token of a record

        Uses an explicit record_type / recordType attribute, otherwise the
        last segment of a path with at least two segments.
        """
        token = self._record_type_token(value)
        if not token:
            return self.OTHER

        lower = token.lower()
        if self.is_as_built(lower):
            return self.AS_BUILT
        for name, needles in self.RECORD_TYPE_RULES:
            if any(n in lower for n in needles):
                return name

        return token

    def is_as_built(self, token: Optional[str]) -> bool:
        if not token:
            return False
        lower = token.lower()
        return lower == self.AS_BUILT.lower() or any(s in lower for s in self.as_built_synonyms)

    def record_type_label(self, value: RecordLike) -> str:
        """Human label of the record type (raw token, not normalized)"""
        return self._record_type_token(value) or self._path_of(value) or self.OTHER

    # ============================================================
    # Colors
    # ============================================================

    @classmethod
    def color_for_domain(cls, domain: Optional[str]) -> str:
        """APWA stroke color for a taxonomy domain name"""
        d = (domain or "").lower()
        if "power" in d or "electric" in d:
            return cls.ELECTRIC_COLOR
        if "gas" in d:
            return cls.GAS_COLOR
        if "telecom" in d or "telco" in d or "comm" in d:
            return cls.TELECOM_COLOR
        if "water" in d and "waste" not in d and "storm" not in d:
            return cls.WATER_COLOR
        if "wastewater" in d or "sanitary" in d or "storm" in d:
            return cls.SEWER_COLOR
        if "road" in d or "surface" in d:
            return cls.ROADS_COLOR
        return cls.FALLBACK_COLOR

    # ============================================================
    # Field normalization
    # ============================================================

    @staticmethod
    def _path_of(value: RecordLike) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, Record):
            return value.record_type_path
        if isinstance(value, Mapping):
            for key in ("recordTypePath", "record_type_path", "path"):
                path = value.get(key)
                if isinstance(path, str) and path:
                    return path
        return ""

    @staticmethod
    def _utility_attribute(value: RecordLike) -> Optional[str]:
        if isinstance(value, Record):
            return value.utility_type
        if isinstance(value, Mapping):
            for key in ("utility_type", "utilityType"):
                attr = value.get(key)
                if isinstance(attr, str) and attr.strip():
                    return attr
        return None

    def _record_type_token(self, value: RecordLike) -> str:
        explicit: Optional[str] = None
        if isinstance(value, Record):
            explicit = value.record_type
        elif isinstance(value, Mapping):
            for key in ("record_type", "recordType"):
                attr = value.get(key)
                if isinstance(attr, str) and attr.strip():
                    explicit = attr
                    break
        if explicit and explicit.strip():
            return explicit.strip()

        segments = self._raw_segments(self._path_of(value))
        if len(segments) >= 2:
            return segments[-1]
        return ""

    @staticmethod
    def _raw_segments(path: str) -> Sequence[str]:
        return [s.strip() for s in path.split("/") if s.strip()] if path else []
