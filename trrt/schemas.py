"""
Scope and Terminology Schemas
Pydantic validation schemas for the SAF and MRG files.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==================== CONSTANTS ====================

REQUIRED_ENTRY_FIELDS = [
    "term",
    "vsntag",
    "scopetag",
    "locator",
    "glossaryText",
]


def _to_text(value: Any) -> Any:
    """Tags are always text, even when built from Python numbers."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _to_text_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        value = [value]
    if isinstance(value, list):
        return [_to_text(v) for v in value]
    return value


# ==================== SAF SCHEMAS ====================

class ScopeInfo(BaseModel):
    """The `scope` section of a SAF."""
    model_config = ConfigDict(extra="allow")

    scopetag: str = Field(..., min_length=1, description="Tag of the scope itself")
    glossarydir: str = Field(..., min_length=1, description="Directory holding the MRG files")
    website: str = Field(default="", description="Base URL used to resolve navurls")
    scopedir: Optional[str] = None
    curatedir: Optional[str] = None
    mrgfile: Optional[str] = None

    @field_validator("scopetag", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)


class ScopeRef(BaseModel):
    """A scope known to (and importable by) the current scope."""
    model_config = ConfigDict(extra="allow")

    scopetags: List[str] = Field(default_factory=list)
    scopedir: Optional[str] = None

    @field_validator("scopetags", mode="before")
    @classmethod
    def coerce_text_list(cls, v):
        return _to_text_list(v)


class VersionInfo(BaseModel):
    """A terminology version listed in the SAF."""
    model_config = ConfigDict(extra="allow")

    vsntag: str
    mrgfile: Optional[str] = None
    altvsntags: List[str] = Field(default_factory=list)

    @field_validator("vsntag", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)

    @field_validator("altvsntags", mode="before")
    @classmethod
    def coerce_text_list(cls, v):
        return _to_text_list(v)


class ScopeAdminFile(BaseModel):
    """Scope Administration File (saf.yaml)."""
    model_config = ConfigDict(extra="allow")

    scope: ScopeInfo
    scopes: List[ScopeRef] = Field(default_factory=list)
    versions: List[VersionInfo] = Field(default_factory=list)

    @field_validator("scopes", "versions", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


# ==================== MRG SCHEMAS ====================

class TerminologyInfo(BaseModel):
    """The `terminology` section of an MRG."""
    model_config = ConfigDict(extra="allow")

    scopetag: Optional[str] = None
    scopedir: Optional[str] = None
    curatedir: Optional[str] = None
    vsntag: Optional[str] = None
    altvsntags: List[str] = Field(default_factory=list)

    @field_validator("scopetag", "vsntag", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)

    @field_validator("altvsntags", mode="before")
    @classmethod
    def coerce_text_list(cls, v):
        return _to_text_list(v)


class GlossaryEntry(BaseModel):
    """
    A single glossary entry.

    Field names follow the MRG file format through aliases, so
    `model_dump(by_alias=True)` yields the keys templates refer to
    (`glossaryText`, `formPhrases`, ...). Unknown MRG keys are kept.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    term: str
    vsntag: str
    scopetag: str
    locator: str
    glossary_text: str = Field(..., alias="glossaryText")
    form_phrases: Optional[str] = Field(None, alias="formPhrases")
    navurl: Optional[str] = None
    headingids: List[str] = Field(default_factory=list)
    altvsntags: List[str] = Field(default_factory=list)

    @field_validator("term", "vsntag", "scopetag", "locator", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _to_text(v)

    @field_validator("headingids", "altvsntags", mode="before")
    @classmethod
    def coerce_text_list(cls, v):
        return _to_text_list(v)

    def template_fields(self) -> Dict[str, Any]:
        """Field set as seen by render templates."""
        return self.model_dump(by_alias=True)


class TerminologyFile(BaseModel):
    """Machine Readable Glossary (mrg.<scopetag>.<vsntag>.yaml)."""
    model_config = ConfigDict(extra="allow")

    terminology: TerminologyInfo = Field(default_factory=TerminologyInfo)
    scopes: List[ScopeRef] = Field(default_factory=list)
    entries: List[Any] = Field(default_factory=list)

    @field_validator("terminology", mode="before")
    @classmethod
    def none_as_default(cls, v):
        return {} if v is None else v

    @field_validator("scopes", "entries", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


def missing_required_fields(raw: Dict[str, Any]) -> List[str]:
    """Names of required entry fields that are absent, null or blank."""
    missing = []
    for name in REQUIRED_ENTRY_FIELDS:
        value = raw.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing
