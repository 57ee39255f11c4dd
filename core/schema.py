"""
SBOM document schema

Pydantic models for the editable SBOM shape. Field names are snake_case in
Python and camelCase on the wire (``downloadLocation``, ``relationshipType``).
Unknown keys are dropped and optional fields that were not supplied are left
out of the dumped record.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from core.exceptions import SbomValidationError


class ComponentType(str, Enum):
    LIBRARY = "library"
    FRAMEWORK = "framework"
    APPLICATION = "application"
    CONTAINER = "container"
    OPERATING_SYSTEM = "operating-system"
    DEVICE = "device"
    FILE = "file"


class HashAlgorithm(str, Enum):
    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA512 = "SHA-512"
    MD5 = "MD5"


class RelationshipType(str, Enum):
    DEPENDS_ON = "DEPENDS_ON"
    CONTAINS = "CONTAINS"
    DEPENDENCY_OF = "DEPENDENCY_OF"
    DEV_DEPENDENCY_OF = "DEV_DEPENDENCY_OF"
    OPTIONAL_DEPENDENCY_OF = "OPTIONAL_DEPENDENCY_OF"
    PROVIDED_BY = "PROVIDED_BY"
    TEST_DEPENDENCY_OF = "TEST_DEPENDENCY_OF"


class _SchemaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')

    @model_validator(mode='before')
    @classmethod
    def _reject_explicit_nulls(cls, data: Any) -> Any:
        # Optional means "may be omitted", not "may be null"
        if isinstance(data, dict):
            known = set(cls.model_fields) | {f.alias for f in cls.model_fields.values() if f.alias}
            nulls = [key for key in data if key in known and data[key] is None]
            if nulls:
                raise ValueError(f"{', '.join(nulls)} cannot be null")
        return data


class Hash(_SchemaModel):
    algorithm: HashAlgorithm
    value: str


class Component(_SchemaModel):
    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    type: ComponentType
    supplier: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    licenses: Optional[List[str]] = None
    purl: Optional[str] = None      # Package URL
    cpe: Optional[str] = None       # CPE 2.3 formatted string
    hashes: Optional[List[Hash]] = None
    download_location: Optional[str] = None
    homepage: Optional[str] = None
    copyright_text: Optional[str] = None


class Tool(_SchemaModel):
    vendor: str
    name: str
    version: str


class Author(_SchemaModel):
    name: str
    email: Optional[str] = None
    organization: Optional[str] = None


class Relationship(_SchemaModel):
    # Free-text references, not checked against the component list
    source_component: str
    target_component: str
    relationship_type: RelationshipType


class Metadata(_SchemaModel):
    timestamp: str
    tools: List[Tool]
    authors: List[Author]
    document_namespace: Optional[str] = None    # SPDX only
    license_list_version: Optional[str] = None  # SPDX only
    relationships: Optional[List[Relationship]] = None


class SbomCreate(_SchemaModel):
    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    format: str = Field(min_length=1)
    components: List[Component]
    metadata: Metadata

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class SbomUpdate(_SchemaModel):
    name: Optional[str] = Field(default=None, min_length=1)
    version: Optional[str] = Field(default=None, min_length=1)
    format: Optional[str] = Field(default=None, min_length=1)
    components: Optional[List[Component]] = None
    metadata: Optional[Metadata] = None

    def to_fields(self) -> Dict[str, Any]:
        """Only the top-level fields the caller actually supplied"""
        dumped = self.model_dump(mode='json', by_alias=True, exclude_none=True)
        # Top-level field names and wire names coincide
        return {key: value for key, value in dumped.items() if key in self.model_fields_set}


def _describe(error: ValidationError) -> List[str]:
    violations = []
    for item in error.errors():
        location = ".".join(str(part) for part in item['loc'])
        if location:
            violations.append(f"{location}: {item['msg']}")
        else:
            violations.append(item['msg'])
    return violations


def _validate(model: type, data: Any):
    if not isinstance(data, dict):
        raise SbomValidationError("Request body must be a JSON object")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        violations = _describe(e)
        raise SbomValidationError("; ".join(violations), violations=violations) from e


def validate_insert(data: Any) -> SbomCreate:
    """Validate a full SBOM payload; raises SbomValidationError"""
    return _validate(SbomCreate, data)


def validate_partial_update(data: Any) -> SbomUpdate:
    """
    Validate a partial SBOM payload. Every top-level field is optional, but
    a supplied field must satisfy its full shape.
    """
    return _validate(SbomUpdate, data)
