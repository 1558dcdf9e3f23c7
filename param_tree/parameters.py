import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


# =========================
# Type tags
# =========================

BASE_TYPES = ("string", "integer", "number", "boolean", "object", "file")
ARRAY_SUFFIX = "[]"
VALID_TYPES = set(BASE_TYPES) | {t + ARRAY_SUFFIX for t in BASE_TYPES}

TYPE_ALIASES = {
    "int": "integer",
    "bool": "boolean",
    "float": "number",
    "double": "number",
    "str": "string",
}


def normalize_type(raw: Optional[str]) -> str:
    if not raw:
        return "string"

    tag = str(raw).strip().lower().replace(" ", "")
    is_array = tag.endswith(ARRAY_SUFFIX)
    base = tag[: -len(ARRAY_SUFFIX)] if is_array else tag
    base = TYPE_ALIASES.get(base, base)

    if base not in BASE_TYPES:
        logger.warning("Unknown parameter type %r, falling back to string", raw)
        base = "string"

    return base + ARRAY_SUFFIX if is_array else base


class ParameterKind(str, Enum):
    SCALAR = "scalar"
    OBJECT = "object"
    OBJECT_LIST = "object_list"


# =========================
# Models
# =========================

class ParameterDescriptor(BaseModel):
    name: str
    type: str = "string"
    example: Any = None
    required: bool = False
    description: str = ""
    exclude_from_examples: bool = False
    enum: List[Any] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        return normalize_type(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description_or_empty(cls, value):
        return value or ""

    @property
    def kind(self) -> ParameterKind:
        if self.type == "object":
            return ParameterKind.OBJECT
        if self.type == "object" + ARRAY_SUFFIX:
            return ParameterKind.OBJECT_LIST
        return ParameterKind.SCALAR

    @property
    def is_array(self) -> bool:
        return self.type.endswith(ARRAY_SUFFIX)

    @property
    def base_type(self) -> str:
        return self.type[: -len(ARRAY_SUFFIX)] if self.is_array else self.type

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "ParameterDescriptor":
        """
        Builds a descriptor from the loosely-typed dict an extractor produces.
        The mapping key wins over a missing or empty ``name``.
        """
        values = dict(data)
        values["name"] = values.get("name") or name
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


RawParameters = Mapping[str, Union[ParameterDescriptor, Mapping[str, Any]]]


def parameters_from_mapping(mapping: RawParameters) -> Dict[str, ParameterDescriptor]:
    """Ingests an ordered path -> descriptor mapping, keeping declaration order."""
    parameters: Dict[str, ParameterDescriptor] = {}

    for path, data in mapping.items():
        if isinstance(data, ParameterDescriptor):
            parameters[path] = data
        else:
            parameters[path] = ParameterDescriptor.from_dict(path, data or {})

    return parameters
