"""Core domain models for duplicate detection.

- CandidateRecord: a caller-owned record the engine compares a query against.
  Only id, name and description are read by the engine; metadata is carried
  through untouched for display (sector, category, price, estimated time...).
"""

from typing import Any, Dict, Generic, Iterable, Mapping, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

TMetadata = TypeVar("TMetadata")

CORE_FIELDS = ("id", "name", "description")


class CandidateRecord(BaseModel, Generic[TMetadata]):
    """A record that a query may duplicate."""

    id: str = Field(..., description="Unique record identifier")
    name: str = Field(..., description="Primary text field used for matching")
    description: Optional[str] = Field(None, description="Secondary text field")
    metadata: TMetadata = Field(
        default_factory=dict, description="Caller-specific fields, never scored"
    )

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """Accept integer primary keys as well as UUID strings."""
        if v is None:
            raise ValueError("id is required")
        text = str(v).strip()
        if not text:
            raise ValueError("id cannot be empty")
        return text

    @field_validator("name")
    @classmethod
    def require_name(cls, v: str) -> str:
        """Reject empty or whitespace-only names."""
        if not v or not v.strip():
            raise ValueError("name cannot be empty or whitespace-only")
        return v

    @field_validator("description")
    @classmethod
    def blank_description_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Any],
        name_keys: Iterable[str] = ("name", "title"),
    ) -> "CandidateRecord[Dict[str, Any]]":
        """Build a record from a loosely-typed row such as a backend query result.

        The first non-empty key in ``name_keys`` supplies the name, so product
        rows that carry ``title`` instead of ``name`` work unchanged. Every
        other key except id and description lands in metadata.

        Args:
            row: Mapping with at least an id and one of name_keys
            name_keys: Keys to try, in order, for the record name

        Returns:
            CandidateRecord with a dict metadata payload
        """
        name_keys = tuple(name_keys)
        name = None
        for key in name_keys:
            value = row.get(key)
            if isinstance(value, str) and value.strip():
                name = value
                break

        metadata = {
            key: value
            for key, value in row.items()
            if key not in CORE_FIELDS and key not in name_keys
        }

        return cls(
            id=row.get("id"),
            name=name if name is not None else "",
            description=row.get("description"),
            metadata=metadata,
        )
