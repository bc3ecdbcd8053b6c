"""Result types for soft-failing operations and transfers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rfp_desk.models.records import RFPRecord

T = TypeVar("T")


@dataclass
class DecodeResult(Generic[T]):
    """Outcome of a decode that falls back instead of raising.

    ``value`` is set on success. On failure ``value`` is None, ``fallback``
    holds the best-effort substitute and ``reason`` says what went wrong.
    """

    value: T | None = None
    fallback: Any = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, value: T) -> "DecodeResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str, fallback: Any = None) -> "DecodeResult[T]":
        return cls(fallback=fallback, reason=reason)


class ImportMode(str, Enum):
    """How imported records combine with the existing collection."""

    MERGE = "merge"
    REPLACE = "replace"


class ImportReport(BaseModel):
    """Summary shown to the user after an import."""

    mode: ImportMode
    imported: int = Field(..., ge=0, description="Records read from the import file")
    total: int = Field(..., ge=0, description="Records in the collection afterwards")


class ShareLink(BaseModel):
    """A share URL and how its payload travels."""

    url: str
    records: int = Field(..., ge=0)
    via_session: bool = Field(
        default=False,
        description="True when the payload was too long for the URL and was parked in storage",
    )


class ExportDocument(BaseModel):
    """Envelope written by the export action and accepted by import."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version: str = "1.0"
    export_date: str | None = None
    rfps: list[RFPRecord] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
