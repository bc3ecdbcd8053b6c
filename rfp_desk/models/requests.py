"""Input models for creating and editing RFPs."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rfp_desk.models.records import RFPStatus


class RFPCreate(BaseModel):
    """Fields collected by the upload form.

    Required fields are checked by the record store, not here, so that a
    missing value surfaces as a ``RecordValidationError``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "projectName": "DELHI METRO RAIL CORPORATION (DMRC)",
                    "productSummary": "Supply of Control and Communications grade Copper Cables",
                    "deadline": "2026-04-30",
                    "status": "open",
                }
            ]
        },
    )

    project_name: str = ""
    product_summary: str = ""
    deadline: str = ""
    duration_days: int | None = Field(
        default=None,
        ge=0,
        description="Explicit duration; derived from the deadline when omitted",
    )
    status: RFPStatus = RFPStatus.OPEN
    file_url: str | None = Field(default=None, description="External document reference")


class RFPPatch(BaseModel):
    """Partial edit of an existing RFP. Unset fields are left untouched."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    project_name: str | None = Field(default=None, min_length=1)
    product_summary: str | None = None
    deadline: str | None = None
    duration_days: int | None = Field(default=None, ge=0)
    status: RFPStatus | None = None
    file_url: str | None = None
    file_data: str | None = None
    file_name: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def changes(self) -> dict:
        """Fields explicitly present in the patch, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


@dataclass
class UploadedFile:
    """A file picked in the upload form, before it is encoded."""

    file_name: str
    content: bytes
