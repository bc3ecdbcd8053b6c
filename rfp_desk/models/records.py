"""RFP record models.

Records are persisted in the camelCase shape the browser front end has
always written (``_id``, ``projectName``, ``fileData`` ...), so the same
JSON can move between local storage, export files and share links.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

SEED_ID_PREFIX = "default-"
BLANK_DOCUMENT_URL = "about:blank"


class RFPStatus(str, Enum):
    """Stored lifecycle status of an RFP."""

    OPEN = "open"
    EXTENDED = "extended"
    CLOSED = "closed"


class ExternalAttachment(BaseModel):
    """Attachment stored as a reference to an existing document."""

    url: str
    file_name: str | None = None


class EncodedAttachment(BaseModel):
    """Attachment embedded in the record as a base64 data URL."""

    data: str = Field(..., description="data:<media-type>;base64,<payload>")
    file_name: str
    file_size: int | None = Field(default=None, ge=0)

    @property
    def media_type(self) -> str:
        header = self.data.split(",", 1)[0]
        if header.startswith("data:"):
            return header[len("data:"):].split(";", 1)[0] or "application/octet-stream"
        return "application/octet-stream"


class RFPRecord(BaseModel):
    """A single Request For Proposal."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    project_name: str = Field(..., min_length=1)
    product_summary: str = ""
    deadline: str
    duration_days: int = Field(default=0, ge=0)
    status: RFPStatus = RFPStatus.OPEN
    uploaded_at: str | None = None

    # Attachment, flattened: either file_url or file_data, never both.
    file_url: str | None = None
    file_data: str | None = None
    file_name: str | None = None
    file_size: int | None = Field(default=None, ge=0)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("duration_days", mode="before")
    @classmethod
    def _blank_duration(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        return value

    @model_validator(mode="after")
    def _single_attachment(self) -> "RFPRecord":
        if self.file_url and self.file_data:
            raise ValueError("a record holds either fileUrl or fileData, not both")
        return self

    @property
    def is_seed(self) -> bool:
        return self.id.startswith(SEED_ID_PREFIX)

    @property
    def attachment(self) -> ExternalAttachment | EncodedAttachment | None:
        """The record's attachment in its typed form, if it has one."""
        if self.file_url:
            return ExternalAttachment(url=self.file_url, file_name=self.file_name)
        if self.file_data:
            return EncodedAttachment(
                data=self.file_data,
                file_name=self.file_name or "document.pdf",
                file_size=self.file_size,
            )
        return None

    def to_storage(self) -> dict[str, Any]:
        """Dump in the persisted camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
