"""Task handles returned by settings writes. Read-only; no business logic."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskError(BaseModel):
    """Error object the service attaches to a failed task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    message: str = Field(..., description="Human-readable reason")
    code: str = Field(..., description="Machine error code, e.g. invalid_settings_typo_tolerance")
    type: str = Field(..., description="invalid_request|internal|auth|system")
    link: str | None = Field(default=None, description="Documentation link for the code")


class TaskInfo(BaseModel):
    """Handle for an enqueued settings change. Applied asynchronously by the service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    task_uid: int = Field(..., ge=0, description="Task id to poll")
    index_uid: str | None = Field(default=None, description="Index the task applies to")
    status: str = Field(..., description="enqueued|processing|succeeded|failed|canceled")
    type: str = Field(..., description="settingsUpdate for every settings write")
    enqueued_at: datetime = Field(..., description="When the service accepted the task")
    error: TaskError | None = Field(default=None, description="Set when status is failed")
