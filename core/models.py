"""
Data models for analysis replies, attachments and the UI state machine.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppState(str, Enum):
    """Which view the UI is showing. Exactly one is active per session."""
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    EXECUTING = "EXECUTING"
    RESULTS = "RESULTS"
    ERROR = "ERROR"


class CodeError(BaseModel):
    """One mistake reported by the tutor model."""
    model_config = ConfigDict(frozen=True)

    type: str
    line: str = ""  # free-text location, e.g. "3" or "3-4"
    description: str
    fix: str = ""

    @field_validator("line", mode="before")
    @classmethod
    def _line_as_text(cls, value):
        if value is None:
            return ""
        return str(value)


class AnalysisResult(BaseModel):
    """
    Structured tutor reply. Field aliases are the camelCase keys of the
    JSON document the model is asked to return.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    language: str = Field(min_length=1)
    errors: List[CodeError]
    correct_syntax: str = Field(alias="correctSyntax", min_length=1)
    explanation: str = Field(min_length=1)
    simplified_logic: Optional[str] = Field(default=None, alias="simplifiedLogic")
    formatted_code: str = Field(alias="formattedCode", min_length=1)
    learning_tips: List[str] = Field(default_factory=list, alias="learningTips")
    output: Optional[str] = None

    @field_validator("language", "correct_syntax", "explanation", "formatted_code")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("simplified_logic", "output")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("learning_tips", mode="before")
    @classmethod
    def _tips_default(cls, value):
        return [] if value is None else value


@dataclass(frozen=True)
class Attachment:
    """A non-source file (image, PDF, ...) sent inline with a request."""
    name: str
    mime_type: str
    data: str  # base64

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def to_content_block(self) -> dict:
        """LangChain message content block carrying this file."""
        if self.is_image:
            return {
                "type": "image_url",
                "image_url": {"url": f"data:{self.mime_type};base64,{self.data}"},
            }
        return {"type": "media", "mime_type": self.mime_type, "data": self.data}
