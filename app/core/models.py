from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class NewsKind(str, Enum):
    TEXT = "text"
    URL = "url"


class Label(str, Enum):
    FAKE = "fake"
    REAL = "real"
    UNCERTAIN = "uncertain"


class CheckNewsRequest(BaseModel):
    type: NewsKind = Field(..., description="Which field carries the news item: text | url")
    text: Optional[str] = Field(None, description="Full news text, required when type is 'text'.")
    url: Optional[str] = Field(None, description="News article URL, required when type is 'url'.")

    @property
    def content(self) -> Optional[str]:
        """The field named by `type`; the other one is ignored."""
        return self.text if self.type == NewsKind.TEXT else self.url

    def missing_field(self) -> Optional[str]:
        """Name of the required field when it is absent or empty, else None."""
        if not self.content:
            return self.type.value
        return None


class ClassificationResult(BaseModel):
    label: Label = Field(..., description="fake | real | uncertain")
    confidence: float = Field(..., description="Model confidence, nominally 0.0 to 1.0 (not clamped)")
    explanation: str = Field(..., description="Short explanation in simple English")
