"""Data models for the QMD render pipeline"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class Document:
    """Raw QMD source for a single render call."""
    raw_text: str
    path: Optional[Path] = None


@dataclass(frozen=True)
class FrontMatter:
    """Flat key/value metadata split from the document body."""
    metadata: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class MathBlock:
    """A protected math region; index matches its placeholder token."""
    index: int
    original_text: str


class CalloutKind(str, Enum):
    note = "note"
    warning = "warning"
    important = "important"
    tip = "tip"
    caution = "caution"


@dataclass(frozen=True)
class CalloutBlock:
    """A parsed :::{.callout-*} block; transient, never persisted."""
    kind: str                       # raw kind token; may be outside CalloutKind
    title: Optional[str]
    body_markdown: str

    @property
    def display_title(self) -> str:
        return self.title or self.kind[:1].upper() + self.kind[1:]


class RenderedFragment(BaseModel):
    """Final HTML fragment plus the metadata consumed for its heading block."""
    html: str
    metadata: dict[str, str] = {}
    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    math_blocks: int = Field(default=0, ge=0, description="Math regions protected during the render")
