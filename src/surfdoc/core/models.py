"""Document-level models: front matter, diagnostics, and parse results"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from surfdoc.core.blocks import Block, Span


class Severity(str, Enum):
    """Diagnostic severity, most severe first."""
    error   = "error"
    warning = "warning"
    info    = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.error: 3, Severity.warning: 2, Severity.info: 1}


class Diagnostic(BaseModel):
    """A non-fatal problem found while parsing."""
    model_config = ConfigDict(frozen=True)

    severity: Severity
    message:  str
    span:     Optional[Span] = None
    code:     Optional[str] = None


# --- front matter ---

class DocType(str, Enum):
    """Purpose of the document as declared in front matter."""
    doc          = "doc"
    guide        = "guide"
    conversation = "conversation"
    plan         = "plan"
    agent        = "agent"
    preference   = "preference"
    report       = "report"
    proposal     = "proposal"
    incident     = "incident"
    review       = "review"


class DocStatus(str, Enum):
    draft    = "draft"
    active   = "active"
    closed   = "closed"
    archived = "archived"


class Scope(str, Enum):
    personal          = "personal"
    workspace_private = "workspace-private"
    workspace         = "workspace"
    repo              = "repo"
    public            = "public"


class Confidence(str, Enum):
    low    = "low"
    medium = "medium"
    high   = "high"


class Relationship(str, Enum):
    produces   = "produces"
    consumes   = "consumes"
    references = "references"
    supersedes = "supersedes"


class RelatedDoc(BaseModel):
    """A link from this document to another file."""
    model_config = ConfigDict(frozen=True)

    path:         str
    relationship: Relationship = Relationship.references


class FrontMatter(BaseModel):
    """Typed view of the YAML header; unrecognized keys land in extra."""
    model_config = ConfigDict(frozen=True)

    title:        Optional[str] = None
    doc_type:     Optional[DocType] = None          # `type:` in source
    status:       Optional[DocStatus] = None
    scope:        Optional[Scope] = None
    tags:         list[str] = Field(default_factory=list)
    created:      Optional[str] = None
    updated:      Optional[str] = None
    author:       Optional[str] = None
    confidence:   Optional[Confidence] = None
    version:      Optional[int] = None
    contributors: list[str] = Field(default_factory=list)
    description:  Optional[str] = None
    workspace:    Optional[str] = None
    decision:     Optional[str] = None
    related:      list[RelatedDoc] = Field(default_factory=list)
    extra:        dict[str, Any] = Field(default_factory=dict)


class SurfDoc(BaseModel):
    """A parsed or built document: optional front matter plus ordered blocks."""
    model_config = ConfigDict(frozen=True)

    front_matter: Optional[FrontMatter] = None
    blocks:       list[Block] = Field(default_factory=list)
    source:       str = ""

    def to_surf_source(self) -> str:
        """Serialize back to canonical SurfDoc text."""
        from surfdoc.core.serialize import to_surf_source
        return to_surf_source(self)


class ParseResult(BaseModel):
    """Parsed document together with everything reported along the way."""
    model_config = ConfigDict(frozen=True)

    doc:         SurfDoc
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    def at_least(self, severity: Severity) -> list[Diagnostic]:
        """Return diagnostics at or above the given severity."""
        return [d for d in self.diagnostics if d.severity.rank >= severity.rank]
