"""Shared models for commitional."""
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pydantic import BaseModel, Field

class CommitType(str, Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"

class Severity(IntEnum):
    DISABLED = 0
    WARNING = 1
    ERROR = 2

class Applicability(str, Enum):
    ALWAYS = "always"
    NEVER = "never"

class CommitPart(str, Enum):
    """Parts of a commit message a rule can target."""
    NAMESPACE = "namespace"
    TYPE = "type"
    SCOPE = "scope"
    SUBJECT = "subject"
    HEADER = "header"
    BODY = "body"
    FOOTER = "footer"
    FOOTERS = "footers"
    TRAILER = "trailer"

class RuleType(str, Enum):
    """Every kind of rule the engine knows how to build.

    The rule id in configuration is ``"<part>-<rule type>"``, for example
    ``subject-max-length`` or ``namespace-alignment``.
    """
    EMPTY = "empty"
    TRIM = "trim"
    FULL_STOP = "full-stop"
    EXCLAMATION_MARK = "exclamation-mark"
    MAX_LENGTH = "max-length"
    MIN_LENGTH = "min-length"
    MAX_LINE_LENGTH = "max-line-length"
    LEADING_BLANK = "leading-blank"
    CASE = "case"
    ENUM = "enum"
    ALLOW_MULTIPLE = "allow-multiple"
    EXISTS = "exists"
    ALIGNMENT = "alignment"

@dataclass
class GitContext:
    files: List[str] = field(default_factory=list)
    is_staged: bool = False

class PartReport(BaseModel):
    type: str = Field(description="Commit part the violations belong to")
    filter: Optional[str] = Field(default=None, description="Footer token when the report targets a single footer")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
