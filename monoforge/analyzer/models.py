"""Pydantic v2 models for the documentation analyzer.

Defines the classified document records and the derived analysis that feeds
the project-context report.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class DocumentCategory(str, Enum):
    """Category derived from a document's directory path."""
    REQUIREMENTS = "requirements"
    ARCHITECTURE = "architecture"
    DESIGN = "design"
    INFRASTRUCTURE = "infrastructure"
    UNCLASSIFIED = "unclassified"


class Domain(str, Enum):
    """Business domain inferred from requirements text. Order is tie-break priority."""
    FINTECH = "fintech"
    ECOMMERCE = "ecommerce"
    SAAS = "saas"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    IOT = "iot"
    SOCIAL = "social"
    GENERAL = "general"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

class DocumentRecord(BaseModel):
    """One markdown file from the document root."""
    path: Path = Field(..., description="Absolute path on disk")
    display_path: str = Field(..., description="Path shown in reports, forward slashes")
    content: str = Field(default="", description="Raw UTF-8 content")
    category: DocumentCategory = Field(default=DocumentCategory.UNCLASSIFIED)


class ClassificationResult(BaseModel):
    """Output of the classifier for one document root."""
    root: Path
    all_files: list[Path] = Field(
        default_factory=list, description="Every markdown file found, before exclusions"
    )
    records: list[DocumentRecord] = Field(
        default_factory=list, description="Content files after exclusions, classified"
    )

    def by_category(self, category: DocumentCategory) -> list[DocumentRecord]:
        return [r for r in self.records if r.category == category]

    @property
    def counts(self) -> dict[DocumentCategory, int]:
        """Number of content files per category (every category present)."""
        counts = {category: 0 for category in DocumentCategory}
        for record in self.records:
            counts[record.category] += 1
        return counts

    @property
    def is_empty(self) -> bool:
        return not self.records


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

class TechStack(BaseModel):
    """Detected technology labels per dimension, in detection-table order."""
    backend: list[str] = Field(default_factory=list)
    frontend: list[str] = Field(default_factory=list)
    mobile: list[str] = Field(default_factory=list)
    database: list[str] = Field(default_factory=list)

    def dimensions(self) -> dict[str, list[str]]:
        """``{dimension: labels}`` in fixed order backend, frontend, mobile, database."""
        return {
            "backend": self.backend,
            "frontend": self.frontend,
            "mobile": self.mobile,
            "database": self.database,
        }


class AnalysisResult(BaseModel):
    """Domain and tech-stack signals derived from classified documents."""
    domain: Domain = Field(default=Domain.GENERAL)
    domain_keywords: list[str] = Field(
        default_factory=list, description="Keywords of the winning domain found in the text"
    )
    tech_stack: TechStack = Field(default_factory=TechStack)
    counts: dict[DocumentCategory, int] = Field(
        default_factory=lambda: {category: 0 for category in DocumentCategory}
    )
