"""Monoforge analyzer -- classifies project documents and extracts signals."""

from monoforge.analyzer.classifier import (
    DocumentRootNotFoundError,
    classify_documents,
    classify_documents_sync,
    classify_path,
    is_content_file,
)
from monoforge.analyzer.extractor import (
    DOMAIN_KEYWORDS,
    TECH_MARKERS,
    analyze_documents,
    extract_domain,
    extract_tech_stack,
)
from monoforge.analyzer.models import (
    AnalysisResult,
    ClassificationResult,
    DocumentCategory,
    DocumentRecord,
    Domain,
    TechStack,
)

__all__ = [
    "AnalysisResult",
    "ClassificationResult",
    "DOMAIN_KEYWORDS",
    "DocumentCategory",
    "DocumentRecord",
    "DocumentRootNotFoundError",
    "Domain",
    "TECH_MARKERS",
    "TechStack",
    "analyze_documents",
    "classify_documents",
    "classify_documents_sync",
    "classify_path",
    "extract_domain",
    "extract_tech_stack",
    "is_content_file",
]
