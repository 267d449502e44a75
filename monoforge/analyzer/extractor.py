"""Keyword heuristics over classified documents.

Derives the business domain from requirements documents and the technology
stack from architecture documents.  Matching is plain lowercase substring
search (``"nextjs-like"`` contains ``"next"``; ``"mongodb"`` contains
``"go"``), with no word boundaries and no weighting.
"""

from __future__ import annotations

from .models import (
    AnalysisResult,
    ClassificationResult,
    DocumentCategory,
    DocumentRecord,
    Domain,
    TechStack,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DOMAIN_THRESHOLD = 2

# Iteration order is the tie-break: the first domain reaching the threshold wins.
DOMAIN_KEYWORDS: dict[Domain, tuple[str, ...]] = {
    Domain.FINTECH: ("payment", "banking", "finance", "transaction", "wallet"),
    Domain.ECOMMERCE: ("product", "cart", "checkout", "order", "shipping"),
    Domain.SAAS: ("subscription", "tenant", "workspace", "dashboard"),
    Domain.HEALTHCARE: ("patient", "doctor", "medical", "health", "clinic"),
    Domain.EDUCATION: ("student", "course", "learning", "teacher", "class"),
    Domain.IOT: ("device", "sensor", "telemetry", "gateway", "mqtt"),
    Domain.SOCIAL: ("user", "post", "comment", "follow", "feed"),
}

# dimension -> ((label, markers), ...)
TECH_MARKERS: dict[str, tuple[tuple[str, tuple[str, ...]], ...]] = {
    "backend": (
        ("Node.js", ("node", "express")),
        ("Python", ("python", "flask")),
        ("Go", ("go", "golang")),
    ),
    "frontend": (
        ("React", ("react",)),
        ("Next.js", ("next",)),
        ("Vue", ("vue",)),
    ),
    "mobile": (
        ("React Native", ("react native",)),
        ("Expo", ("expo",)),
        ("Flutter", ("flutter",)),
    ),
    "database": (
        ("PostgreSQL", ("postgres",)),
        ("MongoDB", ("mongodb", "mongo")),
        ("Firebase/Firestore", ("firebase", "firestore")),
    ),
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _joined_text(records: list[DocumentRecord]) -> str:
    return " ".join(r.content.lower() for r in records)


def match_domain_keywords(text: str) -> dict[Domain, list[str]]:
    """Keywords of each domain that occur in *text* (lowercased by the caller)."""
    return {
        domain: [kw for kw in keywords if kw in text]
        for domain, keywords in DOMAIN_KEYWORDS.items()
    }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_domain(requirements: list[DocumentRecord]) -> tuple[Domain, list[str]]:
    """Return the first domain with at least two matching keywords.

    Returns:
        ``(domain, matched_keywords)``; ``(Domain.GENERAL, [])`` when no
        domain reaches the threshold.
    """
    text = _joined_text(requirements)
    for domain, matched in match_domain_keywords(text).items():
        if len(matched) >= DOMAIN_THRESHOLD:
            return domain, matched
    return Domain.GENERAL, []


def extract_tech_stack(architecture: list[DocumentRecord]) -> TechStack:
    """Collect every technology label whose marker occurs in the architecture text."""
    text = _joined_text(architecture)
    detected: dict[str, list[str]] = {}
    for dimension, entries in TECH_MARKERS.items():
        detected[dimension] = [
            label for label, markers in entries if any(m in text for m in markers)
        ]
    return TechStack(**detected)


def analyze_documents(classification: ClassificationResult) -> AnalysisResult:
    """Build the :class:`AnalysisResult` for a classified document root."""
    domain, keywords = extract_domain(
        classification.by_category(DocumentCategory.REQUIREMENTS)
    )
    tech_stack = extract_tech_stack(
        classification.by_category(DocumentCategory.ARCHITECTURE)
    )
    return AnalysisResult(
        domain=domain,
        domain_keywords=keywords,
        tech_stack=tech_stack,
        counts=classification.counts,
    )
