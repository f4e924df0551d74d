import logging
from typing import List

from artifact_updater.agents.analysis.content_analyzer import analyze_content
from artifact_updater.agents.analysis.request_classifier import classify_update_request
from artifact_updater.core.models import ContentAnalysis, DiagnosticResult, UpdateAnalysis

logger = logging.getLogger(__name__)

INVALID_HTML = "Content is not valid HTML - DOM-based operations will fail"
VERY_LARGE = "Content is very large - smart updates may be slow"
VERY_SMALL = "Content is very small - smart updates may be overkill"
NO_BODY = "No body element found - some operations may fail"
UNKNOWN_METHOD = "Could not detect appropriate update method from description"
SIMPLE_STRUCTURE = "Complex update requested but content has simple structure"
NO_KEYWORDS = "No specific keywords detected - may fall back to full rewrite"


def identify_potential_issues(content_analysis: ContentAnalysis, update_analysis: UpdateAnalysis) -> List[str]:
    issues = []

    if not content_analysis.has_valid_html:
        issues.append(INVALID_HTML)
    if content_analysis.size > 100000:
        issues.append(VERY_LARGE)
    if content_analysis.size < 100:
        issues.append(VERY_SMALL)
    if not content_analysis.has_body:
        issues.append(NO_BODY)
    if update_analysis.detected_method == "unknown":
        issues.append(UNKNOWN_METHOD)
    if update_analysis.complexity == "complex" and len(content_analysis.common_elements) < 3:
        issues.append(SIMPLE_STRUCTURE)
    if not update_analysis.keywords:
        issues.append(NO_KEYWORDS)

    return issues


def generate_recommendations(
        content_analysis: ContentAnalysis,
        update_analysis: UpdateAnalysis,
        issues: List[str],
) -> List[str]:
    recommendations = []

    if INVALID_HTML in issues:
        recommendations.append("Use string-based or regex-based updates instead of DOM operations")

    if VERY_LARGE in issues:
        recommendations.append("Use regex or string manipulation for better performance")
        recommendations.append("Consider breaking the update into smaller operations")

    if UNKNOWN_METHOD in issues:
        recommendations.append("Be more specific in your update request")
        recommendations.append('Include keywords like "title", "footer", "heading" for better detection')
        recommendations.append('Use phrases like "smart update:" to force smart update mode')

    if update_analysis.complexity == "simple" and content_analysis.size < 5000:
        recommendations.append("Use string manipulation method for fastest results")

    if update_analysis.request_type == "addition" and content_analysis.has_body:
        recommendations.append("Use template-based updates for adding new sections")

    if "footer" in update_analysis.keywords or "header" in update_analysis.keywords:
        recommendations.append("Use regex-based updates for header/footer modifications")

    if not recommendations:
        recommendations.append(f"Try using {update_analysis.recommended_method} method for this type of update")

    return recommendations


def diagnose_html_update(content: str, description: str) -> DiagnosticResult:
    content_analysis = analyze_content(content)
    update_analysis = classify_update_request(description, content)
    issues = identify_potential_issues(content_analysis, update_analysis)

    return DiagnosticResult(
        content_analysis=content_analysis,
        update_analysis=update_analysis,
        potential_issues=issues,
        recommendations=generate_recommendations(content_analysis, update_analysis, issues),
    )


def log_diagnostics(result: DiagnosticResult, description: str, level: int = logging.INFO):
    logger.log(level, "=== HTML Update Diagnostics ===")
    logger.log(level, f"Request: {description}")
    logger.log(level, f"Content size: {result.content_analysis.size} bytes")
    logger.log(level, f"Valid HTML: {result.content_analysis.has_valid_html}")
    logger.log(level, f"Detected method: {result.update_analysis.detected_method}")
    logger.log(level, f"Recommended method: {result.update_analysis.recommended_method}")
    logger.log(level, f"Complexity: {result.update_analysis.complexity}")

    if result.potential_issues:
        logger.log(level, "Potential issues:")
        for issue in result.potential_issues:
            logger.log(level, f"  - {issue}")

    if result.recommendations:
        logger.log(level, "Recommendations:")
        for recommendation in result.recommendations:
            logger.log(level, f"  - {recommendation}")
