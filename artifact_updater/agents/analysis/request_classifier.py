from typing import Dict, List, Tuple

from artifact_updater.core.models import UpdateAnalysis

# Iteration order decides the detected method
METHOD_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "smart": ("smart", "targeted", "precise", "specific"),
    "regex": ("title", "heading", "footer", "header", "pattern"),
    "string": ("simple", "text", "replace", "change"),
    "template": ("section", "template", "structure", "layout"),
    "diff": ("diff", "merge", "compare", "intelligent"),
}

REGEX_RECOMMENDING_KEYWORDS = ("title", "heading", "footer")
SMART_SIZE_THRESHOLD = 10000
COMPLEX_WORD_COUNT = 20


def detect_request_type(lower_desc: str) -> str:
    if "add" in lower_desc or "insert" in lower_desc:
        return "addition"
    if "remove" in lower_desc or "delete" in lower_desc:
        return "removal"
    if "change" in lower_desc or "update" in lower_desc or "modify" in lower_desc:
        return "modification"
    if "replace" in lower_desc:
        return "replacement"
    return "unknown"


def detect_complexity(lower_desc: str, word_count: int) -> str:
    complexity = "simple"
    if "add" in lower_desc or "insert" in lower_desc or "create" in lower_desc:
        complexity = "medium"
    if "restructure" in lower_desc or "reorganize" in lower_desc or word_count > COMPLEX_WORD_COUNT:
        complexity = "complex"
    return complexity


def recommend_method(content_size: int, keywords: List[str], complexity: str) -> str:
    # Size is checked before keywords: large documents always go to smart
    if content_size > SMART_SIZE_THRESHOLD:
        return "smart"
    if any(k in REGEX_RECOMMENDING_KEYWORDS for k in keywords):
        return "regex"
    if complexity == "complex":
        return "template"
    return "string"


def classify_update_request(description: str, content: str) -> UpdateAnalysis:
    lower_desc = (description or "").lower()
    word_count = len(lower_desc.split())

    detected_method = "unknown"
    keywords: List[str] = []
    for method, method_keywords in METHOD_KEYWORDS.items():
        found = [k for k in method_keywords if k in lower_desc]
        if found:
            keywords.extend(found)
            if detected_method == "unknown":
                detected_method = method

    complexity = detect_complexity(lower_desc, word_count)

    return UpdateAnalysis(
        request_type=detect_request_type(lower_desc),
        detected_method=detected_method,
        keywords=keywords,
        complexity=complexity,
        recommended_method=recommend_method(len(content or ""), keywords, complexity),
    )
