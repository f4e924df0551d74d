import logging
from collections import Counter

from bs4 import BeautifulSoup

from artifact_updater.core.models import ContentAnalysis

logger = logging.getLogger(__name__)

COMMON_TAGS = ['header', 'nav', 'main', 'section', 'article', 'aside', 'footer', 'div', 'p', 'h1', 'h2', 'h3']


def analyze_content(content: str) -> ContentAnalysis:
    """Report structural facts about an HTML string. Never raises."""
    content = content or ""
    analysis = ContentAnalysis(size=len(content))

    try:
        soup = BeautifulSoup(content, 'html.parser')
        elements = soup.find_all(True)
    except Exception as e:
        logger.warning(f"[ANALYZE] HTML parsing failed: {e}")
        return analysis

    # html.parser accepts any text; without a single element it is not HTML
    if not elements:
        return analysis

    counts = Counter(el.name.lower() for el in elements)

    analysis.has_valid_html = True
    analysis.has_body = soup.body is not None
    analysis.has_head = soup.head is not None
    analysis.element_counts = dict(counts)
    analysis.common_elements = [tag for tag in COMMON_TAGS if counts.get(tag, 0) > 0]
    return analysis
