import re
from typing import Dict, List, NamedTuple, Optional, Tuple

from bs4 import BeautifulSoup, Tag

# Structural patterns used by the regex updater
REGEX_PATTERNS = {
    "title": re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE),
    "h1": re.compile(r"<h1[^>]*>([^<]*)</h1>", re.IGNORECASE),
    "h2": re.compile(r"<h2[^>]*>([^<]*)</h2>", re.IGNORECASE),
    "footer": re.compile(r"<footer[^>]*>[\s\S]*?</footer>", re.IGNORECASE),
    "header": re.compile(r"<header[^>]*>[\s\S]*?</header>", re.IGNORECASE),
    "nav": re.compile(r"<nav[^>]*>[\s\S]*?</nav>", re.IGNORECASE),
    "paragraph": re.compile(r"<p[^>]*>([^<]*)</p>", re.IGNORECASE),
}

# Named sections for template and diff updates, in extraction order
SECTION_PATTERNS = {
    "header": REGEX_PATTERNS["header"],
    "nav": REGEX_PATTERNS["nav"],
    "main": re.compile(r"<main[^>]*>[\s\S]*?</main>", re.IGNORECASE),
    "footer": REGEX_PATTERNS["footer"],
    "title": re.compile(r"<title[^>]*>[\s\S]*?</title>", re.IGNORECASE),
}

# Quoted literal following a keyword, e.g. title "New Title"
NEW_CONTENT_PATTERNS = {
    "title": re.compile(r"title[^\"]*[\"']([^\"']+)[\"']", re.IGNORECASE),
    "heading": re.compile(r"(?:heading|h1)[^\"]*[\"']([^\"']+)[\"']", re.IGNORECASE),
    "footer": re.compile(r"footer[^\"]*[\"']([^\"']+)[\"']", re.IGNORECASE),
}

OPENING_TAG_PATTERN = re.compile(r"<\s*([a-zA-Z][\w-]*)")


def extract_new_content(description: str, target: str) -> Optional[str]:
    """Return the quoted value given for `target` in the description, if any."""
    pattern = NEW_CONTENT_PATTERNS.get(target)
    if not pattern:
        return None
    match = pattern.search(description)
    return match.group(1) if match else None


def replace_first(content: str, pattern: re.Pattern, replacement: str) -> str:
    # Callable replacement keeps backslashes in user text literal
    return pattern.sub(lambda _: replacement, content, count=1)


def parse_html_sections(html: str) -> Dict[str, str]:
    sections = {}
    for name, pattern in SECTION_PATTERNS.items():
        match = pattern.search(html)
        if match:
            sections[name] = match.group(0)
    return sections


def intelligent_merge(original: str, updated: str) -> Tuple[str, List[str]]:
    """
    Swap into `original` only the named sections the updated document changed.

    Everything outside header/nav/main/footer/title keeps the original text.
    Returns the merged HTML and the names of the sections that were replaced.
    """
    original_sections = parse_html_sections(original)
    updated_sections = parse_html_sections(updated)

    result = original
    changed = []
    for name, updated_section in updated_sections.items():
        original_section = original_sections.get(name)
        if original_section and original_section != updated_section:
            result = result.replace(original_section, updated_section, 1)
            changed.append(name)

    return result, changed


def closing_tag_for(target: str) -> Optional[str]:
    match = OPENING_TAG_PATTERN.search(target)
    return f"</{match.group(1)}" if match else None


def find_element_for_opening_tag(soup: BeautifulSoup, target: str) -> Optional[Tag]:
    """Locate the first element whose name and attributes match a literal opening tag."""
    wanted = BeautifulSoup(target, "html.parser").find(True)
    if wanted is None:
        return None
    for element in soup.find_all(wanted.name):
        if element.attrs == wanted.attrs:
            return element
    return None


# === Source spans ===

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# One complete tag, quoted attribute values may contain ">"
TAG_AT_PATTERN = re.compile(r"<[a-zA-Z][\w-]*(?:\"[^\"]*\"|'[^']*'|[^'\">])*>")


class ElementSpan(NamedTuple):
    """Offsets of a parsed element inside the original markup."""
    start: int
    inner_start: int
    inner_end: Optional[int]  # None for void and self-closed elements
    end: int


def _source_offset(content: str, line: int, column: int) -> Optional[int]:
    offset = 0
    for _ in range(line - 1):
        offset = content.find("\n", offset)
        if offset == -1:
            return None
        offset += 1
    return offset + column


def element_span(content: str, element: Tag) -> Optional[ElementSpan]:
    """
    Map an element parsed with html.parser back onto `content`.

    Uses the parser's sourceline/sourcepos for the opening tag and counts
    same-named tags to find the matching close. Returns None when the
    element cannot be located in the original text.
    """
    if element.sourceline is None or element.sourcepos is None:
        return None
    start = _source_offset(content, element.sourceline, element.sourcepos)
    if start is None:
        return None

    opening = TAG_AT_PATTERN.match(content, start)
    if not opening or not opening.group(0)[1:].lower().startswith(element.name.lower()):
        return None

    if element.name.lower() in VOID_ELEMENTS or opening.group(0).endswith("/>"):
        return ElementSpan(start, opening.end(), None, opening.end())

    same_name = re.compile(
        rf"<(/?){re.escape(element.name)}(?=[\s/>])(?:\"[^\"]*\"|'[^']*'|[^'\">])*>",
        re.IGNORECASE,
    )
    depth = 1
    for match in same_name.finditer(content, opening.end()):
        if match.group(1):
            depth -= 1
            if depth == 0:
                return ElementSpan(start, opening.end(), match.start(), match.end())
        elif not match.group(0).endswith("/>"):
            depth += 1
    return None


def outermost_spans(spans: List[ElementSpan]) -> List[ElementSpan]:
    """Drop spans nested inside an earlier one, keeping document order."""
    kept = []
    for span in sorted(spans, key=lambda s: s.start):
        if kept and span.start < kept[-1].end:
            continue
        kept.append(span)
    return kept
