import json
from typing import Dict

HTML_PROMPT = """
You are a master frontend architect creating stunning, professional websites.

### OUTPUT
- Output ONLY pure HTML code, no explanations, markdown or code blocks
- Start with <!DOCTYPE html> and end with </html>
- No text before or after the document

### STANDARDS
- Modern, responsive design with Tailwind CSS
- Professional UI components, semantic HTML5, accessibility
- Production-ready code with proper SEO
- Use https://picsum.photos/width/height?random=number for placeholder images
"""


def update_document_prompt(current_content: str) -> str:
    return f"""Update this HTML by preserving ALL existing content and integrating the requested changes. Maintain complete structure, Tailwind classes, and semantic elements.

Output ONLY the complete updated HTML document.

**CURRENT HTML:**
{current_content}

**Update Request:** """


def string_update_prompt(content: str, description: str) -> str:
    return f"""
Given this HTML content and update request, provide a list of find/replace operations.

HTML Content:
{content}

Update Request: {description}

Respond with operations in this format:
{{
  "operations": [
    {{"find": "exact text to find", "replace": "new text to replace with"}}
  ]
}}

Only include operations that will actually change the content. Be precise with the find strings.
"""


def template_update_prompt(sections: Dict[str, str], description: str) -> str:
    return f"""
Update the following HTML sections based on the request. Only modify the sections that need changes.

Current sections:
{json.dumps(sections, indent=2)}

Update request: {description}

Respond with only the sections that need to be updated:
{{
  "updated_sections": {{
    "sectionName": "new HTML content for this section"
  }}
}}
"""


def smart_update_prompt(content: str, description: str) -> str:
    return f"""
You are an HTML editor. Given the current HTML and update request, provide specific operations to modify the HTML.

Current HTML:
{content}

Update request: {description}

Respond with operations:
{{
  "operations": [
    {{
      "method": "replace|insert|remove|modify",
      "target": "CSS selector or text to find",
      "content": "new content (if applicable)",
      "position": "before|after|inside|replace"
    }}
  ]
}}

- replace / remove / insert: `target` is exact text present in the HTML
- modify: `target` is a CSS selector, `content` becomes the inner HTML of every match
Be specific and ensure operations will actually change the content.
"""
