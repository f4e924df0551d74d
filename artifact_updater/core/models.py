from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

MethodId = Literal["smart", "regex", "string", "template", "diff"]


class Document(BaseModel):
    """An artifact being edited; only `content` is mutated by an update."""
    content: Optional[str] = ""
    title: str = ""
    kind: str = "html"


# === Analysis ===

class ContentAnalysis(BaseModel):
    size: int = 0
    has_valid_html: bool = False
    has_body: bool = False
    has_head: bool = False
    element_counts: Dict[str, int] = Field(default_factory=dict)
    common_elements: List[str] = Field(default_factory=list)


class UpdateAnalysis(BaseModel):
    request_type: Literal["addition", "removal", "modification", "replacement", "unknown"] = "unknown"
    detected_method: str = "unknown"
    keywords: List[str] = Field(default_factory=list)
    complexity: Literal["simple", "medium", "complex"] = "simple"
    recommended_method: MethodId = "string"


class DiagnosticResult(BaseModel):
    content_analysis: ContentAnalysis
    update_analysis: UpdateAnalysis
    potential_issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# === Generation schemas ===

class FindReplace(BaseModel):
    find: str = Field(description="Exact text to find in the current HTML")
    replace: str = Field(description="New text to replace it with")


class StringOperations(BaseModel):
    operations: List[FindReplace] = Field(default_factory=list)


class SectionUpdates(BaseModel):
    updated_sections: Dict[str, str] = Field(
        default_factory=dict,
        description="Section name (header, nav, main, footer, title) mapped to its new HTML",
    )


class UpdateOperation(BaseModel):
    method: Literal["replace", "insert", "remove", "modify"]
    target: str = Field(description="CSS selector or exact text to find")
    content: Optional[str] = Field(default=None, description="New content, if applicable")
    position: Optional[Literal["before", "after", "inside", "replace"]] = None


class SmartOperations(BaseModel):
    operations: List[UpdateOperation] = Field(default_factory=list)


class HtmlOutput(BaseModel):
    html: str = Field(description="The complete HTML document")


# === Progress events ===

class MethodSelectedEvent(BaseModel):
    type: Literal["method-selected"] = "method-selected"
    method: str


class OperationAppliedEvent(BaseModel):
    type: Literal["operation-applied"] = "operation-applied"
    method: str
    detail: str
    success: bool


class ContentDeltaEvent(BaseModel):
    type: Literal["content-delta"] = "content-delta"
    content: str


class FinalContentEvent(BaseModel):
    type: Literal["final-content"] = "final-content"
    content: str
    method: Optional[str] = None


class FinishEvent(BaseModel):
    type: Literal["finish"] = "finish"


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    content: str


# === API payloads ===

class UpdateDocumentRequest(BaseModel):
    content: str
    title: str = ""
    kind: str = "html"
    description: str
    config: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "content": "<html><head><title>Old</title></head><body></body></html>",
                "title": "Landing page",
                "kind": "html",
                "description": 'change the title to "New Title"',
                "config": "reliability",
            }
        }
    }


class DiagnoseRequest(BaseModel):
    content: str
    description: str


class CreateDocumentRequest(BaseModel):
    title: str
