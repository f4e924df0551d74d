from typing import List, Optional

from typing_extensions import TypedDict

from artifact_updater.core.config import UpdateConfig
from artifact_updater.core.models import DiagnosticResult, Document


class UpdateState(TypedDict, total=False):
    # Input data
    document: Document
    description: str
    config: UpdateConfig

    # Processing data
    diagnostics: Optional[DiagnosticResult]
    method_chain: List[str]
    attempt: int
    errors: List[str]

    # Output
    content: Optional[str]
    method_used: Optional[str]
    status: str  # initialized, selected, updated, failed, completed
