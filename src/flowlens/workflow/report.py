"""Analysis and validation records with markdown rendering."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class AnalysisResult(BaseModel):
    """Structural metrics derived from a workflow graph."""

    model_config = ConfigDict(frozen=True)

    workflow_id: str = ""
    workflow_name: str = ""
    node_count: int
    connection_count: int
    node_type_counts: dict[str, int] = {}
    start_node_ids: list[str] = []
    end_node_ids: list[str] = []
    complexity_score: float
    estimated_duration_ms: int

    def to_markdown(self) -> str:
        title = self.workflow_name or self.workflow_id or "(unnamed)"
        lines = [
            f"# Workflow Analysis: {title}",
            "",
            f"**Workflow ID:** `{self.workflow_id}`",
            f"**Nodes:** {self.node_count}",
            f"**Connections:** {self.connection_count}",
            f"**Complexity:** {self.complexity_score:.1f}",
            f"**Estimated duration:** {self.estimated_duration_ms / 1000:.2f}s",
            "",
            f"**Start nodes:** {', '.join(self.start_node_ids) or '-'}",
            f"**End nodes:** {', '.join(self.end_node_ids) or '-'}",
            "",
        ]

        if self.node_type_counts:
            lines.append("## Node Types")
            lines.append("")
            lines.append("| Type | Count |")
            lines.append("|------|-------|")
            for type_name, count in sorted(self.node_type_counts.items()):
                lines.append(f"| {type_name or '(empty)'} | {count} |")
            lines.append("")

        return "\n".join(lines)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class ValidationResult(BaseModel):
    """Outcome of structural validation; ``errors`` are display strings."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: list[str] = []

    @model_validator(mode="after")
    def _valid_matches_errors(self) -> ValidationResult:
        if self.valid == bool(self.errors):
            raise ValueError("valid must be True exactly when errors is empty")
        return self

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationResult:
        return cls(valid=not errors, errors=list(errors))

    def to_markdown(self) -> str:
        if self.valid:
            return "Workflow is valid."
        lines = ["Workflow validation failed:"]
        for error in self.errors:
            lines.append(f"  - {error}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
