"""
Report models and renderers for metric results.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from .aggregation import METRIC_DEFINITIONS, UNDEFINED, MetricRatio, MoodMetrics
from .classification import ClassBreakdown, MemberClassifier
from .models import MemberElement


class ClassSummary(BaseModel):
    name: str
    base: Optional[str] = None
    depth: int
    children: int
    file_path: Optional[str] = None


class MetricValue(BaseModel):
    value: Optional[float]
    numerator: int
    denominator: int
    defined: bool
    description: str = ""

    @classmethod
    def from_ratio(cls, ratio: MetricRatio, description: str = "") -> "MetricValue":
        return cls(
            value=ratio.value,
            numerator=ratio.numerator,
            denominator=ratio.denominator,
            defined=ratio.is_defined,
            description=description,
        )

    def format(self, precision: Optional[int] = None) -> str:
        return MetricRatio(self.numerator, self.denominator).format(precision)


class MetricsReport(BaseModel):
    language: str
    source: str
    class_count: int
    classes: List[ClassSummary]
    metrics: Dict[str, MetricValue]


def build_report(classifier: MemberClassifier, metrics: MoodMetrics, language: str, source: str) -> MetricsReport:
    hierarchy = classifier.hierarchy
    descriptions = {d.name: d.description for d in METRIC_DEFINITIONS}
    return MetricsReport(
        language=language,
        source=source,
        class_count=len(hierarchy),
        classes=[
            ClassSummary(
                name=cls.name,
                base=cls.extends,
                depth=hierarchy.inheritance_depth(cls),
                children=classifier.children_count(cls),
                file_path=cls.file_path or None,
            )
            for cls in hierarchy.classes
        ],
        metrics={
            name: MetricValue.from_ratio(ratio, descriptions[name])
            for name, ratio in metrics.as_dict().items()
        },
    )


def render_text(report: MetricsReport, precision: Optional[int] = None) -> str:
    lines: List[str] = []
    for cls in report.classes:
        lines.extend([
            "",
            f"Class name: {cls.name}",
            f"Depth: {cls.depth}",
            f"Number of children: {cls.children}",
            "",
        ])
    lines.append("")
    for name, metric in report.metrics.items():
        lines.append(f"{name}: {metric.format(precision)}")
    lines.append("")
    return "\n".join(lines)


def render_markdown(report: MetricsReport, precision: Optional[int] = 3) -> str:
    md_lines = [
        "# MOOD Metrics",
        "",
        f"- Source: `{report.source}`",
        f"- Language: {report.language}",
        f"- Classes: {report.class_count}",
        "",
        "## Metrics",
        "| Metric | Value | Numerator | Denominator |",
        "| --- | --- | --- | --- |",
    ]
    for name, metric in report.metrics.items():
        label = f"{name.upper()} ({metric.description})" if metric.description else name.upper()
        md_lines.append(f"| {label} | {metric.format(precision)} | {metric.numerator} | {metric.denominator} |")

    md_lines.extend([
        "",
        "## Classes",
        "| Class | Base | Depth | Children |",
        "| --- | --- | --- | --- |",
    ])
    for cls in report.classes:
        md_lines.append(f"| {cls.name} | {cls.base or '-'} | {cls.depth} | {cls.children} |")
    md_lines.append("")
    return "\n".join(md_lines)


def render_json(report: MetricsReport) -> str:
    return report.model_dump_json(indent=2)


def render(report: MetricsReport, output_format: str, precision: Optional[int] = None) -> str:
    if output_format == "json":
        return render_json(report)
    if output_format == "markdown":
        return render_markdown(report, precision if precision is not None else 3)
    return render_text(report, precision)


def _member_names(members: Sequence[MemberElement]) -> str:
    if not members:
        return "-"
    return ", ".join(
        f"{m.name} ({m.visibility.value})" if m.visibility.value != "public" else m.name
        for m in members
    )


def render_breakdown(breakdown: ClassBreakdown) -> str:
    rows = [
        ("Base class", breakdown.base or "-"),
        ("Ancestors", " -> ".join(breakdown.ancestors) or "-"),
        ("Depth", str(breakdown.depth)),
        ("Children", f"{breakdown.children_count} ({', '.join(breakdown.children) or '-'})"),
        ("Local methods", _member_names(breakdown.local_methods)),
        ("Local attributes", _member_names(breakdown.local_attributes)),
        ("Inherited methods", _member_names(breakdown.inherited_methods)),
        ("Inherited attributes", _member_names(breakdown.inherited_attributes)),
        ("Overridden methods", _member_names(breakdown.overridden_methods)),
        ("New methods", _member_names(breakdown.new_methods)),
        ("Inherited by default (methods)", _member_names(breakdown.inherited_by_default_methods)),
        ("Inherited by default (attributes)", _member_names(breakdown.inherited_by_default_attributes)),
        ("All methods", _member_names(breakdown.all_methods)),
        ("Private methods (all)", _member_names(breakdown.all_private_methods)),
        ("Private attributes (local)", _member_names(breakdown.all_private_attributes)),
    ]
    width = max(len(label) for label, _ in rows)
    lines = [f"Class: {breakdown.name}", ""]
    lines.extend(f"{label.ljust(width)}  {value}" for label, value in rows)
    return "\n".join(lines)


__all__ = [
    "UNDEFINED",
    "ClassSummary",
    "MetricValue",
    "MetricsReport",
    "build_report",
    "render",
    "render_text",
    "render_markdown",
    "render_json",
    "render_breakdown",
]
