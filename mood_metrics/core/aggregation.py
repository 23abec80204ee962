"""
Ratio-of-sums aggregation and the five MOOD metrics.

Each metric is ``sum(numerator(c)) / sum(denominator(c))`` over every class,
so classes with more members weigh more. A zero denominator sum yields an
undefined ``MetricRatio`` (``value is None``) rather than NaN or 0.0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .classification import MemberClassifier
from .models import ClassElement

UNDEFINED = "undefined"

ClassCount = Callable[[ClassElement], int]


@dataclass(frozen=True)
class MetricRatio:
    numerator: int
    denominator: int

    @property
    def is_defined(self) -> bool:
        return self.denominator != 0

    @property
    def value(self) -> Optional[float]:
        if not self.is_defined:
            return None
        return self.numerator / self.denominator

    def format(self, precision: Optional[int] = None) -> str:
        value = self.value
        if value is None:
            return UNDEFINED
        if precision is None:
            return str(value)
        return f"{value:.{precision}f}"

    def __str__(self) -> str:
        return self.format()


def ratio_of_sums(classes: Iterable[ClassElement], numerator: ClassCount, denominator: ClassCount) -> MetricRatio:
    numerator_sum = 0
    denominator_sum = 0
    for cls in classes:
        numerator_sum += numerator(cls)
        denominator_sum += denominator(cls)
    return MetricRatio(numerator=numerator_sum, denominator=denominator_sum)


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    description: str
    numerator: Callable[[MemberClassifier, ClassElement], int]
    denominator: Callable[[MemberClassifier, ClassElement], int]


METRIC_DEFINITIONS: List[MetricDefinition] = [
    MetricDefinition(
        name="mif",
        description="Method Inheritance Factor",
        numerator=lambda clf, c: len(clf.inherited_by_default_methods(c)),
        denominator=lambda clf, c: len(clf.all_methods(c)),
    ),
    MetricDefinition(
        name="mhf",
        description="Method Hiding Factor",
        numerator=lambda clf, c: len(clf.all_private_methods(c)),
        denominator=lambda clf, c: len(clf.all_methods(c)),
    ),
    MetricDefinition(
        name="ahf",
        description="Attribute Hiding Factor",
        numerator=lambda clf, c: len(clf.all_private_attributes(c)),
        denominator=lambda clf, c: len(clf.local_attributes(c)),
    ),
    MetricDefinition(
        name="aif",
        description="Attribute Inheritance Factor",
        numerator=lambda clf, c: len(clf.inherited_by_default_attributes(c)),
        denominator=lambda clf, c: len(clf.local_attributes(c)),
    ),
    MetricDefinition(
        name="pof",
        description="Polymorphism Factor",
        numerator=lambda clf, c: len(clf.overridden_methods(c)),
        denominator=lambda clf, c: len(clf.new_methods(c)) * clf.children_count(c),
    ),
]


def compute_metric(classifier: MemberClassifier, definition: MetricDefinition) -> MetricRatio:
    return ratio_of_sums(
        classifier.hierarchy.classes,
        lambda c: definition.numerator(classifier, c),
        lambda c: definition.denominator(classifier, c),
    )


@dataclass(frozen=True)
class MoodMetrics:
    mif: MetricRatio
    mhf: MetricRatio
    ahf: MetricRatio
    aif: MetricRatio
    pof: MetricRatio

    def as_dict(self) -> Dict[str, MetricRatio]:
        return {d.name: getattr(self, d.name) for d in METRIC_DEFINITIONS}


def compute_metrics(classifier: MemberClassifier) -> MoodMetrics:
    """Compute MIF, MHF, AHF, AIF and POF over the classifier's hierarchy."""
    return MoodMetrics(**{d.name: compute_metric(classifier, d) for d in METRIC_DEFINITIONS})
