"""
Core API for computing MOOD metrics.

Build a ``ClassHierarchy`` from ``ClassElement`` objects (hand-made, loaded
from a schema document, or extracted from source), wrap it in a
``MemberClassifier`` and pass that to ``compute_metrics``:

    >>> hierarchy = ClassHierarchy(classes)
    >>> metrics = compute_metrics(MemberClassifier(hierarchy))
    >>> metrics.mif.value
"""

from .aggregation import METRIC_DEFINITIONS, MetricRatio, MoodMetrics, compute_metrics, ratio_of_sums
from .analyzer import ClassMetricsAnalyzer
from .classification import ClassBreakdown, MemberClassifier, MemberKey, name_key, signature_key
from .config import MoodConfig, load_config
from .errors import (
    DuplicateClassError,
    HierarchyError,
    InheritanceCycleError,
    MoodMetricsError,
    SchemaError,
    UnknownClassError,
    UnresolvedBaseClassError,
    UnsupportedLanguageError,
)
from .hierarchy import ClassHierarchy
from .models import ClassElement, MemberElement, Visibility
from .report import MetricsReport
from .schema_loader import class_set_from_data, load_class_set

__all__ = [
    # Models
    'ClassElement',
    'MemberElement',
    'Visibility',

    # Engine
    'ClassHierarchy',
    'MemberClassifier',
    'MemberKey',
    'name_key',
    'signature_key',
    'ClassBreakdown',
    'MetricRatio',
    'MoodMetrics',
    'METRIC_DEFINITIONS',
    'ratio_of_sums',
    'compute_metrics',

    # Loading, config and reporting
    'ClassMetricsAnalyzer',
    'MoodConfig',
    'load_config',
    'MetricsReport',
    'class_set_from_data',
    'load_class_set',

    # Errors
    'MoodMetricsError',
    'HierarchyError',
    'DuplicateClassError',
    'UnresolvedBaseClassError',
    'InheritanceCycleError',
    'UnknownClassError',
    'SchemaError',
    'UnsupportedLanguageError',
]
