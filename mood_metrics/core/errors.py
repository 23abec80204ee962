"""
Error taxonomy for mood-metrics.

Every failure the engine reports is inherent to its input, so none of these
are retried. Undefined ratios are not errors; see ``aggregation.MetricRatio``.
"""

from typing import List, Sequence


class MoodMetricsError(Exception):
    """Base error with an optional hint for the user."""

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.message = message
        self.hint = hint


class HierarchyError(MoodMetricsError, ValueError):
    """The class set does not form a valid single-inheritance forest."""


class DuplicateClassError(HierarchyError):
    def __init__(self, names: Sequence[str]):
        self.names: List[str] = sorted(set(names))
        super().__init__(
            f"Duplicate class names in class set: {', '.join(self.names)}",
            hint="Class names must be unique within the analysed sources.",
        )


class UnresolvedBaseClassError(HierarchyError):
    def __init__(self, class_name: str, base_name: str):
        self.class_name = class_name
        self.base_name = base_name
        super().__init__(
            f"Class '{class_name}' extends '{base_name}', which is not part of the class set",
            hint="Include the base class in the input or use unresolved_bases: ignore.",
        )


class InheritanceCycleError(HierarchyError):
    def __init__(self, cycle: Sequence[str]):
        self.cycle: List[str] = list(cycle)
        super().__init__(f"Inheritance cycle detected: {' -> '.join(self.cycle)}")


class UnknownClassError(HierarchyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Class '{name}' is not part of the class hierarchy")


class SchemaError(MoodMetricsError, ValueError):
    """A class-set schema document could not be read or validated."""


class UnsupportedLanguageError(MoodMetricsError, ValueError):
    def __init__(self, language: str):
        self.language = language
        super().__init__(
            f"Unsupported language: {language}",
            hint="Use one of: typescript, python, schema.",
        )
