"""
Shared pytest fixtures for mood-metrics tests.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from mood_metrics.core.classification import MemberClassifier
from mood_metrics.core.hierarchy import ClassHierarchy
from mood_metrics.core.models import ClassElement, MemberElement, Visibility


def method(name: str, visibility: Visibility = Visibility.PUBLIC, signature: str = "()") -> MemberElement:
    return MemberElement(name=name, kind="method", visibility=visibility, signature=signature)


def attribute(name: str, visibility: Visibility = Visibility.PUBLIC) -> MemberElement:
    return MemberElement(name=name, kind="attribute", visibility=visibility)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())

    yield temp_path

    # Cleanup after test
    shutil.rmtree(temp_path)


@pytest.fixture
def worked_example_classes() -> List[ClassElement]:
    """Root{a, -b}, Child(Root){a, c}, Sibling(Root){}."""
    return [
        ClassElement(
            name="Root",
            methods=(method("a"), method("b", Visibility.PRIVATE)),
        ),
        ClassElement(
            name="Child",
            extends="Root",
            methods=(method("a"), method("c")),
        ),
        ClassElement(name="Sibling", extends="Root"),
    ]


@pytest.fixture
def worked_example_hierarchy(worked_example_classes) -> ClassHierarchy:
    return ClassHierarchy(worked_example_classes)


@pytest.fixture
def worked_example_classifier(worked_example_hierarchy) -> MemberClassifier:
    return MemberClassifier(worked_example_hierarchy)


@pytest.fixture
def vehicle_classes() -> List[ClassElement]:
    """Three-level hierarchy with attributes and shadowed members."""
    return [
        ClassElement(
            name="Vehicle",
            methods=(method("start"), method("stop"), method("checkFuel", Visibility.PRIVATE)),
            attributes=(attribute("wheels"), attribute("vin", Visibility.PRIVATE)),
        ),
        ClassElement(
            name="Car",
            extends="Vehicle",
            methods=(method("start"), method("openTrunk"), method("stop", Visibility.PROTECTED)),
            attributes=(attribute("trunkSize"), attribute("vin", Visibility.PRIVATE)),
        ),
        ClassElement(
            name="SportsCar",
            extends="Car",
            methods=(method("boost"), method("start")),
            attributes=(attribute("topSpeed", Visibility.PROTECTED),),
        ),
        ClassElement(
            name="Truck",
            extends="Vehicle",
            methods=(method("load"),),
        ),
    ]


@pytest.fixture
def vehicle_classifier(vehicle_classes) -> MemberClassifier:
    return MemberClassifier(ClassHierarchy(vehicle_classes))
