"""
Pytest fixtures for slidekit tests.
"""

import pytest

from ..store import TreeStore
from ..render import RendererRegistry
from ..tree import make_element


@pytest.fixture
def radio_element() -> dict:
    """A scored radio group with one correct answer."""
    return make_element("RadioGroup", score=2, correctAnswers=["A"], position={"x": 0.1, "y": 0.2})


@pytest.fixture
def quiz_collection(radio_element) -> list:
    """
    Two slides:
    - slide 0: radio group (score 2), checkbox group (score 3), a label
    - slide 1: a box holding a nested checkbox
    """
    checkbox_group = make_element(
        "CheckboxGroup",
        score=3,
        correctAnswers=["B", "C"],
        checked=True,
        children=[
            make_element("Checkbox", label="B"),
            make_element("Checkbox", label="C"),
        ],
    )
    label = make_element("Typography", text="Pick one")
    box = make_element(
        "Box",
        checked=True,
        children=make_element("Checkbox", label="inner", checked=True),
    )
    return [
        [radio_element, checkbox_group, label],
        [box],
    ]


@pytest.fixture
def store(quiz_collection) -> TreeStore:
    return TreeStore(initial=quiz_collection)


@pytest.fixture
def scenario_collection(radio_element) -> list:
    """Two slides; slide 0 holds one radio group, slide 1 is empty."""
    return [[radio_element], []]


@pytest.fixture
def registry() -> RendererRegistry:
    """Renderers that produce (type, payload) tuples."""
    registry = RendererRegistry()

    @registry.renderer("RadioGroup")
    def radio_group(props, children):
        return ("radio", props.get("score"), children)

    @registry.renderer("CheckboxGroup")
    def checkbox_group(props, children):
        return ("checkboxes", children)

    @registry.renderer("Checkbox")
    def checkbox(props, children):
        return ("checkbox", props.get("label"))

    @registry.renderer("Box")
    def box(props, children):
        return ("box", children)

    return registry
