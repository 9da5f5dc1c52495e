"""
Tests for traversal and the element helpers.
"""

from ..tree import (
    answer_set,
    clamp_fraction,
    clamp_percent,
    collect_writes,
    element_children,
    element_count,
    for_each_element,
    iter_elements,
    make_element,
    normalize_score,
    prop_path,
)


class TestForEachElement:
    """Tests for the element walk."""

    def test_visits_in_slide_then_element_order(self, quiz_collection):
        seen = []
        for_each_element(quiz_collection, lambda el, s, e: seen.append((s, e, el["type"])))
        assert seen == [
            (0, 0, "RadioGroup"),
            (0, 1, "CheckboxGroup"),
            (0, 2, "Typography"),
            (1, 0, "Box"),
        ]

    def test_does_not_descend_into_children(self, quiz_collection):
        types = [el["type"] for _, _, el in iter_elements(quiz_collection)]
        assert "Checkbox" not in types

    def test_skips_malformed_slides_and_elements(self):
        collection = [[make_element("A"), "junk"], "not a slide", None, [make_element("B")]]
        seen = [(s, e) for s, e, _ in iter_elements(collection)]
        assert seen == [(0, 0), (3, 0)]

    def test_empty_and_non_list_collections(self):
        assert element_count([]) == 0
        assert element_count(None) == 0
        assert element_count({"slides": []}) == 0

    def test_element_count(self, quiz_collection):
        assert element_count(quiz_collection) == 4

    def test_collect_writes(self, quiz_collection):
        writes = collect_writes(
            quiz_collection,
            lambda el, s, e: [(prop_path(s, e, "seen"), True)] if s == 0 else [],
        )
        assert writes == [
            ((0, 0, "props", "seen"), True),
            ((0, 1, "props", "seen"), True),
            ((0, 2, "props", "seen"), True),
        ]


class TestElementHelpers:
    """Tests for value normalisation."""

    def test_clamp_percent(self):
        assert clamp_percent(150) == 99
        assert clamp_percent(-5) == 0
        assert clamp_percent(42.6) == 43
        assert clamp_percent(42.5) == 43
        assert clamp_percent(42.4) == 42
        assert clamp_percent("17") == 17
        assert clamp_percent("abc") == 0
        assert clamp_percent(float("inf")) == 99

    def test_normalize_score(self):
        assert normalize_score(5) == 5
        assert normalize_score(2.0) == 2
        assert isinstance(normalize_score(2.0), int)
        assert normalize_score(1.5) == 1.5
        assert normalize_score(-3) == 0
        assert normalize_score(None) == 0
        assert normalize_score(True) == 0

    def test_huge_integers_behave_like_infinity(self):
        huge = 10 ** 400
        assert normalize_score(huge) == 0
        assert normalize_score(-huge) == 0
        assert clamp_percent(huge) == 99
        assert clamp_percent(-huge) == 0
        assert clamp_fraction(huge) == 1.0

    def test_clamp_fraction(self):
        assert clamp_fraction(1.4) == 1.0
        assert clamp_fraction(-0.2) == 0.0
        assert clamp_fraction(0.25) == 0.25

    def test_answer_set(self):
        assert answer_set(["A", "B", "A"]) == frozenset({"A", "B"})
        assert answer_set("A") == frozenset({"A"})
        assert answer_set(None) == frozenset()
        assert answer_set([["unhashable"], "A"]) == frozenset({"A"})

    def test_bools_do_not_match_numbers(self):
        assert answer_set(True) != answer_set(1)
        assert answer_set([True, 0]) != answer_set([1, False])
        assert answer_set([1, 2]) == answer_set([2, 1])

    def test_element_children(self):
        single = make_element("Box", children=make_element("A"))
        assert element_children(single) == [make_element("A")]
        assert element_children(make_element("Box")) == []
