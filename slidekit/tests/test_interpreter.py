"""
Tests for the renderer registry and interpreter.

Tests:
- Dispatch by type tag, children rendered first
- Graceful handling of unknown types and failing renderers
- Determinism
- Slide rendering with store bindings
"""

import logging

import pytest

from ..render import (
    MAX_DEPTH,
    PLACEHOLDER,
    MissReason,
    RenderReport,
    RendererRegistry,
    collect_types,
    json_registry,
    render,
    render_slide,
)
from ..store import TreeStore
from ..tree import make_element


class TestRendererRegistry:
    """Tests for the registry mapping."""

    def test_register_and_lookup(self):
        registry = RendererRegistry()
        fn = registry.register("A", lambda props, children: "a")
        assert registry["A"] is fn
        assert "A" in registry
        assert len(registry) == 1
        assert list(registry) == ["A"]

    def test_from_mapping(self):
        registry = RendererRegistry({"A": lambda p, c: 1, "B": lambda p, c: 2})
        assert sorted(registry) == ["A", "B"]

    def test_rejects_bad_entries(self):
        registry = RendererRegistry()
        with pytest.raises(ValueError):
            registry.register("", lambda p, c: None)
        with pytest.raises(TypeError):
            registry.register("A", "not callable")

    def test_merged_leaves_original_alone(self):
        base = RendererRegistry({"A": lambda p, c: "base"})
        merged = base.merged({"A": lambda p, c: "override", "B": lambda p, c: "b"})
        assert merged["A"]({}, None) == "override"
        assert base["A"]({}, None) == "base"
        assert "B" not in base

    def test_unregister(self):
        registry = RendererRegistry({"A": lambda p, c: 1})
        registry.unregister("A")
        registry.unregister("missing")
        assert "A" not in registry


class TestRender:
    """Tests for render()."""

    def test_renders_single_node(self, registry, radio_element):
        assert render(radio_element, registry) == ("radio", 2, None)

    def test_renders_list_in_order(self, registry, quiz_collection):
        output = render(quiz_collection[0], registry)
        assert output[0] == ("radio", 2, None)
        assert output[1] == ("checkboxes", [("checkbox", "B"), ("checkbox", "C")])
        assert len(output) == 3

    def test_single_child_is_rendered(self, registry, quiz_collection):
        assert render(quiz_collection[1][0], registry) == ("box", ("checkbox", "inner"))

    def test_children_rendered_before_parent(self):
        order = []
        registry = {
            "Parent": lambda props, children: order.append("parent") or children,
            "Child": lambda props, children: order.append(props["name"]) or props["name"],
        }
        node = make_element("Parent", children=[
            make_element("Child", name="one"),
            make_element("Child", name="two"),
        ])
        assert render(node, registry) == ["one", "two"]
        assert order == ["one", "two", "parent"]

    def test_renderer_receives_raw_props(self):
        received = {}
        node = make_element("A", label="x", children=[])

        def renderer(props, children):
            received.update(props=props, children=children)

        render(node, {"A": renderer})
        assert received["props"] is node["props"]
        assert received["children"] == []

    @pytest.mark.parametrize("node", [None, {}])
    def test_empty_node(self, registry, node):
        assert render(node, registry) is PLACEHOLDER

    def test_empty_list(self, registry):
        assert render([], registry) == []

    def test_plain_dict_registry(self):
        assert render(make_element("A"), {"A": lambda p, c: "ok"}) == "ok"


class TestRenderMisses:
    """Tests for graceful degradation."""

    def test_unknown_type_gives_placeholder(self, registry, quiz_collection):
        output = render(quiz_collection[0], registry)
        assert output[2] is PLACEHOLDER

    def test_unknown_type_is_logged_and_reported(self, registry, caplog):
        report = RenderReport()
        nodes = [make_element("Mystery"), make_element("Checkbox", label="ok")]
        with caplog.at_level(logging.WARNING, logger="slidekit.render.interpreter"):
            output = render(nodes, registry, report=report)

        assert output == [PLACEHOLDER, ("checkbox", "ok")]
        assert "Mystery" in caplog.text
        assert report.unknown_types == ["Mystery"]
        assert report.misses[0].path == (0,)
        assert report.rendered == 1
        assert not report.ok

    def test_missing_type(self, registry):
        report = RenderReport()
        assert render({"props": {}}, registry, report=report) is PLACEHOLDER
        assert report.misses[0].reason == MissReason.MISSING_TYPE

    def test_text_leaves_pass_through(self, registry):
        report = RenderReport()
        assert render(["text", 3], registry, report=report) == ["text", 3]
        assert report.ok

    def test_non_node_values(self, registry):
        report = RenderReport()
        assert render([object(), {1, 2}], registry, report=report) == [PLACEHOLDER, PLACEHOLDER]
        assert all(miss.reason == MissReason.NOT_A_NODE for miss in report.misses)

    def test_unknown_child_does_not_abort_parent(self, registry):
        node = make_element("Box", children=[
            make_element("Checkbox", label="a"),
            make_element("Unknown"),
        ])
        assert render(node, registry) == ("box", [("checkbox", "a"), PLACEHOLDER])

    def test_failing_renderer_is_contained(self, registry):
        def broken(props, children):
            raise KeyError("label")

        failing = registry.merged({"Checkbox": broken})
        report = RenderReport()
        output = render(
            [make_element("Checkbox"), make_element("Box")],
            failing,
            report=report,
        )
        assert output == [PLACEHOLDER, ("box", None)]
        assert report.misses[0].reason == MissReason.RENDERER_ERROR

    def test_child_paths_are_reported(self, registry):
        report = RenderReport()
        node = make_element("Box", children=[make_element("Nope")])
        render(node, registry, report=report, base_path=(0, 4))
        assert report.misses[0].path == (0, 4, "props", "children", 0)

    def test_deep_nesting_is_contained(self, registry):
        deep = make_element("Box")
        for _ in range(600):
            deep = make_element("Box", children=[deep])
        report = RenderReport()

        output = render([deep, make_element("Box")], registry, report=report)

        assert output[1] == ("box", None)
        assert report.misses[0].reason == MissReason.TOO_DEEP
        assert len(report.misses[0].path) > MAX_DEPTH

    def test_deep_single_child_chain(self, registry):
        deep = make_element("Checkbox", label="leaf")
        for _ in range(MAX_DEPTH + 50):
            deep = make_element("Box", children=deep)
        report = RenderReport()

        output = render([deep, make_element("Checkbox", label="next")], registry, report=report)

        assert output[1] == ("checkbox", "next")
        assert [miss.reason for miss in report.misses] == [MissReason.TOO_DEEP]

    def test_deterministic(self, registry, quiz_collection):
        first = render(quiz_collection, registry)
        second = render(quiz_collection, registry)
        assert first == second


class TestRenderSlide:
    """Tests for slide rendering."""

    def test_renders_selected_slide(self, store, registry):
        store.select_slide(1)
        assert render_slide(store, registry) == [("box", ("checkbox", "inner"))]

    def test_renders_given_slide_of_bare_collection(self, quiz_collection, registry):
        output = render_slide(quiz_collection, registry, slide_index=1)
        assert output == [("box", ("checkbox", "inner"))]

    def test_missing_slide_renders_empty(self, registry):
        assert render_slide([], registry) == []
        assert render_slide([[]], registry, slide_index=3) == []

    def test_bound_props_write_back_to_store(self, store):
        bindings = []

        def checkbox_group(props, children):
            binding = props["bind"]("answers", default=[])
            bindings.append((props["path"], binding))
            return binding.value

        registry = {"CheckboxGroup": checkbox_group}
        output = render_slide(store, registry, bind=True)
        assert output[1] == []

        path, binding = bindings[0]
        assert path == (0, 1)
        binding.on_change(["B", "C"])
        assert store.get_value((0, 1, "props", "answers")) == ["B", "C"]
        assert store.current_score == 3

    def test_bound_props_do_not_touch_stored_props(self, store):
        render_slide(store, {"RadioGroup": lambda p, c: None}, bind=True)
        assert "bind" not in store.get_value((0, 0, "props"))


class TestJsonRenderers:
    """Tests for the built-in JSON renderers."""

    def test_json_output(self, quiz_collection):
        registry = json_registry(collect_types(quiz_collection))
        output = render(quiz_collection[0][1], registry)
        assert output["type"] == "CheckboxGroup"
        assert "children" not in output["props"]
        assert output["children"][0] == {"type": "Checkbox", "props": {"label": "B"}}

    def test_sets_become_sorted_lists(self):
        registry = json_registry(["A"])
        output = render(make_element("A", correctAnswers={"b", "a"}), registry)
        assert output["props"]["correctAnswers"] == ["a", "b"]

    def test_collect_types_includes_children(self, quiz_collection):
        assert collect_types(quiz_collection) == {
            "RadioGroup", "CheckboxGroup", "Checkbox", "Typography", "Box",
        }

    def test_json_render_with_store_bindings(self):
        store = TreeStore(initial=[[make_element("A", x=1)]])
        output = render_slide(store, json_registry(["A"]), bind=True)
        assert output == [{"type": "A", "props": {"x": 1, "path": [0, 0]}}]
