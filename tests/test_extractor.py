"""Tests for class model extraction."""

import pytest

from godot_dts.codegen.core.schema import DescriptionError
from godot_dts.codegen.languages.typescript.extractor import ClassModelExtractor
from godot_dts.codegen.languages.typescript.naming import create_typescript_sanitizer


def class_xml(body: str, name: str = "Sample", inherits: str = "") -> str:
    parent = f' inherits="{inherits}"' if inherits else ""
    return f'<class name="{name}"{parent}>{body}</class>'


@pytest.fixture
def extractor():
    return ClassModelExtractor()


class TestClassLevel:
    def test_basic_fields(self, extractor, car_xml):
        description = extractor.extract(car_xml)
        assert description.name == "Car"
        assert description.parent is None
        assert description.summary == "A car."
        assert description.doc == "/**\n * A car.\n */"

    def test_parent(self, extractor, astar_xml):
        assert extractor.extract(astar_xml).parent == "RefCounted"

    def test_global_scope_skipped(self, extractor, global_scope_xml):
        assert extractor.extract(global_scope_xml) is None

    def test_missing_name_skipped(self, extractor):
        assert extractor.extract("<class><members /></class>") is None

    def test_malformed_raises(self, extractor, broken_xml):
        with pytest.raises(DescriptionError):
            extractor.extract(broken_xml)

    def test_empty_class(self, extractor):
        description = extractor.extract(class_xml(""))
        assert description.members == []
        assert description.methods == []
        assert description.signals == []
        assert description.constants == []
        assert description.doc is None

    def test_class_doc_joins_summary_and_details(self, extractor):
        description = extractor.extract(
            class_xml(
                "<brief_description>Short.</brief_description>"
                "<description>Longer text.</description>"
            )
        )
        assert description.doc.splitlines() == ["/**", " * Short.", " *", " * Longer text.", " */"]

    def test_deprecated_class(self, extractor):
        description = extractor.extract(
            '<class name="Old" deprecated="Use New instead.">'
            "<brief_description>Old thing.</brief_description></class>"
        )
        assert description.deprecated_note == "Use New instead."
        assert description.doc.splitlines()[-2] == " * @deprecated Use New instead."


class TestMembers:
    def test_single_member(self, extractor, car_xml):
        members = extractor.extract(car_xml).members
        assert len(members) == 1
        assert members[0].source_name == "speed"
        assert members[0].emitted_name == "speed"
        assert members[0].type_expr == "float"
        assert members[0].is_private is False
        assert members[0].doc == "/**\n * Current speed.\n */"

    def test_sorted_by_emitted_name(self, extractor):
        description = extractor.extract(
            class_xml(
                "<members>"
                '<member name="z_index" type="int" />'
                '<member name="alpha" type="float" />'
                '<member name="_private_thing" type="int" />'
                "</members>"
            )
        )
        assert [m.emitted_name for m in description.members] == [
            "_privateThing",
            "alpha",
            "zIndex",
        ]
        assert description.members[0].is_private is True

    def test_sort_ignores_case(self, extractor):
        description = extractor.extract(
            class_xml(
                "<members>"
                '<member name="a_z" type="int" />'
                '<member name="ab" type="int" />'
                "</members>"
            )
        )
        assert [m.emitted_name for m in description.members] == ["ab", "aZ"]

    def test_nameless_member_skipped(self, extractor):
        description = extractor.extract(
            class_xml('<members><member type="int" /><member name="a" type="int" /></members>')
        )
        assert [m.emitted_name for m in description.members] == ["a"]

    def test_missing_type(self, extractor):
        description = extractor.extract(class_xml('<members><member name="value" /></members>'))
        assert description.members[0].type_expr == "any"

    def test_member_types_recorded(self, extractor):
        description = extractor.extract(
            class_xml('<members><member name="points" type="Vector2[]" /></members>')
        )
        assert description.members[0].type_expr == "Vector2[]"
        assert "Vector2" in description.referenced_types


class TestMethods:
    def test_params_and_defaults(self, extractor, astar_xml):
        methods = {m.emitted_name: m for m in extractor.extract(astar_xml).methods}
        add_point = methods["addPoint"]
        assert add_point.return_type == "void"
        assert [p.name for p in add_point.params] == ["position", "weightScale"]
        assert add_point.params[0].optional is False
        assert add_point.params[1].optional is True
        assert add_point.params[1].default == "1.0"

    def test_sorted_by_emitted_name(self, extractor, astar_xml):
        methods = extractor.extract(astar_xml).methods
        assert [m.emitted_name for m in methods] == ["_computeCost", "addPoint", "getPointIds"]

    def test_private_method(self, extractor, astar_xml):
        methods = {m.emitted_name: m for m in extractor.extract(astar_xml).methods}
        assert methods["_computeCost"].is_private is True
        assert methods["addPoint"].is_private is False

    def test_doc_lines(self, extractor, astar_xml):
        methods = {m.emitted_name: m for m in extractor.extract(astar_xml).methods}
        assert methods["addPoint"].doc.splitlines() == [
            "/**",
            " * Adds a new point at the given position.",
            " * @param position Vector2",
            " * @param weightScale float (optional, default: 1.0)",
            " */",
        ]
        assert methods["getPointIds"].doc == "/**\n * @returns PackedInt64Array\n */"

    def test_missing_return_is_void(self, extractor):
        description = extractor.extract(class_xml('<methods><method name="clear" /></methods>'))
        assert description.methods[0].return_type == "void"
        assert description.methods[0].doc is None

    def test_overloads_kept_in_source_order(self, extractor):
        description = extractor.extract(
            class_xml(
                "<methods>"
                '<method name="connect"><param index="0" name="a" type="int" /></method>'
                '<method name="connect"><param index="0" name="b" type="String" /></method>'
                "</methods>"
            )
        )
        assert [m.emitted_name for m in description.methods] == ["connect", "connect"]
        assert [m.params[0].name for m in description.methods] == ["a", "b"]

    def test_repeated_name_shares_first_visibility(self):
        extractor = ClassModelExtractor(
            sanitizer=create_typescript_sanitizer(public_underscore_names=["_ready"])
        )
        description = extractor.extract(
            class_xml(
                "<methods>"
                '<method name="__ready" />'
                '<method name="_ready" />'
                "</methods>"
            )
        )
        assert [m.emitted_name for m in description.methods] == ["_ready", "_ready"]
        assert [m.is_private for m in description.methods] == [True, True]

    def test_param_order_trusted(self, extractor):
        description = extractor.extract(
            class_xml(
                '<methods><method name="f">'
                '<param index="0" name="a" type="int" default="0" />'
                '<param index="1" name="b" type="int" />'
                "</method></methods>"
            )
        )
        assert [(p.name, p.optional) for p in description.methods[0].params] == [
            ("a", True),
            ("b", False),
        ]

    def test_reserved_param_name(self, extractor):
        description = extractor.extract(
            class_xml(
                '<methods><method name="f">'
                '<param index="0" name="from" type="int" />'
                "</method></methods>"
            )
        )
        assert description.methods[0].params[0].name == "from$"


class TestSignals:
    def test_collision_suffix(self, extractor, tab_bar_xml):
        description = extractor.extract(tab_bar_xml)
        signals = {s.source_name: s for s in description.signals}
        assert signals["tab_selected"].emitted_name == "tabSelectedSignal"
        assert signals["changed"].emitted_name == "changed"
        assert [m.emitted_name for m in description.methods] == ["tabSelected"]

    def test_suffix_repeated_until_unique(self, extractor):
        description = extractor.extract(
            class_xml(
                '<members><member name="changed" type="bool" /></members>'
                '<methods><method name="changed_signal" /></methods>'
                '<signals><signal name="changed" /></signals>'
            )
        )
        assert description.signals[0].emitted_name == "changedSignalSignal"

    def test_member_collision(self, extractor):
        description = extractor.extract(
            class_xml(
                '<members><member name="visible" type="bool" /></members>'
                '<signals><signal name="visible" /></signals>'
            )
        )
        assert description.signals[0].emitted_name == "visibleSignal"

    def test_untyped_params(self, extractor):
        description = extractor.extract(
            class_xml('<signals><signal name="fired"><param index="0" name="value" /></signal></signals>')
        )
        assert description.signals[0].params[0].type_expr is None

    def test_signal_doc(self, extractor, tab_bar_xml):
        signals = {s.source_name: s for s in extractor.extract(tab_bar_xml).signals}
        assert signals["tab_selected"].doc == "/**\n * Emitted when a tab is selected.\n */"
        assert signals["changed"].doc is None


class TestConstants:
    def test_source_order_and_names(self, extractor, tab_bar_xml):
        constants = extractor.extract(tab_bar_xml).constants
        assert [c.name for c in constants] == ["ALIGNMENT_LEFT", "ALIGNMENT_CENTER"]

    def test_deprecated_constant_doc(self, extractor, tab_bar_xml):
        constants = extractor.extract(tab_bar_xml).constants
        assert constants[0].doc == "/**\n * Places tabs to the left.\n */"
        assert constants[1].deprecated == "Use ALIGNMENT_LEFT."
        assert constants[1].doc == "/**\n * @deprecated Use ALIGNMENT_LEFT.\n */"
