"""Tests for doc comment rendering and markup conversion."""

import pytest

from godot_dts.codegen.languages.typescript.jsdoc import (
    convert_markup,
    deprecated_line,
    param_line,
    render_doc,
    returns_line,
    split_lines,
)


class TestRenderDoc:
    def test_nothing_to_document(self):
        assert render_doc([]) is None
        assert render_doc(["", "   "]) is None

    def test_single_line(self):
        assert render_doc(["Returns the speed."]) == "/**\n * Returns the speed.\n */"

    def test_annotation_lines(self):
        doc = render_doc(["Adds a point.", param_line("id", "int"), returns_line("boolean")])
        assert doc.splitlines() == [
            "/**",
            " * Adds a point.",
            " * @param id int",
            " * @returns boolean",
            " */",
        ]

    def test_embedded_breaks_become_lines(self):
        doc = render_doc(["First line.\n\tSecond line.  "])
        assert doc.splitlines() == ["/**", " * First line.", " * Second line.", " */"]

    def test_blank_lines_kept_inside(self):
        doc = render_doc(["One.", "", "Two."])
        assert doc.splitlines() == ["/**", " * One.", " *", " * Two.", " */"]

    def test_leading_and_trailing_blanks_trimmed(self):
        assert render_doc(["", "Text.", ""]) == "/**\n * Text.\n */"

    def test_comment_terminator_escaped(self):
        doc = render_doc(["Matches a */ b."])
        assert " * Matches a *\\/ b." in doc
        assert doc.count("*/") == 1

    def test_indent(self):
        assert render_doc(["x"], indent="  ") == "  /**\n   * x\n   */"

    def test_section_break(self):
        doc = render_doc(["Intro.", "Note: careful."])
        assert doc.splitlines() == ["/**", " * Intro.", " *", " * Note: careful.", " */"]

    def test_code_block_keeps_indentation(self):
        doc = render_doc(["Example:", "[codeblock]\n\tvar x = 1\n[/codeblock]"])
        lines = doc.splitlines()
        assert " * ```gdscript" in lines
        assert " * \tvar x = 1" in lines
        assert lines[-2] == " * ```"

    def test_docs_url(self):
        doc = render_doc(["See $DOCS_URL/tutorials."], docs_url="https://example.org/docs")
        assert " * See https://example.org/docs/tutorials." in doc


class TestConvertMarkup:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("[b]bold[/b]", "**bold**"),
            ("[i]it[/i]", "*it*"),
            ("[kbd]Ctrl + C[/kbd]", "`Ctrl + C`"),
            ("[method get_speed]", "`get_speed`"),
            ("[member Node.name]", "`Node.name`"),
            ("[signal changed]", "`changed`"),
            ("[param weight_scale]", "`weight_scale`"),
            ("[Node]", "`Node`"),
            ("[Vector2.ZERO]", "`Vector2.ZERO`"),
            ("[url=https://godotengine.org]Godot[/url]", "Godot (https://godotengine.org)"),
            ("a &lt; b &amp;&amp; c &gt; d", "a < b && c > d"),
        ],
    )
    def test_rules(self, text, expected):
        assert convert_markup(text) == expected

    def test_inline_code_escapes_backticks(self):
        assert convert_markup("[code]a`b[/code]") == "`a\\`b`"

    def test_csharp_examples_dropped(self):
        text = "[codeblocks][gdscript]print(1)[/gdscript][csharp]GD.Print(1);[/csharp][/codeblocks]"
        assert convert_markup(text) == "```gdscript\nprint(1)\n```"

    def test_codeblocks_followed_by_codeblock(self):
        text = (
            "[codeblocks][gdscript]print(1)[/gdscript][csharp]GD.Print(1);[/csharp][/codeblocks]\n"
            "More:\n"
            "[codeblock]var x = 2[/codeblock]"
        )
        assert convert_markup(text) == (
            "```gdscript\nprint(1)\n```\nMore:\n```gdscript\nvar x = 2\n```"
        )

    def test_tag_attributes(self):
        assert convert_markup('[codeblock lang="text"]a[/codeblock]') == "```gdscript\na\n```"
        assert convert_markup("[gdscript skip-lint]b[/gdscript]") == "```gdscript\nb\n```"

    def test_plain_text_unchanged(self):
        assert convert_markup("Nothing to convert.") == "Nothing to convert."


class TestLines:
    def test_split_lines(self):
        assert split_lines(None) == []
        assert split_lines("  \n ") == []
        assert split_lines("\n a\r\nb \n") == ["a", "b"]

    def test_param_line(self):
        assert param_line("position", "Vector2") == "@param position Vector2"
        assert param_line("weightScale", "float", "1.0") == (
            "@param weightScale float (optional, default: 1.0)"
        )
        assert param_line("value", None) == "@param value"

    def test_deprecated_line(self):
        assert deprecated_line("Use bar.") == "@deprecated Use bar."
