"""
Tests - Template Parser and Malformed Directives
==================================================
"""

from __future__ import annotations

import logging

from dijibill.documents import parse_template, render
from dijibill.documents.nodes import Loop, Section, Text, Variable
from dijibill.documents.parser import MAX_NESTING_DEPTH


class TestParseTree:
    def test_plain_text_is_single_node(self):
        assert parse_template("hello") == (Text("hello"),)

    def test_empty_template(self):
        assert parse_template("") == ()

    def test_variable_node_keeps_path_parts(self):
        nodes = parse_template("a{{ org.name }}b")
        assert nodes[0] == Text("a")
        assert isinstance(nodes[1], Variable)
        assert nodes[1].path == ("org", "name")
        assert nodes[1].raw == "{{ org.name }}"
        assert nodes[2] == Text("b")

    def test_loop_and_section_nodes(self):
        nodes = parse_template("{{#each items}}{{#note}}{{note}}{{/note}}{{/each}}")
        assert len(nodes) == 1
        loop = nodes[0]
        assert isinstance(loop, Loop)
        assert loop.path == ("items",)
        assert loop.raw_close == "{{/each}}"
        section = loop.children[0]
        assert isinstance(section, Section)
        assert section.path == ("note",)

    def test_if_alias_parses_as_section(self):
        nodes = parse_template("{{#if shown}}x{{/if}}")
        assert isinstance(nodes[0], Section)
        assert nodes[0].path == ("shown",)

    def test_special_paths(self):
        nodes = parse_template("{{@index}}{{@key}}{{this}}{{this.name}}")
        assert [node.path for node in nodes] == [
            ("@index",), ("@key",), ("this",), ("this", "name"),
        ]

    def test_tree_is_immutable(self):
        nodes = parse_template("{{#each items}}{{name}}{{/each}}")
        assert isinstance(nodes, tuple)
        assert isinstance(nodes[0].children, tuple)


class TestMalformedDirectives:
    def test_unterminated_each_is_literal_and_logged(self, caplog):
        source = "A{{#each items}}{{name}}B"
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            out = render(source, {"items": [{"name": "Tea"}], "name": "Root"})
        assert out == "A{{#each items}}RootB"
        assert "Unterminated" in caplog.text

    def test_unterminated_section_is_literal(self):
        out = render("{{#customer}}Hi {{customer}}", {"customer": "Bob"})
        assert out == "{{#customer}}Hi Bob"

    def test_stray_close_is_literal_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            out = render("a{{/each}}b", {})
        assert out == "a{{/each}}b"
        assert "no opener" in caplog.text

    def test_invalid_tag_is_literal(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            out = render("x{{ 1bad-name }}y", {})
        assert out == "x{{ 1bad-name }}y"
        assert "Invalid template tag" in caplog.text

    def test_unclosed_braces_are_literal(self):
        assert render("price {{total", {"total": "5"}) == "price {{total"

    def test_mismatched_inner_close_unwinds_inner_opener(self):
        out = render(
            "{{#each items}}{{#note}}{{name}}{{/each}}",
            {"items": [{"name": "Tea"}, {"name": "Cake"}]},
        )
        assert out == "{{#note}}Tea{{#note}}Cake"

    def test_malformed_template_never_raises(self):
        source = "{{#each}}{{/}}{{#}}{{#if}}{{}}{{/if}}"
        assert isinstance(render(source, {}), str)

    def test_warning_reports_line_number(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            render("line1\nline2 {{/x}}", {})
        assert "line 2" in caplog.text

    def test_line_numbers_track_across_many_tags(self, caplog):
        source = "{{a}}\n{{b}}{{/x}}\n\n{{c}}\n{{/y}}"
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            render(source, {})
        messages = [record.getMessage() for record in caplog.records]
        assert "line 2" in messages[0]
        assert "line 5" in messages[1]

    def test_bare_each_and_if_are_literal_and_logged(self, caplog):
        source = "{{#each}}a{{/each}}|{{#if}}b{{/if}}"
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            out = render(source, {"each": True, "if": True})
        assert out == source
        assert "Invalid template directive" in caplog.text

    def test_bare_each_is_not_a_section(self):
        nodes = parse_template("{{#each}}x{{/each}}")
        assert not any(isinstance(node, (Section, Loop)) for node in nodes)


class TestNestingDepth:
    def test_deep_nesting_renders_without_error(self, caplog):
        source = "{{#a}}" * 1200 + "x" + "{{/a}}" * 1200
        with caplog.at_level(logging.WARNING, logger="dijibill.documents"):
            out = render(source, {"a": True})
        assert "x" in out
        assert "nests deeper than" in caplog.text

    def test_openers_past_the_limit_are_literal(self):
        depth = MAX_NESTING_DEPTH + 1
        source = "{{#a}}" * depth + "x" + "{{/a}}" * depth
        out = render(source, {"a": True})
        assert out == "{{#a}}x{{/a}}"

    def test_nesting_at_the_limit_is_parsed(self):
        source = "{{#a}}" * MAX_NESTING_DEPTH + "x" + "{{/a}}" * MAX_NESTING_DEPTH
        assert render(source, {"a": True}) == "x"
