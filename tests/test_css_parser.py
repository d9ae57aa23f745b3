"""Tests for the CSS parser."""

from vanilla_web_lint.parsers.css import parse_css

SHEET = """/* layout */
.card, .card__title {
  color: red;
  margin: 0 !important;
}

@media (min-width: 40em) {
  .card--wide { width: 100%; }
}

@import url("print.css") print;

@keyframes pulse {
  from { opacity: 0; }
  to { opacity: 1; }
}

#main .card { padding: 1rem; }
"""


class TestStyleRules:
    """Test selector and declaration extraction."""

    def test_selectors_are_split(self) -> None:
        sheet = parse_css(SHEET)
        assert sheet.rules[0].selectors == [".card", ".card__title"]
        assert sheet.rules[0].line == 2

    def test_declarations(self) -> None:
        sheet = parse_css(SHEET)
        decls = sheet.rules[0].declarations
        assert [(d.property, d.value, d.important) for d in decls] == [
            ("color", "red", False),
            ("margin", "0", True),
        ]
        assert decls[1].line == 4

    def test_rules_inside_media_record_the_at_rule(self) -> None:
        sheet = parse_css(SHEET)
        wide = next(r for r in sheet.rules if r.selectors == [".card--wide"])
        assert wide.at_rule == "@media (min-width: 40em)"
        assert wide.line == 8

    def test_keyframes_are_not_style_rules(self) -> None:
        sheet = parse_css(SHEET)
        selectors = [s for rule in sheet.rules for s in rule.selectors]
        assert "from" not in selectors
        assert "to" not in selectors
        names = [a.name for a in sheet.at_rules]
        assert names == ["media", "import", "keyframes"]

    def test_statement_at_rule(self) -> None:
        sheet = parse_css(SHEET)
        imp = next(a for a in sheet.at_rules if a.name == "import")
        assert imp.prelude == 'url("print.css") print'
        assert not imp.has_block

    def test_comments_are_recorded(self) -> None:
        sheet = parse_css(SHEET)
        assert [(c.text.strip(), c.line) for c in sheet.comments] == [("layout", 1)]

    def test_line_offset(self) -> None:
        sheet = parse_css(".a { color: red; }", line_offset=10)
        assert sheet.rules[0].line == 11


class TestSelectorNames:
    """Test class and id names taken from selector nodes."""

    def test_class_names(self) -> None:
        sheet = parse_css("ul.menu > li.menu__item:hover { top: 0; }")
        assert sheet.rules[0].class_names == ["menu", "menu__item"]

    def test_pseudo_class_is_not_a_class(self) -> None:
        sheet = parse_css("a:hover, a:focus-visible { color: red; }")
        assert sheet.rules[0].class_names == []

    def test_classes_inside_functional_pseudo_classes(self) -> None:
        sheet = parse_css(".a:is(.b, .c), .d { top: 0; }")
        assert sheet.rules[0].selectors == [".a:is(.b, .c)", ".d"]
        assert sorted(sheet.rules[0].class_names) == ["a", "b", "c", "d"]

    def test_attribute_selector_content_is_ignored(self) -> None:
        sheet = parse_css('a[href$=".pdf"], a[href="#top"] { top: 0; }')
        assert sheet.rules[0].class_names == []
        assert sheet.rules[0].id_names == []

    def test_id_names(self) -> None:
        sheet = parse_css("#main .card { top: 0; }")
        assert sheet.rules[0].id_names == ["main"]
        assert sheet.rules[0].class_names == ["card"]

    def test_hex_colors_are_not_ids(self) -> None:
        sheet = parse_css(".a { color: #fff; background: #a0b1c2; }")
        assert sheet.rules[0].id_names == []


class TestMalformedInput:
    """Test recovery from broken stylesheets."""

    def test_missing_closing_brace(self) -> None:
        sheet = parse_css(".a { color: red;\n.b { color: blue; }")
        assert sheet.rules[0].selectors == [".a"]

    def test_braces_inside_strings(self) -> None:
        sheet = parse_css('.a::after { content: "}"; color: red; }\n.b { top: 0; }')
        assert [r.selectors for r in sheet.rules] == [[".a::after"], [".b"]]
        assert sheet.rules[0].declarations[0].value == '"}"'

    def test_comment_markers_inside_strings(self) -> None:
        sheet = parse_css('.a { content: "/* not a comment */"; }')
        assert sheet.comments == []
        assert sheet.rules[0].declarations[0].value == '"/* not a comment */"'
