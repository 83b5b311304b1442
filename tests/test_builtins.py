"""Tests for the built-in transformation set."""

import math

import pytest

from domextract import DomExtractor
from domextract.documents import load_document


@pytest.fixture
def run(page, adapter):
    extractor = DomExtractor(page, adapter=adapter)

    def _run(chain, value):
        return extractor.apply_transformations(chain, value)

    return _run


@pytest.fixture
def title(page):
    return page.select_one(".title")


# ── Node transformations ─────────────────────────────────


@pytest.mark.parametrize(
    "name",
    ["inner-html", "inner-text", "value", "get-attribute:id", "select-one:li", "select-all:li"],
)
def test_node_transformations_pass_none_through(run, name):
    assert run([name], None) is None


@pytest.mark.parametrize("name", ["inner-html", "inner-text", "value", "get-attribute:id"])
def test_node_transformations_reject_non_nodes(run, name):
    assert run([name], "not a node") is False
    assert run([name], False) is False
    assert run([name], ["a"]) is False


def test_select_one_and_all(run, page):
    features = page.select_one(".features")
    assert run(["select-one:li", "inner-text"], features) == "Waterproof"
    items = run(["select-all:li"], features)
    assert [li.get_text() for li in items] == ["Waterproof", "Lightweight", "Recycled"]
    assert run(["select-one:.missing"], features) is None
    assert run(["select-all:.missing"], features) == []


def test_inner_html_and_text(run, page):
    description = page.select_one(".description")
    assert run(["inner-html"], description) == "Fish &amp; Chips"
    assert run(["inner-text"], description) == "Fish & Chips"


def test_get_attribute(run, page):
    product = page.select_one("#product")
    assert run(["get-attribute:data-sku"], product) == "SKU-1001"
    assert run(["get-attribute:data-missing"], product) is None


def test_get_attribute_joins_class_list(run):
    doc = load_document('<span class="a b">x</span>')
    assert run(["select-one:span.a", "get-attribute:class"], doc) == "a b"


def test_value_of_non_form_element(run, title):
    assert run(["value"], title) is None


# ── Number transformations ───────────────────────────────


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("  42 ", 42), ("-7", -7), ("12px", 12), ("3.9", 3), ("+5", 5)],
)
def test_to_int(run, text, expected):
    assert run(["to-int"], text) == expected


@pytest.mark.parametrize("value", [42, None, ["1"]])
def test_to_int_inapplicable(run, value):
    assert run(["to-int"], value) is False


@pytest.mark.parametrize("text", ["abc", "", "px12"])
def test_to_int_unparseable_is_nan(run, text):
    assert math.isnan(run(["to-int"], text))


def test_nan_flows_through_number_transformations(run):
    assert run(["to-int", "to-string"], "abc") == "NaN"
    assert math.isnan(run(["to-float", "multiply-by:2", "round"], "n/a"))



@pytest.mark.parametrize(
    "text, expected",
    [("3.14", 3.14), (" 19.50 EUR", 19.5), ("-.5", -0.5), ("1e3", 1000.0), ("7", 7.0)],
)
def test_to_float(run, text, expected):
    assert run(["to-float"], text) == expected


def test_to_float_infinity(run):
    assert run(["to-float"], "Infinity") == math.inf
    assert run(["to-float"], "-Infinity") == -math.inf


def test_to_float_inapplicable(run):
    assert math.isnan(run(["to-float"], "n/a"))
    assert run(["to-float"], 3.5) is False



@pytest.mark.parametrize(
    "number, expected",
    [(2.4, 2), (2.5, 3), (-2.5, -2), (-2.6, -3), (7, 7)],
)
def test_round_half_up(run, number, expected):
    assert run(["round"], number) == expected


def test_round_rejects_non_numbers(run):
    assert run(["round"], "2.5") is False
    assert run(["round"], True) is False
    assert run(["round"], None) is False


def test_round_keeps_non_finite(run):
    assert run(["round"], math.inf) == math.inf


def test_multiply_by(run):
    assert run(["multiply-by:2"], 3) == 6
    assert run(["multiply-by:1.5"], 2) == 3.0
    assert run(["multiply-by:2"], "3") is False


# ── String transformations ───────────────────────────────


def test_html_to_text_decodes_entities(run):
    assert run(["html-to-text"], "Fish &amp; Chips") == "Fish & Chips"


def test_html_to_text_reads_first_child_only(run):
    assert run(["html-to-text"], "before<b>bold</b>after") == "before"


def test_html_to_text_element_first_child(run):
    # An element has no text value of its own
    assert run(["html-to-text"], "<b>bold</b>") == "null"


def test_html_to_text_empty_markup(run):
    assert run(["html-to-text"], "") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (4.0, "4"),
        (2.5, "2.5"),
        ("text", "text"),
        (["a", None, 1], "a,,1"),
    ],
)
def test_to_string(run, value, expected):
    assert run(["to-string"], value) == expected


def test_to_string_node_is_markup(run, title):
    assert run(["to-string"], title) == str(title)


def test_trim(run):
    assert run(["trim"], "\n  padded \t") == "padded"
    assert run(["trim"], 5) is False


def test_split(run):
    assert run(["split:,"], "a,b,c") == ["a", "b", "c"]
    assert run(["split:,:2"], "a,b,c") == ["a", "b"]
    assert run(["split:,:0"], "a,b,c") == []
    assert run(["split:"], "abc") == ["a", "b", "c"]
    assert run(["split:,"], None) is False


def test_split_on_colon(run):
    assert run(["split:::2"], "a:b:c") == ["a", "b"]
    assert run(["split::"], "a:b") == ["a", "b"]


def test_split_empty_limit_means_no_limit(run):
    assert run(["split:,:"], "a,b,c") == ["a", "b", "c"]



def test_replace_regex_global(run):
    assert run(["replace:/a+/g:b"], "caaandaa") == "cbndb"


def test_replace_regex_first_only(run):
    assert run(["replace:/a+/:b"], "caaandaa") == "cbndaa"


def test_replace_literal_first_only(run):
    assert run(["replace:.:!"], "a.b.c") == "a!b.c"


def test_replace_ignore_case(run):
    assert run(["replace:/HELLO/i:bye"], "hello world") == "bye world"


def test_replace_group_references(run):
    assert run([r"replace:/(\w+)@(\w+)/:$2 at $1"], "user@host") == "host at user"
    assert run(["replace:/o/g:[$&]"], "foo") == "f[o][o]"
    assert run(["replace:x:$$"], "axb") == "a$b"


def test_replace_empty_global_pattern(run):
    assert run(["replace://g:-"], "ab") == "-a-b-"


def test_replace_requires_string(run):
    assert run(["replace:a:b"], 1) is False


def test_match_groups(run):
    assert run([r"match:/(\d+)-(\d+)/"], "range 10-20") == ["10-20", "10", "20"]


def test_match_global(run):
    assert run([r"match:/\d+/g"], "1 a 22 b 333") == ["1", "22", "333"]


def test_match_sticky(run):
    assert run([r"match:/\d/gy"], "12a3") == ["1", "2"]
    assert run([r"match:/\d/y"], "a1") is None


def test_match_literal(run):
    assert run(["match:a.b"], "axb") is None
    assert run(["match:a.b"], "xa.by") == ["a.b"]


def test_match_requires_string(run):
    assert run(["match:a"], None) is False


# ── Array transformations ────────────────────────────────


def test_get_index(run):
    assert run(["get-index:1"], ["a", "b", "c"]) == "b"
    assert run(["get-index:0"], ("x",)) == "x"
    assert run(["get-index:3"], ["a", "b", "c"]) is False
    assert run(["get-index:-1"], ["a", "b", "c"]) is False
    assert run(["get-index:0"], "abc") is False


def test_slice(run):
    assert run(["slice:1:3"], ["a", "b", "c", "d"]) == ["b", "c"]
    assert run(["slice:2"], ["a", "b", "c", "d"]) == ["c", "d"]
    assert run(["slice:-2"], ["a", "b", "c", "d"]) == ["c", "d"]
    assert run(["slice:1:"], ["a", "b", "c"]) == ["b", "c"]


def test_slice_has_no_type_guard(run):
    # Unlike get-index, slice applies to anything sliceable
    assert run(["slice:1:3"], "abcd") == "bc"
    with pytest.raises(TypeError):
        run(["slice:0:1"], False)
    with pytest.raises(TypeError):
        run(["slice:0:1"], None)
