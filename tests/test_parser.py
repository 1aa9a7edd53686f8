import logging

import pytest

from acrofill.errors import UnsupportedFieldKindError
from acrofill.models import FieldKind, FontStyle, TextAlign
from acrofill.parser import _kind_attributes, extract_field_specs


def test_no_acroform_returns_none(graph):
    graph.add_page()
    assert extract_field_specs(graph) is None


def test_form_without_fields_returns_empty_list(single_page_form):
    graph, _ = single_page_form
    assert extract_field_specs(graph) == []


def test_text_field_attributes(single_page_form):
    graph, page = single_page_form
    field_ref = graph.add_field(
        "name",
        page=page,
        rect=(110, 40, 10, 20),
        **{"/DV": "N/A", "/DS": "font: bold 'Times New Roman' 14.0pt; text-align:center;"},
    )

    (spec,) = extract_field_specs(graph)

    assert spec.name == "name"
    assert spec.kind == FieldKind.TEXT
    assert spec.box == (110.0, 40.0, 10.0, 20.0)
    assert spec.page_number == 1
    assert spec.default_value == "N/A"
    assert spec.font == "Times New Roman"
    assert spec.font_style == FontStyle.BOLD
    assert spec.font_size == 14.0
    assert spec.align == TextAlign.CENTER
    assert spec.refs.field == field_ref
    assert spec.refs.page == page


def test_value_takes_precedence_over_default_value(single_page_form):
    graph, page = single_page_form
    graph.add_field("name", page=page, **{"/V": "current", "/DV": "default"})
    assert extract_field_specs(graph)[0].default_value == "current"


def test_text_field_without_style_leaves_style_unset(single_page_form):
    graph, page = single_page_form
    graph.add_field("plain", page=page)
    (spec,) = extract_field_specs(graph)
    assert spec.default_value == ""
    assert spec.font is None and spec.font_size is None and spec.align is None


def test_checkbox_state(single_page_form):
    graph, page = single_page_form
    graph.add_field("on", ft="/Btn", page=page, **{"/AS": "/On"})
    graph.add_field("off", ft="/Btn", page=page, **{"/AS": "/Off"})
    on, off = extract_field_specs(graph)
    assert on.kind == FieldKind.CHECKBOX and on.checked is True
    assert off.checked is False


def test_unsupported_kinds_and_non_widgets_are_skipped(single_page_form):
    graph, page = single_page_form
    graph.add_field("choice", ft="/Ch", page=page)
    graph.add_field("signature", ft="/Sig", page=page)
    graph.add_field("link", page=page, **{"/Subtype": "/Link"})
    graph.add_field("kept", page=page)
    assert [spec.name for spec in extract_field_specs(graph)] == ["kept"]


def test_utf16_names_are_transcoded(single_page_form):
    graph, page = single_page_form
    graph.add_field(b"\xfe\xff" + "Straße".encode("utf-16-be"), page=page)
    graph.add_field("Gr\xfc\xdfe".encode("latin-1"), page=page)
    assert [spec.name for spec in extract_field_specs(graph)] == ["Straße", "Grüße"]


def test_single_page_document_defaults_missing_page_reference(single_page_form):
    graph, page = single_page_form
    graph.add_field("orphan", page=page, link_page=False)
    (spec,) = extract_field_specs(graph)
    assert spec.page_number == 1
    assert spec.refs.page == page


def test_multi_page_document_drops_field_without_page_reference(graph, caplog):
    first = graph.add_page()
    second = graph.add_page()
    graph.add_form()
    graph.add_field("one", page=first)
    graph.add_field("orphan", page=second, link_page=False)
    graph.add_field("two", page=second)

    with caplog.at_level(logging.WARNING):
        specs = extract_field_specs(graph)

    assert [(spec.name, spec.page_number) for spec in specs] == [("one", 1), ("two", 2)]
    assert "Missing page reference for acroform field orphan" in caplog.text


def test_duplicate_names_are_kept_in_document_order(single_page_form):
    graph, page = single_page_form
    graph.add_field("dup", page=page, rect=(0, 0, 10, 10))
    graph.add_field("other", page=page)
    graph.add_field("dup", page=page, rect=(20, 20, 30, 30))
    assert [spec.name for spec in extract_field_specs(graph)] == ["dup", "other", "dup"]


def test_blank_names_are_skipped(single_page_form):
    graph, page = single_page_form
    graph.add_field("  ", page=page)
    assert extract_field_specs(graph) == []


@pytest.mark.parametrize("pages,fields_per_page", [(1, 3), (3, 2), (5, 0)])
def test_extracted_count_matches_supported_fields(graph, pages, fields_per_page):
    refs = [graph.add_page() for _ in range(pages)]
    graph.add_form()
    for index, page in enumerate(refs):
        for n in range(fields_per_page):
            graph.add_field(f"p{index}f{n}", page=page)
        graph.add_field(f"p{index}-choice", ft="/Ch", page=page)
    if pages > 1:
        graph.add_field("unlinked", page=refs[0], link_page=False)
    assert len(extract_field_specs(graph)) == pages * fields_per_page


def test_unhandled_kind_is_a_programming_error(graph):
    with pytest.raises(UnsupportedFieldKindError):
        _kind_attributes(graph, {}, "radio")
