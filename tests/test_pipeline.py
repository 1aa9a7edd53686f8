from io import BytesIO

import fitz
import pytest
from pypdf import PdfReader, PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, FloatObject, NameObject, TextStringObject

from acrofill import FillOptions, FormAbsentError, Overflow, PdfForm, fill_pdf, list_fields

# Without TEXT_PRESERVE_LIGATURES, shaped ligatures such as "fi" come back as letters.
TEXT_FLAGS = fitz.TEXT_PRESERVE_WHITESPACE | fitz.TEXT_MEDIABOX_CLIP

# "code" field rect in PyMuPDF page coordinates, with a little slack.
CODE_RECT = fitz.Rect(70, 250, 302, 294)


def _widget(page_ref, name, ft, rect, **extra):
    field = DictionaryObject({
        NameObject("/Type"): NameObject("/Annot"),
        NameObject("/Subtype"): NameObject("/Widget"),
        NameObject("/FT"): NameObject(ft),
        NameObject("/T"): TextStringObject(name),
        NameObject("/Rect"): ArrayObject([FloatObject(v) for v in rect]),
        NameObject("/P"): page_ref,
    })
    for key, value in extra.items():
        field[NameObject(f"/{key}")] = value
    return field


def build_form(with_form=True) -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    page = writer.pages[0]
    page_ref = page.indirect_reference
    widgets = [
        _widget(page_ref, "name", "/Tx", (72, 700, 300, 720)),
        _widget(page_ref, "quest", "/Tx", (72, 650, 300, 670), DV=TextStringObject("To find the Grail"),
                DS=TextStringObject("font: bold Helvetica 10pt; text-align:left;")),
        _widget(page_ref, "agree", "/Btn", (72, 600, 84, 612), AS=NameObject("/On")),
        _widget(page_ref, "code", "/Tx", (72, 500, 300, 540)),
    ]
    refs = ArrayObject([writer._add_object(widget) for widget in widgets])
    page[NameObject("/Annots")] = ArrayObject(list(refs))
    if with_form:
        writer._root_object[NameObject("/AcroForm")] = DictionaryObject({NameObject("/Fields"): refs})
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_list_fields():
    assert list_fields(build_form()) == ["name", "quest", "agree", "code"]


def test_list_fields_without_form():
    assert list_fields(build_form(with_form=False)) == []


def test_fill_pdf_paints_values_and_removes_widgets(tmp_path):
    destination = tmp_path / "out" / "filled.pdf"
    result = fill_pdf(build_form(), destination, {"name": "Sir Launcelot", "code": "barcode code39 12345"})
    assert result == str(destination)

    reader = PdfReader(str(destination))
    assert list(reader.trailer["/Root"]["/AcroForm"]["/Fields"]) == []
    assert not reader.pages[0].get("/Annots")

    with fitz.open(str(destination)) as doc:
        text = doc[0].get_text(flags=TEXT_FLAGS)
        bars = [path for path in doc[0].get_drawings() if CODE_RECT.contains(path["rect"])]
    assert "Sir Launcelot" in text
    assert "To find the Grail" in text
    assert bars


@pytest.mark.parametrize("overflow", list(Overflow))
def test_text_longer_than_its_field_is_never_dropped(overflow):
    form = PdfForm.open(build_form())
    form.fill({"name": " ".join(["Lancelot"] * 60)}, FillOptions(overflow=overflow))
    with fitz.open("pdf", form.to_bytes()) as doc:
        text = doc[0].get_text(flags=TEXT_FLAGS)
    assert text.count("Lancelot") == 60


def test_fill_keeps_widgets_when_cleanup_disabled():
    form = PdfForm.open(build_form())
    form.fill({"name": "x"}, FillOptions(remove_fields=False))
    reader = PdfReader(BytesIO(form.to_bytes()))
    assert len(reader.trailer["/Root"]["/AcroForm"]["/Fields"]) == 4
    assert len(reader.pages[0]["/Annots"]) == 4


def test_field_specs_carry_style():
    specs = PdfForm.open(build_form()).field_specs()
    quest = specs[1]
    assert quest.font == "Helvetica"
    assert quest.font_size == 10.0
    assert specs[2].checked is True


def test_require_form(tmp_path):
    with pytest.raises(FormAbsentError):
        fill_pdf(build_form(with_form=False), tmp_path / "x.pdf", {}, require_form=True)


def test_document_without_form_is_copied_unchanged(tmp_path):
    destination = fill_pdf(build_form(with_form=False), tmp_path / "copy.pdf", {"name": "x"})
    reader = PdfReader(destination)
    assert len(reader.pages) == 1
    assert len(reader.pages[0]["/Annots"]) == 4
