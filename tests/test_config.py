import pytest

from acrofill.config import FillOptions
from acrofill.models import Overflow


def test_defaults():
    options = FillOptions()
    assert options.font == "Helvetica"
    assert options.font_size == 12
    assert options.barcode_xdim == 1
    assert (options.label_rows, options.label_columns) == (1, 1)
    assert (options.label_offset_x, options.label_offset_y) == (0, 0)
    assert options.overflow == Overflow.EXPAND
    assert options.overflow_min_font_size == 8
    assert options.pages == 1
    assert options.show_bounds is False
    assert options.remove_fields is True
    assert options.context is None


def test_from_mapping_coerces_values():
    options = FillOptions.from_mapping(
        {"font_size": "10", "overflow": "shrink-to-fit", "label_rows": "2", "show_bounds": "yes", "pages": "1,3"}
    )
    assert options.font_size == 10.0
    assert options.overflow == Overflow.SHRINK_TO_FIT
    assert options.label_rows == 2
    assert options.show_bounds is True
    assert options.pages == [1, 3]


def test_overflow_false_means_none():
    assert FillOptions.from_mapping({"overflow": False}).overflow == Overflow.NONE


def test_unknown_options_are_rejected():
    with pytest.raises(ValueError, match="labels"):
        FillOptions.from_mapping({"labels": True})


def test_target_pages():
    assert FillOptions().target_pages(2) == [2]
    assert FillOptions(pages=3).target_pages(1) == [1, 2, 3]
    assert FillOptions(pages=[4, 2]).target_pages(1) == [4, 2]


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ACROFILL_FONT", "Courier")
    monkeypatch.setenv("ACROFILL_OVERFLOW", "none")
    monkeypatch.setenv("ACROFILL_REMOVE_FIELDS", "false")
    options = FillOptions.from_env(dotenv_path=str(tmp_path / "missing.env"), font_size=9)
    assert options.font == "Courier"
    assert options.overflow == Overflow.NONE
    assert options.remove_fields is False
    assert options.font_size == 9
