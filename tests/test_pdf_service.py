"""Tests for merging, splitting and page rendering."""
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

import pytest

from pdf_helpers import page_widths
from services import pdf_service
from services.errors import ReadError, WriteError
from services.pdf_service import (
    PageRange,
    check_document_size,
    get_page_thumbnail,
    get_pdf_info,
    merge_pdfs,
    select_pages,
    split_pdf,
)


class TestMerge:
    def test_merge_concatenates_in_list_order(self, make_pdf):
        a = make_pdf("a.pdf", [101, 102, 103])
        b = make_pdf("b.pdf", [201, 202])

        output_path = merge_pdfs([a, b])

        assert output_path == os.path.join(os.path.dirname(a), "a_merged.pdf")
        assert page_widths(output_path) == [101, 102, 103, 201, 202]

    def test_merge_leaves_inputs_untouched(self, make_pdf):
        a = make_pdf("a.pdf", [101, 102])
        b = make_pdf("b.pdf", [201])
        with open(a, "rb") as f:
            before = f.read()

        merge_pdfs([a, b])

        with open(a, "rb") as f:
            assert f.read() == before
        assert page_widths(b) == [201]

    def test_duplicate_paths_are_read_twice(self, make_pdf):
        a = make_pdf("a.pdf", [101, 102])

        output_path = merge_pdfs([a, a])

        assert page_widths(output_path) == [101, 102, 101, 102]

    def test_output_named_after_first_input(self, make_pdf):
        b = make_pdf("b.pdf", [201])
        a = make_pdf("a.pdf", [101])

        output_path = merge_pdfs([b, a])

        assert os.path.basename(output_path) == "b_merged.pdf"
        assert page_widths(output_path) == [201, 101]

    def test_input_without_extension_gets_pdf(self, make_pdf):
        a = make_pdf("report", [101])
        b = make_pdf("b.pdf", [201])

        output_path = merge_pdfs([a, b])

        assert os.path.basename(output_path) == "report_merged.pdf"

    def test_unreadable_input_writes_nothing(self, make_pdf, tmp_path):
        a = make_pdf("a.pdf", [101])
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"this is not a pdf")

        with pytest.raises(ReadError) as exc_info:
            merge_pdfs([a, str(broken)])

        assert exc_info.value.path == str(broken)
        assert not os.path.exists(os.path.join(tmp_path, "a_merged.pdf"))

    def test_missing_input_raises_read_error(self, make_pdf, tmp_path):
        a = make_pdf("a.pdf", [101])

        with pytest.raises(ReadError):
            merge_pdfs([a, str(tmp_path / "missing.pdf")])

    def test_empty_list_is_rejected(self):
        with pytest.raises(ValueError):
            merge_pdfs([])

    def test_unwritable_output_raises_write_error(self, make_pdf, tmp_path):
        a = make_pdf("a.pdf", [101])
        b = make_pdf("b.pdf", [201])
        (tmp_path / "a_merged.pdf").mkdir()

        with pytest.raises(WriteError):
            merge_pdfs([a, b])


class TestSplit:
    def test_split_one_output_per_range(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3, 4, 5, 6])

        outputs = split_pdf(doc, [PageRange(1, 3), PageRange(4, 6)])

        directory = os.path.dirname(doc)
        assert outputs == [
            os.path.join(directory, "doc_1-3.pdf"),
            os.path.join(directory, "doc_4-6.pdf"),
        ]
        assert page_widths(outputs[0]) == [1, 2, 3]
        assert page_widths(outputs[1]) == [4, 5, 6]

    def test_range_past_the_end_is_clamped_but_keeps_its_name(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3, 4, 5])

        outputs = split_pdf(doc, [PageRange(4, 10)])

        assert os.path.basename(outputs[0]) == "doc_4-10.pdf"
        assert page_widths(outputs[0]) == [4, 5]

    def test_range_before_the_start_is_clamped(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3])

        outputs = split_pdf(doc, [PageRange(0, 2)])

        assert os.path.basename(outputs[0]) == "doc_0-2.pdf"
        assert page_widths(outputs[0]) == [1, 2]

    def test_range_entirely_outside_gives_empty_pdf(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3])

        outputs = split_pdf(doc, [PageRange(7, 9)])

        assert os.path.exists(outputs[0])
        assert page_widths(outputs[0]) == []

    def test_overlapping_and_unsorted_ranges(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3, 4])

        outputs = split_pdf(doc, [(3, 4), (1, 3)])

        assert [os.path.basename(p) for p in outputs] == ["doc_3-4.pdf", "doc_1-3.pdf"]
        assert page_widths(outputs[0]) == [3, 4]
        assert page_widths(outputs[1]) == [1, 2, 3]

    def test_identical_ranges_overwrite_the_same_file(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3])

        outputs = split_pdf(doc, [PageRange(1, 2), PageRange(1, 2)])

        assert outputs[0] == outputs[1]
        assert page_widths(outputs[0]) == [1, 2]

    def test_repeated_split_gives_same_pages(self, make_pdf):
        doc = make_pdf("doc.pdf", [1, 2, 3, 4])

        first = split_pdf(doc, [PageRange(2, 3)])
        widths_first = page_widths(first[0])
        second = split_pdf(doc, [PageRange(2, 3)])

        assert first == second
        assert page_widths(second[0]) == widths_first == [2, 3]

    def test_unreadable_source_raises_read_error(self, tmp_path):
        broken = tmp_path / "broken.pdf"
        broken.write_bytes(b"")

        with pytest.raises(ReadError):
            split_pdf(str(broken), [PageRange(1, 1)])

    def test_write_failure_keeps_earlier_outputs(self, make_pdf, tmp_path):
        doc = make_pdf("doc.pdf", [1, 2, 3])
        (tmp_path / "doc_2-2.pdf").mkdir()

        with pytest.raises(WriteError) as exc_info:
            split_pdf(doc, [PageRange(1, 1), PageRange(2, 2), PageRange(3, 3)])

        assert exc_info.value.path == str(tmp_path / "doc_2-2.pdf")
        assert page_widths(str(tmp_path / "doc_1-1.pdf")) == [1]
        assert not os.path.exists(tmp_path / "doc_3-3.pdf")


class TestSelectPages:
    def test_inside(self):
        assert select_pages(10, PageRange(2, 4)) == [2, 3, 4]

    def test_clamps_both_ends(self):
        assert select_pages(5, PageRange(0, 10)) == [1, 2, 3, 4, 5]

    def test_nothing_left(self):
        assert select_pages(5, PageRange(6, 8)) == []


class TestPageInfo:
    def test_get_pdf_info(self, make_pdf):
        doc = make_pdf("doc.pdf", [100, 100, 100])
        assert get_pdf_info(doc) == {"total_pages": 3}

    def test_get_pdf_info_unreadable(self, tmp_path):
        with pytest.raises(ReadError):
            get_pdf_info(str(tmp_path / "missing.pdf"))

    def test_thumbnail_is_png(self, make_pdf):
        doc = make_pdf("doc.pdf", [200, 200])
        assert get_page_thumbnail(doc, 1).startswith(b"\x89PNG")

    def test_thumbnail_out_of_range(self, make_pdf):
        doc = make_pdf("doc.pdf", [200])
        with pytest.raises(ValueError):
            get_page_thumbnail(doc, 1)

    def test_small_document_has_no_warnings(self, make_pdf):
        doc = make_pdf("doc.pdf", [100])
        assert check_document_size(doc, 1) == []

    def test_many_pages_warns(self, make_pdf, monkeypatch):
        doc = make_pdf("doc.pdf", [100, 100, 100])
        monkeypatch.setattr(pdf_service, "LARGE_PAGE_COUNT", 2)
        assert check_document_size(doc, 3) == ["Processing PDFs with many pages may be slow"]

    def test_large_file_warns(self, make_pdf, monkeypatch):
        doc = make_pdf("doc.pdf", [100])
        monkeypatch.setattr(pdf_service, "LARGE_FILE_BYTES", 10)
        assert check_document_size(doc, 1) == [
            "Processing large PDF file. This may take some time."
        ]
