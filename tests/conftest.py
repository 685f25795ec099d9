"""Shared fixtures: small real PDFs whose pages are told apart by width."""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

import pytest
from pypdf import PdfWriter


@pytest.fixture
def make_pdf(tmp_path):
    def _make(name, widths):
        path = tmp_path / name
        writer = PdfWriter()
        for width in widths:
            writer.add_blank_page(width=width, height=300)
        with open(path, "wb") as f:
            writer.write(f)
        return str(path)
    return _make
