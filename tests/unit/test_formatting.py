"""Unit tests for size and filename formatting."""

import pytest
from app.utils.formatting import DEFAULT_PDF_NAME, format_file_size, suggested_filename


class TestFormatFileSize:
    @pytest.mark.parametrize("num_bytes,expected", [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1 MB"),
        (int(2.25 * 1024 * 1024), "2.25 MB"),
        (1024 ** 3, "1 GB"),
    ])
    def test_sizes(self, num_bytes, expected):
        assert format_file_size(num_bytes) == expected


class TestSuggestedFilename:
    def test_single_image_keeps_name(self):
        assert suggested_filename(["holiday.png"]) == "holiday.pdf"

    def test_only_last_extension_replaced(self):
        assert suggested_filename(["scan.v2.png"]) == "scan.v2.pdf"

    def test_name_without_extension(self):
        assert suggested_filename(["receipt"]) == "receipt.pdf"

    def test_several_images(self):
        assert suggested_filename(["a.png", "b.png"]) == DEFAULT_PDF_NAME

    def test_no_images(self):
        assert suggested_filename([]) == "converted-images.pdf"
