from datetime import datetime, timezone

from conftest import jpeg_bytes, png_header_bytes

from cycling_photos.services.exif import read_captured_at


def test_reads_datetime_tag():
	data = jpeg_bytes(exif_datetime="2024:09:15 07:45:12")
	assert read_captured_at(data) == datetime(2024, 9, 15, 7, 45, 12, tzinfo=timezone.utc)


def test_image_without_exif():
	assert read_captured_at(jpeg_bytes()) is None


def test_unparseable_timestamp():
	assert read_captured_at(jpeg_bytes(exif_datetime="not a date")) is None


def test_not_an_image():
	assert read_captured_at(b"definitely not an image") is None


def test_oversized_image_header_is_ignored():
	assert read_captured_at(png_header_bytes(20000, 20000)) is None
