import logging
from datetime import datetime, timezone
from io import BytesIO

from PIL import Image

logger = logging.getLogger(__name__)

EXIF_IFD = 0x8769
DATETIME_ORIGINAL = 36867
DATETIME = 306
EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"


def read_captured_at(data: bytes) -> datetime | None:
	"""Capture time from the EXIF ``DateTimeOriginal`` tag, taken as UTC.

	Falls back to the base ``DateTime`` tag. Images without EXIF, or that
	Pillow cannot or will not parse (decompression bombs), give ``None``.
	"""
	try:
		with Image.open(BytesIO(data)) as image:
			exif = image.getexif()
			raw = exif.get_ifd(EXIF_IFD).get(DATETIME_ORIGINAL) or exif.get(DATETIME)
	except (OSError, ValueError, Image.DecompressionBombError) as exc:
		logger.debug("Could not read EXIF data: %s", exc)
		return None

	if not raw:
		return None
	try:
		value = datetime.strptime(str(raw).strip("\x00 "), EXIF_DATETIME_FORMAT)
	except ValueError:
		logger.debug("Unparseable EXIF timestamp: %r", raw)
		return None
	return value.replace(tzinfo=timezone.utc)
