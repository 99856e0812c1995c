from typing import Any, Dict

MESSAGES: Dict[str, str] = {
	"success.CREATED": "Resource created successfully",
	"success.UPDATED": "Resource updated successfully",
	"success.DELETED": "Resource deleted successfully",
	"success.FETCHED": "Resource retrieved successfully",
	"success.LIST": "Resources retrieved successfully",
	"errors.NOT_FOUND": "{entity} with id {id} was not found",
	"errors.VALIDATION_FAILED": "Validation failed",
	"errors.EXTERNAL_SERVICE": "External service {service} failed",
	"errors.INTERNAL": "An unexpected error occurred",
	"event.name_invalid_length": "Event name must be between 3 and 200 characters",
	"event.date_in_past": "Event date cannot be in the past",
	"photo.filename_empty": "Photo filename cannot be empty",
	"photo.invalid_mime_type": "Photo type must be JPEG, PNG or WebP",
	"photo.invalid_file_size": "Photo file size must be greater than zero",
	"photo.duplicate_filename": "A photo with this filename already exists in the event",
	"photo.plate_number_out_of_range": "Plate number must be between 1 and 999",
	"photo.density_percentage_out_of_range": "Color density must be between 0 and 100",
}


def resolve_message(key: str, args: Dict[str, Any] | None = None) -> str:
	"""Returns the text for ``key``, or the key itself when it is unknown."""
	template = MESSAGES.get(key)
	if template is None:
		return key
	try:
		return template.format(**(args or {}))
	except (KeyError, IndexError):
		return template
