# 📄 File: plantlens/shared/utils/images.py

# 🧭 Purpose (Layman Explanation):
# Turns the photo the phone sends (a long text blob) back into a real picture file,
# shrinking and compressing it so it takes less space once stored.

# 🧪 Purpose (Technical Summary):
# Data-URI parsing/decoding and Pillow-based resize + JPEG recompression used by
# the record store backends when externalizing inline image payloads.

# 🔗 Dependencies:
# - PIL (Pillow): Image decoding, resizing and JPEG encoding
# - base64 / binascii: Data URI payload decoding

# 🔄 Connected Modules / Calls From:
# Called by: file_store.py, object_store.py (image externalization)

import base64
import binascii
import io
from typing import Tuple

from PIL import Image, ImageOps

from plantlens.shared.core.exceptions import InvalidFileTypeError
from plantlens.shared.utils.logging import get_logger

logger = get_logger(__name__)

DATA_URI_PREFIX = "data:"


def is_data_uri(value: str) -> bool:
    """Check whether an image reference is an inline data URI."""
    return isinstance(value, str) and value.startswith(DATA_URI_PREFIX)


def decode_data_uri(data_uri: str, max_size: int = None) -> Tuple[str, bytes]:
    """
    Decode a base64 data URI.

    Args:
        data_uri: Value of the form ``data:<mime>;base64,<payload>``
        max_size: Optional upper bound on the decoded byte length

    Returns:
        Tuple of (mime_type, decoded_bytes)

    Raises:
        InvalidFileTypeError: If the value is not a decodable base64 data URI
    """
    if not is_data_uri(data_uri):
        raise InvalidFileTypeError("Image payload is not a data URI")

    header, separator, payload = data_uri.partition(",")
    if not separator or not payload:
        raise InvalidFileTypeError("Data URI has no payload")
    if not header.endswith(";base64"):
        raise InvalidFileTypeError("Only base64 data URIs are supported")

    mime_type = header[len(DATA_URI_PREFIX):-len(";base64")] or "application/octet-stream"

    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidFileTypeError(f"Invalid base64 image payload: {e}")

    if not image_bytes:
        raise InvalidFileTypeError("Decoded image is empty")
    if max_size and len(image_bytes) > max_size:
        raise InvalidFileTypeError(
            f"Image size {len(image_bytes)} exceeds maximum {max_size} bytes"
        )

    return mime_type, image_bytes


def optimize_image(
    image_data: bytes,
    max_dimension: int = 2048,
    quality: int = 85
) -> bytes:
    """
    Optimize image for storage with compression and resizing.

    The image is EXIF-transposed, converted to RGB, shrunk so that its longest
    edge is at most ``max_dimension`` and re-encoded as progressive JPEG.

    Returns the original bytes if Pillow cannot process them.
    """
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            img = ImageOps.exif_transpose(img)

            if img.mode != 'RGB':
                img = img.convert('RGB')

            original_size = img.size
            if img.size[0] > max_dimension or img.size[1] > max_dimension:
                img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

            output = io.BytesIO()
            img.save(
                output,
                format='JPEG',
                quality=quality,
                optimize=True,
                progressive=True
            )
            optimized_data = output.getvalue()

        logger.debug(
            "Image optimized",
            extra={
                'original_size': original_size,
                'optimized_size': img.size,
                'original_bytes': len(image_data),
                'optimized_bytes': len(optimized_data),
            }
        )
        return optimized_data

    except Exception as e:
        logger.warning(f"Image optimization failed, keeping original bytes: {e}")
        return image_data


def prepare_image_for_storage(
    data_uri: str,
    max_size: int = None,
    max_dimension: int = 2048,
    quality: int = 85
) -> bytes:
    """Decode an inline data URI and return JPEG bytes ready to be written."""
    _, image_bytes = decode_data_uri(data_uri, max_size=max_size)
    return optimize_image(image_bytes, max_dimension=max_dimension, quality=quality)
