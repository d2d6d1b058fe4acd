"""Watermark generated images with the Hayat Ai brand."""

import io

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from hayat_ai.models import ImagePayload
from hayat_ai.utils.exceptions import ImageProcessingError

WATERMARK_TEXT = "Hayat Ai"
WATERMARK_FILL = (255, 255, 255, 128)
MIN_FONT_SIZE = 12

# Tried in order; Pillow's bundled font is the last resort
BOLD_FONTS = ["arialbd.ttf", "Arial Bold.ttf", "DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf"]


def watermark_font_size(width: int) -> int:
    """Font size proportional to the image width, never below 12px."""
    return max(MIN_FONT_SIZE, width // 90)


def _load_font(size: int) -> ImageFont.ImageFont:
    for name in BOLD_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def add_watermark(image_bytes: bytes) -> ImagePayload:
    """
    Draw the watermark in the lower-left corner and re-encode as JPEG.

    The text baseline sits one font size above the bottom edge and starts one
    font size from the left edge.

    Args:
        image_bytes: Encoded source image

    Returns:
        JPEG ImagePayload

    Raises:
        ImageProcessingError: Image could not be decoded or drawn on
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as source:
            source.load()
            base = source.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageProcessingError(f"Could not decode image: {str(e)}") from e

    width, height = base.size
    font_size = watermark_font_size(width)
    margin = font_size

    try:
        overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        draw.text(
            (margin, height - margin),
            WATERMARK_TEXT,
            font=_load_font(font_size),
            fill=WATERMARK_FILL,
            anchor="ls"
        )
        composed = Image.alpha_composite(base, overlay).convert("RGB")

        output = io.BytesIO()
        composed.save(output, format="JPEG", quality=92)
    except (OSError, ValueError) as e:
        raise ImageProcessingError(f"Could not draw watermark: {str(e)}") from e

    return ImagePayload(data=output.getvalue(), mime_type="image/jpeg")
