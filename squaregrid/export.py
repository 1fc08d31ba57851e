import logging
from pathlib import Path
from PIL import Image
from PyQt6.QtGui import QImage

logger = logging.getLogger(__name__)


def qimage_to_pil(image: QImage) -> Image.Image:
    img_rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)
    ptr = img_rgba.constBits()
    ptr.setsize(img_rgba.sizeInBytes())
    return Image.frombuffer(
        "RGBA", (img_rgba.width(), img_rgba.height()), bytes(ptr),
        "raw", "RGBA", img_rgba.bytesPerLine(), 1,
    ).convert("RGB")


def save_bitmap(view, path, fmt: str | None = None) -> Path | None:
    """Encode the grid's current surface to ``path`` (PNG unless the suffix
    or ``fmt`` says otherwise). Encoder and I/O errors propagate."""
    if path is None:
        return None
    path = Path(path)
    if fmt is None and not path.suffix:
        fmt = "PNG"
    image = qimage_to_pil(view.snapshot())
    image.save(path, format=fmt)
    logger.info("Saved %dx%d bitmap to %s", image.width, image.height, path)
    return path
