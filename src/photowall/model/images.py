"""
Image Pool
==========
The ordered, immutable set of images the wall distributes over its tiles.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Sequence

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff"}

# Shipped gallery, in display priority order
DEFAULT_IMAGE_NAMES: tuple[str, ...] = (
    "1.jpeg", "2.jpg", "3.jpeg", "4.jpeg", "5.jpg", "6.jpg",
    "7.jpg", "8.jpg", "9.jpg", "10.jpg", "11.jpg", "12.jpg",
)


@dataclass(frozen=True)
class ImageRef:
    """Reference to a single image file."""
    path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class ImagePool(Sequence[ImageRef]):
    """Ordered image references; index i is the value stored in the assignment grid."""

    def __init__(self, images: Iterable[ImageRef] = ()) -> None:
        self._images: tuple[ImageRef, ...] = tuple(images)

    def __len__(self) -> int:
        return len(self._images)

    def __getitem__(self, index):
        return self._images[index]

    def __iter__(self) -> Iterator[ImageRef]:
        return iter(self._images)

    def __repr__(self) -> str:
        return f"ImagePool({len(self)} images)"

    @classmethod
    def from_names(cls, directory: str, names: Iterable[str]) -> ImagePool:
        return cls(ImageRef(os.path.join(directory, name)) for name in names)

    @classmethod
    def from_directory(cls, directory: str) -> ImagePool:
        """
        Collect all supported images in a directory.

        Files are ordered by name with numeric stems first in numeric order
        (1, 2, ..., 10), so that '10.jpg' follows '9.jpg'. A missing directory
        yields an empty pool.
        """
        folder = Path(directory)
        if not folder.is_dir():
            logger.warning(f"Image directory not found: {directory}")
            return cls()

        files = [p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in ALLOWED_IMAGE_SUFFIXES]
        files.sort(key=lambda p: (0, int(p.stem), p.name) if p.stem.isdigit() else (1, 0, p.name.lower()))
        logger.info(f"Found {len(files)} images in {directory}")
        return cls(ImageRef(str(p)) for p in files)
