"""Utility functions for the catpoint security system."""

import io
import os
from datetime import datetime
from typing import Union

import numpy as np
from PIL import Image


def ensure_directory_exists(path: str) -> None:
    """Ensure a directory exists, create if it doesn't."""
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def load_image(source: Union[str, bytes]) -> np.ndarray:
    """Decode an image file path or encoded bytes into an RGB array.

    Raises:
        ValueError: If the data is not a readable image
    """
    try:
        if isinstance(source, bytes):
            image = Image.open(io.BytesIO(source))
        else:
            image = Image.open(source)
        image.load()
    except (OSError, Image.DecompressionBombError) as e:
        raise ValueError(f"Unreadable image: {e}") from e

    return np.asarray(image.convert('RGB'))


def format_timestamp(dt: datetime) -> str:
    """Format datetime for consistent display."""
    return dt.strftime("%Y-%m-%d %H:%M:%S")
