# overlay_file.py - Loads an overlay image into memory
from .errors import OverlayIOError


def load_overlay(filepath: str) -> bytes:
    """Reads the whole overlay file and returns its contents."""
    try:
        with open(filepath, 'rb') as f:
            return f.read()
    except FileNotFoundError:
        raise OverlayIOError(filepath, "file not found") from None
    except OSError as e:
        raise OverlayIOError(filepath, e.strerror or str(e)) from e
