"""
MIME Type Allow-list

Built-in list of image content types the proxy relays, plus helpers to load
a replacement list from a file and to extract the type from a Content-Type.
"""

from pathlib import Path
from typing import Optional

from shade.common.errors import ConfigurationError

DEFAULT_MIME_TYPES: frozenset[str] = frozenset(
    {
        "image/apng",
        "image/avif",
        "image/bmp",
        "image/cgm",
        "image/g3fax",
        "image/gif",
        "image/ief",
        "image/jp2",
        "image/jpeg",
        "image/jpg",
        "image/pict",
        "image/png",
        "image/prs.btif",
        "image/svg+xml",
        "image/tiff",
        "image/vnd.adobe.photoshop",
        "image/vnd.djvu",
        "image/vnd.dwg",
        "image/vnd.dxf",
        "image/vnd.fastbidsheet",
        "image/vnd.fpx",
        "image/vnd.fst",
        "image/vnd.fujixerox.edmics-mmr",
        "image/vnd.fujixerox.edmics-rlc",
        "image/vnd.microsoft.icon",
        "image/vnd.ms-modi",
        "image/vnd.net-fpx",
        "image/vnd.wap.wbmp",
        "image/vnd.xiff",
        "image/webp",
        "image/x-cmu-raster",
        "image/x-cmx",
        "image/x-icon",
        "image/x-macpaint",
        "image/x-pcx",
        "image/x-pict",
        "image/x-portable-anymap",
        "image/x-portable-bitmap",
        "image/x-portable-graymap",
        "image/x-portable-pixmap",
        "image/x-quicktime",
        "image/x-rgb",
        "image/x-xbitmap",
        "image/x-xpixmap",
        "image/x-xwindowdump",
    }
)


def load_mime_types(path: Optional[str]) -> frozenset[str]:
    """
    Load the MIME allow-list

    One type per line; blank lines and lines starting with "#" are ignored.

    Args:
        path: File path, or None for the built-in list

    Returns:
        frozenset: Lowercase MIME types

    Raises:
        ConfigurationError: If the file cannot be read or lists no types
    """
    if not path:
        return DEFAULT_MIME_TYPES

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read MIME types file {path}: {e}", setting="MIME_TYPES_FILE"
        ) from e

    types = frozenset(
        line.strip().lower()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    )
    if not types:
        raise ConfigurationError(
            f"MIME types file {path} is empty", setting="MIME_TYPES_FILE"
        )
    return types


def extract_mime_type(content_type: Optional[str]) -> Optional[str]:
    """
    Extract the bare MIME type from a Content-Type value

    Examples:
        >>> extract_mime_type("image/PNG; charset=binary")
        'image/png'
        >>> extract_mime_type(None) is None
        True
    """
    if content_type is None:
        return None
    mime_type = content_type.split(";", 1)[0].strip().lower()
    return mime_type or None
