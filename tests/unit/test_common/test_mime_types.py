import pytest

from shade.common.errors import ConfigurationError
from shade.common.mime_types import DEFAULT_MIME_TYPES, extract_mime_type, load_mime_types


def test_extract_ignores_parameters():
    assert extract_mime_type("image/png; charset=binary") == "image/png"


def test_extract_lowercases():
    assert extract_mime_type("Image/JPEG") == "image/jpeg"


def test_extract_missing():
    assert extract_mime_type(None) is None
    assert extract_mime_type("") is None
    assert extract_mime_type("; charset=utf-8") is None


def test_default_list_is_images_only():
    assert "image/png" in DEFAULT_MIME_TYPES
    assert "text/html" not in DEFAULT_MIME_TYPES
    assert all(t.startswith("image/") for t in DEFAULT_MIME_TYPES)


def test_load_default_when_unset():
    assert load_mime_types(None) is DEFAULT_MIME_TYPES


def test_load_from_file(tmp_path):
    path = tmp_path / "mime_types"
    path.write_text("# images\nimage/PNG\n\n  image/gif  \nvideo/mp4\n", encoding="utf-8")

    assert load_mime_types(str(path)) == frozenset({"image/png", "image/gif", "video/mp4"})


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        load_mime_types(str(tmp_path / "missing"))
    assert exc_info.value.setting == "MIME_TYPES_FILE"


def test_load_empty_file(tmp_path):
    path = tmp_path / "mime_types"
    path.write_text("# nothing\n\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_mime_types(str(path))
