import pytest

from orrery.texture import TextureError, Texture, load_image_rgba


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(TextureError):
        load_image_rgba(tmp_path / "nope.png")


def test_texture_missing_file_raises(tmp_path):
    with pytest.raises(TextureError):
        Texture(tmp_path / "absent.jpg")


def test_directory_is_not_an_image(tmp_path):
    with pytest.raises(TextureError):
        load_image_rgba(tmp_path, flip=False)