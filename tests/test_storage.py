import io
import os

import pytest

from alligator_service.errors import StorageError
from alligator_service.infrastructure.storage import MediaStorage


@pytest.fixture
def storage(tmp_path):
    return MediaStorage(str(tmp_path / "public" / "images"))


def test_media_directory_is_created(tmp_path):
    media_dir = tmp_path / "a" / "b"
    MediaStorage(str(media_dir))
    assert media_dir.is_dir()


def test_generate_filename():
    assert MediaStorage.generate_filename("cat.png", timestamp_ms=1700000000000) == "1700000000000-cat.png"


def test_generate_filename_drops_directories():
    assert MediaStorage.generate_filename("../../etc/passwd", timestamp_ms=1) == "1-passwd"
    assert MediaStorage.generate_filename("C:\\photos\\dog.jpg", timestamp_ms=1) == "1-dog.jpg"


def test_generate_filename_without_name():
    assert MediaStorage.generate_filename(None, timestamp_ms=1) == "1-upload"
    assert MediaStorage.generate_filename("", timestamp_ms=1) == "1-upload"


def test_save_writes_file_and_returns_url(storage):
    url = storage.save(io.BytesIO(b"data"), "cat.png")

    assert url.startswith("/images/")
    assert url.endswith("-cat.png")
    stored_path = os.path.join(storage.media_dir, url.rsplit("/", 1)[-1])
    with open(stored_path, "rb") as f:
        assert f.read() == b"data"


def test_url_prefix_trailing_slash(tmp_path):
    storage = MediaStorage(str(tmp_path), url_prefix="/media/")
    assert storage.url_for("x.png") == "/media/x.png"


def test_save_failure_raises_storage_error(storage):
    os.rmdir(storage.media_dir)

    with pytest.raises(StorageError):
        storage.save(io.BytesIO(b"data"), "cat.png")
