import pytest

from mcc.errors import FilesystemError
from mcc.filesystem import LocalFilesystem


def test_round_trip_operations(tmp_path):
    fs = LocalFilesystem()
    nested = tmp_path / "data" / "world" / "datapacks"

    assert not fs.directory_exists(nested)
    fs.create_directory(nested)
    assert fs.directory_exists(nested)

    src = tmp_path / "pack.zip"
    src.write_bytes(b"PK\x03\x04")
    fs.copy_file(src, nested / "a.zip")
    (nested / "unpacked").mkdir()

    assert fs.list_directory(nested) == [nested / "a.zip"]
    assert fs.canonicalize(nested / "a.zip") == (nested / "a.zip").resolve()

    fs.delete_file(nested / "a.zip")
    assert not fs.file_exists(nested / "a.zip")


def test_text_files(tmp_path):
    fs = LocalFilesystem()
    path = tmp_path / "server.properties"
    fs.write_text(path, "motd=hi")
    assert fs.file_exists(path)
    assert fs.read_text(path) == "motd=hi"


@pytest.mark.parametrize("op", ["canonicalize", "read_text", "delete_file", "list_directory"])
def test_missing_paths_raise(tmp_path, op):
    with pytest.raises(FilesystemError):
        getattr(LocalFilesystem(), op)(tmp_path / "missing")
