import pytest

from dataroom.services.files import BytesFile, FileHandle, LocalFile


@pytest.mark.asyncio
async def test_local_file_reads_requested_range(tmp_path):
    path = tmp_path / "ledger.csv"
    path.write_bytes(b"0123456789abcdef")

    file = LocalFile(path)

    assert file.name == "ledger.csv"
    assert file.total_size() == 16
    assert await file.read_range(4, 6) == b"456789"
    assert await file.read_range(16, 0) == b""


@pytest.mark.asyncio
async def test_local_file_short_read_raises(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"abc")

    with pytest.raises(OSError):
        await LocalFile(path).read_range(2, 5)


def test_local_file_name_override(tmp_path):
    path = tmp_path / "tmp-upload-123"
    path.write_bytes(b"")

    assert LocalFile(path, name="Board minutes.pdf").name == "Board minutes.pdf"


@pytest.mark.asyncio
async def test_bytes_file_range_checks():
    file = BytesFile("memo.txt", b"hello world")

    assert await file.read_range(6, 5) == b"world"
    with pytest.raises(ValueError):
        await file.read_range(8, 10)


def test_handles_satisfy_protocol(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"a")

    assert isinstance(LocalFile(path), FileHandle)
    assert isinstance(BytesFile("a.txt", b"a"), FileHandle)
