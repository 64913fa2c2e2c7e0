"""Tests for loading and saving the line buffer."""

import io
import os
import stat

import pytest

from linepad.buffer import Buffer


def test_load_splits_on_newline():
    buffer = Buffer.load(io.StringIO("first\nsecond\nthird\n"))
    assert buffer.text_lines() == ["first", "second", "third"]


def test_load_without_final_newline():
    buffer = Buffer.load(io.StringIO("first\nsecond"))
    assert buffer.text_lines() == ["first", "second"]


def test_load_empty_source_gives_empty_buffer():
    buffer = Buffer.load(io.StringIO(""))
    assert len(buffer) == 0
    assert buffer.is_empty()


def test_load_keeps_blank_lines():
    buffer = Buffer.load(io.StringIO("a\n\nb\n"))
    assert buffer.text_lines() == ["a", "", "b"]


def test_load_strips_carriage_return():
    buffer = Buffer.load(io.StringIO("dos\r\nline\r\n"))
    assert buffer.text_lines() == ["dos", "line"]


def test_lines_are_lists_of_code_points():
    buffer = Buffer.load(io.StringIO("Café 世界\n"))
    assert buffer.lines[0] == ['C', 'a', 'f', 'é', ' ', '世', '界']
    assert buffer.line_length(0) == 7


def test_save_terminates_every_line():
    out = io.StringIO()
    Buffer(["one", "", "three"]).save(out)
    assert out.getvalue() == "one\n\nthree\n"


def test_save_empty_buffer_writes_nothing():
    out = io.StringIO()
    Buffer().save(out)
    assert out.getvalue() == ""


def test_save_flushes_stream():
    class Sink(io.StringIO):
        flushed = False

        def flush(self):
            self.flushed = True
            super().flush()

    sink = Sink()
    Buffer(["x"]).save(sink)
    assert sink.flushed


def test_round_trip_through_file(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("alpha\nbeta\n\ngamma\n", encoding="utf-8")

    buffer = Buffer.from_file(str(path))
    buffer.save_to_file(str(path))

    assert Buffer.from_file(str(path)).text_lines() == ["alpha", "beta", "", "gamma"]


def test_round_trip_trailing_blank_line_at_eof(tmp_path):
    """A blank last line survives, and a missing final newline is added."""
    path = tmp_path / "doc.txt"
    path.write_text("alpha\n\n", encoding="utf-8")

    buffer = Buffer.from_file(str(path))
    assert buffer.text_lines() == ["alpha", ""]

    buffer.save_to_file(str(path))
    assert path.read_text(encoding="utf-8") == "alpha\n\n"
    assert Buffer.from_file(str(path)).text_lines() == ["alpha", ""]

    path.write_text("alpha", encoding="utf-8")
    Buffer.from_file(str(path)).save_to_file(str(path))
    assert path.read_text(encoding="utf-8") == "alpha\n"


def test_save_to_file_is_utf8(tmp_path):
    path = tmp_path / "utf8.txt"
    Buffer(["Hello 世界", "Σωκράτης"]).save_to_file(str(path))
    assert path.read_bytes() == "Hello 世界\nΣωκράτης\n".encode("utf-8")


def test_save_to_file_leaves_no_temp_files(tmp_path):
    path = tmp_path / "doc.txt"
    Buffer(["content"]).save_to_file(str(path))
    assert os.listdir(tmp_path) == ["doc.txt"]


def test_from_file_missing_raises():
    with pytest.raises(FileNotFoundError):
        Buffer.from_file("/nonexistent/dir/file.txt")


def test_save_to_missing_directory_raises_and_keeps_buffer(tmp_path):
    buffer = Buffer(["keep me"])
    with pytest.raises(OSError):
        buffer.save_to_file(str(tmp_path / "missing" / "doc.txt"))
    assert buffer.text_lines() == ["keep me"]


@pytest.mark.parametrize("mode", [0o644, 0o755, 0o600])
def test_save_keeps_existing_permissions(tmp_path, mode):
    path = tmp_path / "script.sh"
    path.write_text("old\n", encoding="utf-8")
    os.chmod(path, mode)

    Buffer(["new"]).save_to_file(str(path))

    assert stat.S_IMODE(os.stat(path).st_mode) == mode
    assert path.read_text(encoding="utf-8") == "new\n"


def test_new_file_gets_umask_permissions(tmp_path):
    path = tmp_path / "fresh.txt"
    umask = os.umask(0o022)
    try:
        Buffer(["new"]).save_to_file(str(path))
    finally:
        os.umask(umask)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
