"""End-to-end editing sessions driven by key events."""

from conftest import ctrl, special, type_text
from linepad.buffer import Buffer


def test_append_to_first_line_save_and_reload(make_editor, tmp_path):
    path = tmp_path / "hello.txt"
    path.write_text("hello\nworld\n", encoding="utf-8")

    editor = make_editor()
    editor.load_file(str(path))
    editor.handle_key_event(ctrl('i'))
    for _ in range(5):
        editor.handle_key_event(special('right'))
    type_text(editor, "!")
    assert editor.buffer.text_lines() == ["hello!", "world"]

    editor.handle_key_event(ctrl('s'))
    assert editor.status_message == f"Saved to {path}"
    assert Buffer.from_file(str(path)).text_lines() == ["hello!", "world"]


def test_typing_into_empty_file(make_editor, tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")

    editor = make_editor()
    editor.load_file(str(path))
    assert editor.buffer.is_empty()

    editor.handle_key_event(ctrl('i'))
    type_text(editor, "x")
    assert editor.buffer.text_lines() == ["x"]
    assert (editor.cursor.x, editor.cursor.y) == (1, 0)
    assert editor.column_memory == [0]


def test_new_file_is_created_on_save(make_editor, tmp_path):
    path = tmp_path / "new.txt"

    editor = make_editor()
    editor.load_file(str(path))
    assert editor.buffer.is_empty()
    assert editor.filename == str(path)

    editor.handle_key_event(ctrl('i'))
    type_text(editor, "first")
    editor.handle_key_event(special('enter'))
    type_text(editor, "second")
    editor.handle_key_event(ctrl('s'))

    assert path.read_text(encoding="utf-8") == "first\nsecond\n"
    assert editor.modified is False


def test_backspace_at_origin_leaves_content(make_editor):
    editor = make_editor(["hello", "world"], insert=True)
    editor.handle_key_event(special('backspace'))
    assert editor.buffer.text_lines() == ["hello", "world"]


def test_save_uses_default_filename_when_none_given(make_editor, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    editor = make_editor(["data"])
    editor.handle_key_event(ctrl('s'))
    assert (tmp_path / "text_file.txt").read_text(encoding="utf-8") == "data\n"
    assert editor.filename == "text_file.txt"
