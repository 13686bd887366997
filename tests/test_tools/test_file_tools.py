from pathlib import Path

import pytest

from folio.tools import (
    CopyFileTool,
    CreateDirectoryTool,
    DeleteFileTool,
    ListFilesTool,
    MoveFileTool,
    ReadFileTool,
    SearchFilesTool,
    WriteFileTool,
)


@pytest.mark.asyncio
async def test_read_file_returns_text(tmp_path: Path):
    (tmp_path / "notes.txt").write_text("line1\nline2\n", encoding="utf-8")

    result = await ReadFileTool().execute(filePath="notes.txt", _runtime_base_path=tmp_path)

    assert result.success is True
    assert result.content == "line1\nline2\n"


@pytest.mark.asyncio
async def test_read_missing_file_fails(tmp_path: Path):
    result = await ReadFileTool().execute(filePath="nope.txt", _runtime_base_path=tmp_path)

    assert result.success is False
    assert result.error == "File not found: nope.txt"


@pytest.mark.asyncio
async def test_read_directory_fails(tmp_path: Path):
    (tmp_path / "sub").mkdir()

    result = await ReadFileTool().execute(filePath="sub", _runtime_base_path=tmp_path)

    assert result.success is False
    assert result.error == "Not a file: sub"


@pytest.mark.asyncio
async def test_write_file_creates_and_overwrites(tmp_path: Path):
    tool = WriteFileTool()

    await tool.execute(filePath="out.txt", content="first", _runtime_base_path=tmp_path)
    result = await tool.execute(filePath="out.txt", content="second", _runtime_base_path=tmp_path)

    assert result.success is True
    assert result.content == "File successfully written to out.txt"
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "second"


@pytest.mark.asyncio
async def test_write_file_into_missing_directory_fails(tmp_path: Path):
    result = await WriteFileTool().execute(filePath="missing/out.txt", content="x", _runtime_base_path=tmp_path)

    assert result.success is False
    assert not (tmp_path / "missing").exists()


@pytest.mark.asyncio
async def test_absolute_paths_ignore_runtime_base(tmp_path: Path):
    target = tmp_path / "abs.txt"
    other_base = tmp_path / "elsewhere"
    other_base.mkdir()

    result = await WriteFileTool().execute(filePath=str(target), content="abs", _runtime_base_path=other_base)

    assert result.success is True
    assert target.read_text(encoding="utf-8") == "abs"


@pytest.mark.asyncio
async def test_move_file(tmp_path: Path):
    (tmp_path / "a.txt").write_text("data", encoding="utf-8")

    result = await MoveFileTool().execute(sourcePath="a.txt", destinationPath="b.txt", _runtime_base_path=tmp_path)

    assert result.success is True
    assert result.content == "File successfully moved from a.txt to b.txt"
    assert not (tmp_path / "a.txt").exists()
    assert (tmp_path / "b.txt").read_text(encoding="utf-8") == "data"


@pytest.mark.asyncio
async def test_move_missing_file_fails(tmp_path: Path):
    result = await MoveFileTool().execute(sourcePath="a.txt", destinationPath="b.txt", _runtime_base_path=tmp_path)

    assert result.success is False
    assert result.error == "File not found: a.txt"


@pytest.mark.asyncio
async def test_copy_file_keeps_source(tmp_path: Path):
    (tmp_path / "a.txt").write_text("data", encoding="utf-8")

    result = await CopyFileTool().execute(sourcePath="a.txt", destinationPath="c.txt", _runtime_base_path=tmp_path)

    assert result.success is True
    assert (tmp_path / "a.txt").exists()
    assert (tmp_path / "c.txt").read_text(encoding="utf-8") == "data"


@pytest.mark.asyncio
async def test_delete_file(tmp_path: Path):
    (tmp_path / "gone.txt").write_text("bye", encoding="utf-8")

    result = await DeleteFileTool().execute(filePath="gone.txt", _runtime_base_path=tmp_path)

    assert result.success is True
    assert result.content == "File gone.txt successfully deleted"
    assert not (tmp_path / "gone.txt").exists()


@pytest.mark.asyncio
async def test_delete_missing_file_fails(tmp_path: Path):
    result = await DeleteFileTool().execute(filePath="gone.txt", _runtime_base_path=tmp_path)

    assert result.success is False
    assert "gone.txt" in result.error


@pytest.mark.asyncio
async def test_create_directory_with_parents(tmp_path: Path):
    result = await CreateDirectoryTool().execute(dirPath="a/b/c", _runtime_base_path=tmp_path)

    assert result.success is True
    assert (tmp_path / "a" / "b" / "c").is_dir()


@pytest.mark.asyncio
async def test_list_files_describes_entries(tmp_path: Path):
    (tmp_path / "docs").mkdir()
    (tmp_path / "readme.md").write_text("12345", encoding="utf-8")

    result = await ListFilesTool().execute(dirPath=".", _runtime_base_path=tmp_path)

    assert result.success is True
    assert len(result.content) == 2
    assert result.content[0].startswith("[DIR] docs (")
    assert result.content[1].startswith("[FILE] readme.md (5 bytes, modified: ")


@pytest.mark.asyncio
async def test_list_missing_directory_fails(tmp_path: Path):
    result = await ListFilesTool().execute(dirPath="nowhere", _runtime_base_path=tmp_path)

    assert result.success is False


@pytest.mark.asyncio
async def test_search_files_flat_and_recursive(tmp_path: Path):
    (tmp_path / "report.txt").write_text("", encoding="utf-8")
    (tmp_path / "image.png").write_text("", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "old_report.txt").write_text("", encoding="utf-8")
    tool = SearchFilesTool()

    flat = await tool.execute(directory=".", pattern="report", _runtime_base_path=tmp_path)
    deep = await tool.execute(directory=".", pattern="report", recursive=True, _runtime_base_path=tmp_path)

    assert flat.content == ["report.txt"]
    assert deep.content == [str(Path("nested") / "old_report.txt"), "report.txt"]
