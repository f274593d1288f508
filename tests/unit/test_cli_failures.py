from __future__ import annotations

from pathlib import Path

import pytest
import typer

from cli import submissions


def test_corrupt_data_file_exits_with_message(tmp_path: Path, capsys):
    data_file = tmp_path / "submissions.json"
    data_file.write_text("[{broken")

    with pytest.raises(typer.Exit) as excinfo:
        submissions(data_file=data_file, limit=None, as_json=False)

    assert excinfo.value.exit_code == 1
    captured = capsys.readouterr()
    assert "Corrupt submissions file" in captured.out
