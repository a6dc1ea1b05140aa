import io
import os

import pytest

from dynmenu.errors import UsageError
from dynmenu.stest import Criteria, Tester, main, parse_args


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "file.txt").write_text("data")
    (tmp_path / "empty").write_text("")
    (tmp_path / ".hidden").write_text("x")
    (tmp_path / "sub").mkdir()
    tool = tmp_path / "tool"
    tool.write_text("#!/bin/sh\n")
    tool.chmod(0o755)
    (tmp_path / "plain").write_text("y")
    (tmp_path / "plain").chmod(0o644)
    os.symlink(tmp_path / "file.txt", tmp_path / "link")
    return tmp_path


def run(criteria, operands, stream=None):
    out = io.StringIO()
    status = Tester(criteria, out).run(operands, stream)
    return status, out.getvalue().splitlines()


def test_directories_only(tree):
    paths = [str(tree / n) for n in ("file.txt", "sub")]
    status, lines = run(Criteria(directory=True), paths)
    assert status == 0
    assert lines == [str(tree / "sub")]


def test_no_match_gives_status_one(tree):
    status, lines = run(Criteria(directory=True), [str(tree / "file.txt")])
    assert status == 1
    assert lines == []


def test_missing_file_fails_unless_inverted(tree):
    missing = str(tree / "missing")
    assert run(Criteria(), [missing]) == (1, [])
    assert run(Criteria(invert=True), [missing]) == (0, [missing])


def test_list_directory_hides_dot_files(tree):
    status, lines = run(Criteria(list_directories=True, regular=True), [str(tree)])
    assert status == 0
    assert sorted(lines) == ["empty", "file.txt", "link", "plain", "tool"]


def test_list_directory_with_hidden(tree):
    _, lines = run(Criteria(list_directories=True, hidden=True, directory=True), [str(tree)])
    assert sorted(lines) == [".", "..", "sub"]


def test_nonempty_and_symlink(tree):
    _, lines = run(Criteria(list_directories=True, nonempty=True, regular=True), [str(tree)])
    assert "empty" not in lines and "file.txt" in lines
    _, links = run(Criteria(list_directories=True, symlink=True), [str(tree)])
    assert links == ["link"]


def test_executable(tree):
    _, lines = run(Criteria(executable=True, regular=True),
                   [str(tree / "tool"), str(tree / "plain")])
    assert lines == [str(tree / "tool")]


def test_reads_paths_from_stream(tree):
    stream = io.StringIO(f"{tree / 'sub'}\n{tree / 'file.txt'}\n")
    _, lines = run(Criteria(regular=True), [], stream)
    assert lines == [str(tree / "file.txt")]


def test_quiet_prints_nothing(tree):
    status, lines = run(Criteria(quiet=True), [str(tree / "file.txt")])
    assert status == 0
    assert lines == []


def test_newer_and_older(tree):
    old = tree / "file.txt"
    new = tree / "plain"
    os.utime(old, (1000, 1000))
    os.utime(new, (5000, 5000))
    criteria, operands = parse_args(["stest", "-n", str(old), str(new), str(old)])
    assert criteria.newer_than == 1000
    _, lines = run(criteria, operands)
    assert lines == [str(new)]
    criteria, operands = parse_args(["stest", "-o", str(new), str(new), str(old)])
    _, lines = run(criteria, operands)
    assert lines == [str(old)]


def test_parse_args_flags():
    criteria, operands = parse_args(["stest", "-dlv", "a", "b"])
    assert criteria.directory and criteria.list_directories and criteria.invert
    assert not criteria.regular
    assert operands == ["a", "b"]


def test_parse_args_missing_reference_disables_test(tmp_path, capsys):
    missing = str(tmp_path / "nope")
    criteria, _ = parse_args(["stest", "-n", missing])
    assert criteria.newer_than is None
    assert missing in capsys.readouterr().err


def test_parse_args_unknown_flag():
    with pytest.raises(UsageError):
        parse_args(["stest", "-z"])


def test_main_usage_errors(capsys):
    assert main(["stest", "-z"]) == 2
    assert "usage: stest" in capsys.readouterr().err
    assert main(["stest", "-n"]) == 2


def test_main_prints_matches(tree, capsys):
    assert main(["stest", "-f", str(tree / "file.txt"), str(tree / "sub")]) == 0
    assert capsys.readouterr().out.splitlines() == [str(tree / "file.txt")]