"""Case suite loading and execution tests."""
from pathlib import Path

import pytest

from pipeforge.cases import CASES_PATH, load_cases, run_case, run_cases


class TestLoadCases:
    def test_builtin_suite_exists(self) -> None:
        assert CASES_PATH.exists()
        assert len(load_cases()) > 0

    def test_case_structure(self) -> None:
        for case in load_cases():
            assert "id" in case
            assert "name" in case
            assert "line" in case
            assert "expect" in case

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_cases(tmp_path / "none.yaml") == []

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("cases: [unclosed", encoding="utf-8")
        assert load_cases(path) == []

    def test_null_cases_list(self, tmp_path: Path) -> None:
        path = tmp_path / "null.yaml"
        path.write_text("cases:\n", encoding="utf-8")
        assert load_cases(path) == []


class TestRunCases:
    def test_builtin_suite_passes(self) -> None:
        results = run_cases()
        assert len(results) > 0
        for r in results:
            assert r.passed, f"Case {r.id} ({r.name}) failed: {r.reason}"

    def test_case_filter(self) -> None:
        results = run_cases(case_filter="pipe-001")
        assert len(results) == 1
        assert results[0].id == "pipe-001"

    def test_malformed_case_reported(self, tmp_path: Path) -> None:
        path = tmp_path / "cases.yaml"
        path.write_text("cases:\n  - id: broken\n    name: no line\n", encoding="utf-8")
        results = run_cases(path)
        assert len(results) == 1
        assert not results[0].passed
        assert "line" in results[0].reason


class TestRunCase:
    def test_expected_commands(self) -> None:
        case = {
            "id": "t-1",
            "name": "redirect",
            "line": "sort < $IN >> out.txt",
            "env": {"IN": "data.txt"},
            "expect": {"commands": [
                {"name": "sort", "stdin": "data.txt", "stdout": "out.txt", "stdout_append": True},
            ]},
        }
        result = run_case(case)
        assert result.passed
        assert result.actual == "sort"

    def test_expected_error(self) -> None:
        case = {"id": "t-2", "line": "echo 'x", "expect": {"error": "quote"}}
        result = run_case(case)
        assert result.passed
        assert result.actual == "error:quote"

    def test_wrong_expectation_fails(self) -> None:
        case = {"id": "t-3", "line": "echo a", "expect": {"commands": [{"name": "echo", "args": ["b"]}]}}
        result = run_case(case)
        assert not result.passed
        assert "Expected" in result.reason

    def test_error_when_commands_expected(self) -> None:
        case = {"id": "t-4", "line": "| ls", "expect": {"commands": [{"name": "ls"}]}}
        result = run_case(case)
        assert not result.passed
        assert result.actual == "error:empty_command"

    def test_unknown_error_kind(self) -> None:
        with pytest.raises(ValueError):
            run_case({"id": "t-5", "line": "ls", "expect": {"error": "boom"}})

    def test_numeric_args_compared_as_strings(self) -> None:
        case = {"id": "t-6", "line": "head -n 5", "expect": {"commands": [{"name": "head", "args": ["-n", 5]}]}}
        assert run_case(case).passed
