"""Case suites: load expected parses from YAML and check them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from pipeforge.environment import Environment
from pipeforge.errors import CliError
from pipeforge.processor import process
from pipeforge.producer import CommandDescriptor

logger = logging.getLogger(__name__)

CASES_PATH = Path(__file__).parent.parent.parent / "assets" / "cases.yaml"

ERROR_KINDS = ("quote", "empty_command", "expansion")


@dataclass
class CaseResult:
    id: str
    name: str
    line: str
    passed: bool
    expected: str
    actual: str
    reason: str = ""


def load_cases(path: Path | None = None) -> list[dict]:
    """Load cases from a YAML file with a top-level ``cases`` list."""
    cases_file = path or CASES_PATH
    if not cases_file.exists():
        logger.warning("Cases file not found: %s", cases_file)
        return []

    try:
        with open(cases_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse cases YAML: %s", exc)
        return []

    return (data.get("cases") or []) if isinstance(data, dict) else []


def _expected_command(spec: dict) -> dict:
    stdout = spec.get("stdout")
    stderr = spec.get("stderr")
    return {
        "name": spec["name"],
        "args": [str(a) for a in spec.get("args", [])],
        "stdin": spec.get("stdin"),
        "stdout": None if stdout is None else {"path": stdout, "append": bool(spec.get("stdout_append", False))},
        "stderr": None if stderr is None else {"path": stderr, "append": bool(spec.get("stderr_append", False))},
    }


def _describe(commands: list[dict]) -> str:
    return " | ".join(" ".join([c["name"], *c["args"]]) for c in commands) or "<nothing>"


def run_case(case: dict) -> CaseResult:
    """Process one case's line and compare against its expectation."""
    for key in ("id", "line", "expect"):
        if key not in case:
            raise ValueError(f"Case missing required field: {key}")

    expect = case["expect"]
    env = Environment({str(k): str(v) for k, v in (case.get("env") or {}).items()})

    if "error" in expect:
        if expect["error"] not in ERROR_KINDS:
            raise ValueError(f"Unknown error kind: {expect['error']}")
        expected = f"error:{expect['error']}"
        wanted: list[dict] | None = None
    else:
        wanted = [_expected_command(c) for c in expect.get("commands", [])]
        expected = _describe(wanted)

    try:
        commands: list[CommandDescriptor] = process(case["line"], env)
    except CliError as exc:
        actual = f"error:{exc.kind}"
        passed = actual == expected
        got: list[dict] | None = None
    else:
        got = [c.to_dict() for c in commands]
        actual = _describe(got)
        passed = wanted is not None and got == wanted

    reason = ""
    if not passed:
        reason = f"Expected {expected}, got {actual}"
        if wanted is not None and got is not None:
            reason = f"Expected {wanted}, got {got}"

    return CaseResult(
        id=str(case["id"]),
        name=str(case.get("name", case["id"])),
        line=case["line"],
        passed=passed,
        expected=expected,
        actual=actual,
        reason=reason,
    )


def run_cases(path: Path | None = None, case_filter: str | None = None) -> list[CaseResult]:
    """Run every case in the suite and return results in file order."""
    cases = load_cases(path)
    if case_filter:
        cases = [c for c in cases if isinstance(c, dict) and c.get("id") == case_filter]

    results: list[CaseResult] = []
    for case in cases:
        if not isinstance(case, dict):
            logger.warning("Skipping case entry that is not a mapping: %r", case)
            continue
        try:
            results.append(run_case(case))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Case %s is malformed: %s", case.get("id", "unknown"), exc)
            results.append(CaseResult(
                id=str(case.get("id", "unknown")),
                name=str(case.get("name", "unknown")),
                line=str(case.get("line", "")),
                passed=False,
                expected="?",
                actual="invalid",
                reason=f"Case error: {exc}",
            ))
    return results
