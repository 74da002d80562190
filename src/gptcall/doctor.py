"""Pre-flight diagnostics for the completions client.

Answers "would `CompletionClient.from_env()` work here?" without sending a
request. Secret values are summarised by length only.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import importlib.util
import os
from pathlib import Path
import sys
from typing import Any

from gptcall.config import API_KEY_ENV, API_ORG_ENV
from gptcall.llm.providers.openai_chat import is_valid_header_value
from gptcall.utils.env import load_project_dotenv


OK, WARN, FAIL = "ok", "warn", "fail"

MIN_PYTHON = (3, 10)

# import name -> distribution name
RUNTIME_MODULES = {
    "requests": "requests",
    "dotenv": "python-dotenv",
    "backoff": "backoff",
    "rich": "rich",
}


@dataclass(frozen=True)
class CheckResult:
    name: str
    status: str
    detail: str
    hint: str = ""


@dataclass(frozen=True)
class DoctorReport:
    checks: tuple[CheckResult, ...]

    @property
    def ok(self) -> bool:
        return not self.failures()

    def failures(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == FAIL]

    def as_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "checks": [asdict(c) for c in self.checks]}


def _check_python() -> CheckResult:
    found = sys.version_info[:2]
    label = ".".join(map(str, found))
    if found < MIN_PYTHON:
        wanted = ".".join(map(str, MIN_PYTHON))
        return CheckResult("Python", FAIL, f"{label} found.", f"gptcall needs Python >= {wanted}.")
    return CheckResult("Python", OK, label)


def _check_modules() -> list[CheckResult]:
    results = []
    for module, dist in RUNTIME_MODULES.items():
        if importlib.util.find_spec(module) is None:
            results.append(
                CheckResult(f"Package {dist}", FAIL, "Not importable.", f"pip install {dist}")
            )
        else:
            results.append(CheckResult(f"Package {dist}", OK, "Importable."))
    return results


def _check_dotenv(project_root: Path) -> CheckResult:
    if load_project_dotenv(project_root):
        return CheckResult(".env file", OK, f"Loaded {project_root / '.env'}.")
    return CheckResult(
        ".env file",
        WARN,
        f"No .env in {project_root}.",
        "Secrets must then come from the process environment.",
    )


def _check_secret(variable: str) -> CheckResult:
    name = f"Secret: {variable}"
    value = os.environ.get(variable, "")
    if not value:
        return CheckResult(name, FAIL, f"{variable} is not set.", f"Export {variable} or add it to .env.")
    if not is_valid_header_value(value):
        return CheckResult(
            name,
            FAIL,
            f"{variable} cannot be sent as an HTTP header value.",
            "Look for leading whitespace, newlines, control or non-ASCII characters.",
        )
    return CheckResult(name, OK, f"Set ({len(value)} characters).")


def run_doctor(project_root: str | Path = ".") -> DoctorReport:
    # .env must be loaded before the secrets are inspected
    checks = [_check_python(), *_check_modules(), _check_dotenv(Path(project_root).resolve())]
    checks += [_check_secret(API_KEY_ENV), _check_secret(API_ORG_ENV)]
    return DoctorReport(checks=tuple(checks))
