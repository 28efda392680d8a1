from __future__ import annotations

import logging
import threading
from pathlib import Path

from junitparser import Failure, JUnitXml, TestCase, TestSuite

from expectly.reporter import FailureSummary

logger = logging.getLogger(__name__)


def write_junit(
    junit_path: Path, summaries: list[FailureSummary], suite_name: str = "expectly"
) -> Path:
    """Write junit.xml with one test case per root expectation, return path."""
    xml = JUnitXml()
    suite = TestSuite(suite_name)

    suite.add_property("assertion_count", str(sum(s.assertion_count for s in summaries)))
    suite.add_property("pass_count", str(sum(s.pass_count for s in summaries)))
    suite.add_property("failure_count", str(sum(s.failure_count for s in summaries)))

    for summary in summaries:
        case = TestCase(summary.description)
        case.classname = suite_name
        if not summary.passed:
            failure = Failure(
                f"{summary.failure_count} of {summary.assertion_count} checks failed"
            )
            failure.text = summary.message
            case.result = [failure]
        suite.add_testcase(case)

    # Use append (not +=) to preserve properties
    xml.append(suite)

    junit_path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(junit_path), pretty=True)
    logger.debug(f"Wrote {len(summaries)} expectation(s) to {junit_path}")
    return junit_path


class JUnitSink:
    """Buffers root summaries and writes them as junit.xml on close.

    Summaries sharing a key replace each other in place, so a chained root
    expectation becomes one test case.
    """

    def __init__(
        self,
        junit_path: str | Path,
        suite_name: str = "expectly",
        html_path: str | Path | None = None,
    ):
        self.junit_path = Path(junit_path)
        self.suite_name = suite_name
        self.html_path = Path(html_path) if html_path is not None else None
        self._summaries: dict[object, FailureSummary] = {}
        self._lock = threading.Lock()

    @property
    def summaries(self) -> list[FailureSummary]:
        with self._lock:
            return list(self._summaries.values())

    def accept(self, summary: FailureSummary) -> None:
        key = summary.key if summary.key is not None else object()
        with self._lock:
            self._summaries[key] = summary

    def close(self) -> None:
        summaries = self.summaries
        write_junit(self.junit_path, summaries, suite_name=self.suite_name)
        if self.html_path is not None:
            generate_report(self.junit_path, self.html_path)


def read_counts(junit_path: Path) -> list[dict]:
    """Per-suite test and failure counts plus recorded check counts from junit.xml."""
    xml = JUnitXml.fromfile(str(junit_path))
    rows = []
    for suite in xml:
        props = {p.name: p.value for p in suite.properties()}
        rows.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "assertion_count": int(props.get("assertion_count", 0)),
                "pass_count": int(props.get("pass_count", 0)),
                "failure_count": int(props.get("failure_count", 0)),
            }
        )
    return rows


def generate_report(junit_path: Path, report_path: Path | None = None) -> Path:
    """Render junit.xml → report.html using Jinja2 template, return path."""
    from jinja2 import Environment, FileSystemLoader

    report_path = report_path or junit_path.with_name("report.html")
    xml = JUnitXml.fromfile(str(junit_path))

    suites = []
    for suite in xml:
        cases = []
        for case in suite:
            result = None
            if case.result:
                result = {
                    "status": type(case.result[0]).__name__,
                    "message": case.result[0].message or "",
                    "text": case.result[0].text or "",
                }
            cases.append({"name": case.name, "result": result})

        suites.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "properties": {p.name: p.value for p in suite.properties()},
                "cases": cases,
            }
        )

    tmpl_dir = Path(__file__).parent / "templates"
    env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
    template = env.get_template("report.html.j2")

    html = template.render(
        suites=suites,
        total_tests=sum(s["tests"] for s in suites),
        total_failures=sum(s["failures"] for s in suites),
        junit_path=str(junit_path),
    )
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(html, encoding="utf-8")
    return report_path
