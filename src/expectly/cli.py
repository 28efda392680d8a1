from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="expectly", help="Inspect expectly reports")


@app.command()
def summary(
    junit: str = typer.Argument(help="Path to a junit.xml written by expectly"),
):
    """Print expectation and check counts; exit 1 if anything failed."""
    from expectly.reporting.junit import read_counts

    junit_path = Path(junit)
    if not junit_path.exists():
        typer.echo(f"Error: junit file not found: {junit}", err=True)
        raise typer.Exit(1)

    rows = read_counts(junit_path)
    for row in rows:
        status = "FAIL" if row["failures"] else "PASS"
        typer.echo(
            f"{status}  {row['name']}: {row['tests'] - row['failures']}/{row['tests']} expectations passed, "
            f"{row['pass_count']}/{row['assertion_count']} checks passed"
        )

    if any(row["failures"] > 0 for row in rows):
        raise typer.Exit(1)


@app.command()
def report(
    junit: str = typer.Argument(help="Path to a junit.xml written by expectly"),
    out: str | None = typer.Option(
        None, help="Output path for the HTML report (defaults to report.html next to junit.xml)"
    ),
    open_report: bool = typer.Option(
        False, "--open", help="Open report.html in browser after generating"
    ),
):
    """Render an HTML report from a junit.xml."""
    from expectly.reporting.junit import generate_report

    junit_path = Path(junit)
    if not junit_path.exists():
        typer.echo(f"Error: junit file not found: {junit}", err=True)
        raise typer.Exit(1)

    report_path = generate_report(junit_path, Path(out) if out is not None else None)
    typer.echo(f"Report generated: {report_path}")

    if open_report:
        import webbrowser

        webbrowser.open(report_path.resolve().as_uri())


@app.command()
def check(
    config: str = typer.Argument(help="Path to expectly YAML config"),
):
    """Validate a config file and print the resolved settings."""
    from pydantic import ValidationError

    from expectly.config import load_config

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        loaded = load_config(config_path)
    except ValidationError as e:
        typer.echo(f"Error: invalid config: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"junit: {loaded.report.junit or '-'}")
    typer.echo(f"html: {loaded.report.html or '-'}")
    typer.echo(f"suite_name: {loaded.report.suite_name}")
    typer.echo(f"debug_file: {loaded.logging.debug_file or '-'}")
    typer.echo(f"max_repr_length: {loaded.max_repr_length}")


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write expectly.yaml into"),
):
    """Write an example expectly.yaml."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "expectly.yaml"
    if example.exists():
        typer.echo(f"expectly.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
report:
  junit: reports/junit.xml
  suite_name: expectly
logging:
  debug_file: reports/debug.log
  verbose: false
max_repr_length: 80
""")
    typer.echo(f"Initialized expectly config in {dir}:")
    typer.echo("  expectly.yaml    - report and logging settings")
