"""Click CLI for docx-publisher.

Commands:
    convert   — .docx → HTML (or a post draft JSON)
    inspect   — Dump paragraph descriptors as JSON (for debugging)
    rebuild   — Rebuild lists in a marker-annotated HTML file
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from docx_publisher.config import Config
from docx_publisher.exceptions import DocxPublisherError
from docx_publisher.pipeline import Pipeline
from docx_publisher.rebuilder import rebuild_list_html


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML configuration file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Word document to HTML converter for scheduled post publishing."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.load(config_path)
    except DocxPublisherError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    if verbose:
        config.verbose = True

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["pipeline"] = Pipeline(config)


@main.command()
@click.argument("input_docx", type=click.Path(exists=True, path_type=Path))
@click.argument("output_html", type=click.Path(path_type=Path), required=False)
@click.option("--post", is_flag=True, help="Write post fields as JSON instead of bare HTML.")
@click.option("--report", is_flag=True, help="Save conversion report JSON alongside output.")
@click.option(
    "--report-path",
    type=click.Path(path_type=Path),
    default=None,
    help="Custom path for the report JSON file.",
)
@click.pass_context
def convert(
    ctx: click.Context,
    input_docx: Path,
    output_html: Path | None,
    post: bool,
    report: bool,
    report_path: Path | None,
) -> None:
    """Convert a Word document to HTML."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    if output_html is None:
        output_html = input_docx.with_suffix(".json" if post else ".html")

    result = pipeline.convert_file(input_docx)
    try:
        result.unwrap()
    except DocxPublisherError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)

    if post:
        output_html.write_text(pipeline.to_post(result).to_json(), encoding="utf-8")
    else:
        output_html.write_text(result.html, encoding="utf-8")
    click.echo(f"Generated: {output_html}")

    if report:
        if report_path is None:
            report_path = output_html.with_suffix(".report.json")
        report_path.write_text(result.report.to_json(), encoding="utf-8")
        rpt = result.report
        click.echo(
            f"Report: {rpt.paragraph_count} paragraphs, "
            f"{rpt.list_item_count} list items, {rpt.lists_opened} lists, "
            f"{len(rpt.warnings)} warnings"
        )


@main.command()
@click.argument("input_docx", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, input_docx: Path) -> None:
    """Dump a Word document's paragraph descriptors as JSON (for debugging)."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    try:
        click.echo(pipeline.inspect(input_docx.read_bytes()))
    except DocxPublisherError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("input_html", type=click.Path(exists=True, path_type=Path))
@click.argument("output_html", type=click.Path(path_type=Path), required=False)
@click.pass_context
def rebuild(ctx: click.Context, input_html: Path, output_html: Path | None) -> None:
    """Rebuild nested lists in a marker-annotated HTML file."""
    config: Config = ctx.obj["config"]

    html = rebuild_list_html(
        input_html.read_text(encoding="utf-8"), config=config.converter
    )
    if output_html is None:
        click.echo(html)
    else:
        output_html.write_text(html, encoding="utf-8")
        click.echo(f"Generated: {output_html}")
