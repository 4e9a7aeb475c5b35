"""CLI command: gpad convert -- turn element XML into Gpad sheets."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from gpad.converter import StyleConverter
from gpad.errors import ParseError
from gpad.generator import GpadGenerator
from gpad.xml import parse_elements_xml


@click.command()
@click.argument("xmlfile", type=click.Path(exists=True))
@click.option("--name", default=None, help="Sheet name for a single element.")
@click.option("--script", is_flag=True, help="Write full statements instead of sheets.")
def convert(xmlfile: str, name: str | None, script: bool) -> None:
    """Convert the style of each <element> in XMLFILE to Gpad.

    By default prints one named sheet per element (``@<label>Style``).
    With --script, prints statements ``label @sheet = label`` that restyle
    the existing objects.
    """
    try:
        elements = parse_elements_xml(Path(xmlfile).read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if script:
        generator = GpadGenerator()
        for element in elements:
            generator.add_object(element.label, element.label, element.style, element.type)
        click.echo(generator.generate(), nl=False)
        return

    converter = StyleConverter()
    for element in elements:
        sheet_name = name if name and len(elements) == 1 else f"{element.label or 'element'}Style"
        text = converter.convert_named(sheet_name, element.style)
        if text is not None:
            click.echo(text)
