"""CLI command: gpad check -- parse a Gpad script against an in-memory host."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from gpad.config import GpadConfig
from gpad.converter import StyleConverter
from gpad.errors import ParseError
from gpad.host import StubConstruction
from gpad.parser import GpadParser


@click.command()
@click.argument("script", type=click.Path(exists=True))
@click.option("--lenient", is_flag=True, help="Skip unknown properties instead of failing.")
def check(script: str, lenient: bool) -> None:
    """Parse a Gpad script and list the objects, macros and sheets it defines.

    Exits with code 0 when the script parses, or code 1 on the first error.
    """
    path = Path(script)
    construction = StubConstruction()
    parser = GpadParser(construction, config=GpadConfig(strict_properties=not lenient))

    try:
        objects = parser.parse(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    converter = StyleConverter()
    for obj in objects:
        flag = "" if obj.show_object and obj.show_label else ("*" if not obj.show_object else "~")
        line = f"{obj.head}{flag} = {obj.rhs}"
        style = converter.convert(obj.style)
        if style is not None:
            line += f"  {style}"
        click.echo(line)

    for macro in construction.macros.values():
        click.echo(f"@@macro {macro.name}({', '.join(macro.inputs)}) -> {', '.join(macro.outputs)}")

    for name, sheet in parser.global_style_sheets.items():
        click.echo(converter.convert_named(name, sheet) or f"@{name} = {{ }}")

    click.echo()
    click.echo(
        f"OK: {path.name} ({len(objects)} object(s), {len(construction.macros)} macro(s), "
        f"{len(parser.global_style_sheets)} sheet(s))"
    )
