"""Command-line interface for the WeighIn service."""

from __future__ import annotations

import json
from contextlib import closing
from pathlib import Path

import typer

from .engine import extract_weight
from .images import encode_image
from .logging import get_logger
from .runtime import build_runtime
from .service import ImageTooLargeError

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="Scale photo weigh-in verification")


@app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Recognised text from a scale display"),
    explain: bool = typer.Option(False, "--explain", help="Show tokens and candidates"),
) -> None:
    extraction = extract_weight(text)
    if explain:
        typer.echo(json.dumps({
            "tokens": [
                {
                    "digits": token.digits,
                    "position": token.position,
                    "unit": token.unit_hint.value if token.unit_hint else None,
                    "label": token.preceding_label.value if token.preceding_label else None,
                    "kept": token in extraction.kept,
                }
                for token in extraction.tokens
            ],
            "candidates": [
                {
                    "value_kg": str(candidate.value_kg),
                    "origin": candidate.origin.value,
                    "position": candidate.source.position,
                }
                for candidate in extraction.candidates
            ],
            "weight_kg": extraction.weight_kg,
        }, ensure_ascii=False))
    elif extraction.found:
        typer.echo(f"{extraction.weight_kg:.1f}")

    if not extraction.found:
        if not explain:
            typer.echo("No weight found", err=True)
        raise typer.Exit(code=1)


@app.command("scan")
def scan_command(
    image: Path = typer.Argument(..., help="Path to a scale photo"),
) -> None:
    if not image.is_file():
        raise typer.BadParameter(f"{image} is not a file")

    runtime = build_runtime()
    with closing(runtime):
        try:
            reading = runtime.service.process_image(encode_image(image))
        except ImageTooLargeError as exc:
            raise typer.BadParameter(str(exc)) from exc
    typer.echo(json.dumps(reading.as_dict(), ensure_ascii=False))
    if not reading.success:
        raise typer.Exit(code=1)


@app.command("service")
def service_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Service bind host"),
    port: int = typer.Option(8000, "--port", help="Service port"),
) -> None:
    import uvicorn

    uvicorn.run(
        "weighin.app:create_app",
        host=host,
        port=port,
        factory=True,
        log_level="info",
    )


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
