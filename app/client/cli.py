"""
Command-line interface for the PDF extraction service.

Uploads local PDFs to a running API and prints the extracted headings and
summary, or starts the API server itself.
"""

import json
from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from app.common.validation import UploadValidationError

from .cleanup import clean_result
from .client import DEFAULT_BASE_URL, ExtractionRequestError, PdfExtractionClient

app = typer.Typer(
    name="pdf-extract",
    help="Extract headings and a summary from PDF documents",
    add_completion=False,
)
console = Console()


@app.command()
def process(
    file_path: Path = typer.Argument(..., help="Path to the PDF to analyze"),
    url: str = typer.Option(
        DEFAULT_BASE_URL,
        "--url",
        "-u",
        help="Base URL of the extraction API",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Show the text exactly as returned, without markdown cleanup",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the response as JSON",
    ),
):
    """Extract headings and a summary from a PDF."""
    if not file_path.is_file():
        console.print(f"[red]Error:[/red] File not found: {file_path}")
        raise typer.Exit(1)

    try:
        with PdfExtractionClient(base_url=url) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
                disable=as_json,
            ) as progress:
                progress.add_task(f"Processing {file_path.name}...", total=None)
                result = client.process_file(file_path)
    except (UploadValidationError, ExtractionRequestError) as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error:[/red] Could not reach {url}: {e}")
        raise typer.Exit(1)

    if not raw:
        result = clean_result(result)

    if as_json:
        console.print_json(json.dumps(result.model_dump()))
        return

    console.print(f"[green]✓[/green] Processed: [bold]{escape(result.filename)}[/bold]")

    if result.headings:
        table = Table(title=f"Headings ({len(result.headings)})")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Heading", style="cyan")
        for index, heading in enumerate(result.headings, start=1):
            table.add_row(str(index), escape(heading))
        console.print(table)
    else:
        console.print("No headings found")

    console.print("\n[bold]Summary:[/bold]")
    console.print(result.summary, markup=False)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the extraction API server."""
    import uvicorn

    uvicorn.run("app.backend.main:app", host=host, port=port, reload=reload)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
