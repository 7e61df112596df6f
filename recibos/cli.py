"""CLI entry point for recibos."""

import typer

from recibos.commands.admin import export_command, import_command, init_command
from recibos.commands.receipts import delete_command, docx_command, list_command, new_command, show_command
from recibos.commands.tools import check_command, words_command
from recibos.logs import configure_logging

app = typer.Typer(
    name="recibos",
    help="Recibos de garantia - emissão e arquivo de recibos de garantia de aparelhos",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Recibos de garantia - emissão e arquivo de recibos de garantia de aparelhos."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing configuration"),
) -> None:
    """Initialize the receipt database and configuration."""
    init_command(force)


@app.command()
def new(
    docx: bool = typer.Option(True, "--docx/--no-docx", help="Generate the DOCX document"),
    html: bool = typer.Option(False, "--html", help="Also generate the printable HTML page"),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the receipt after confirmation"),
    output_dir: str = typer.Option(None, "--output-dir", "-o", help="Directory for generated files (default: cwd)"),
) -> None:
    """Issue a new warranty receipt step by step."""
    new_command(docx, html, save, output_dir)


@app.command(name="list")
def list_receipts(
    limit: int = typer.Option(50, help="Maximum receipts to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show every stored receipt"),
) -> None:
    """List stored receipts, newest first."""
    list_command(limit, all)


@app.command()
def show(
    receipt_id: str = typer.Argument(..., help="Receipt ID or unique ID prefix"),
    output: str = typer.Option(None, "--output", "-o", help="HTML output path"),
    open_file: bool = typer.Option(False, "--open", help="Open the page in the default browser"),
) -> None:
    """Write the printable page of a stored receipt."""
    show_command(receipt_id, output, open_file)


@app.command()
def docx(
    receipt_id: str = typer.Argument(..., help="Receipt ID or unique ID prefix"),
    output: str = typer.Option(None, "--output", "-o", help="DOCX output path"),
) -> None:
    """Generate the DOCX document of a stored receipt."""
    docx_command(receipt_id, output)


@app.command()
def delete(
    receipt_id: str = typer.Argument(..., help="Receipt ID or unique ID prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a stored receipt."""
    delete_command(receipt_id, yes)


@app.command(name="export")
def export(
    output: str = typer.Option(None, "--output", "-o", help="Backup file (default: ./backup-recibos.json)"),
) -> None:
    """Export every stored receipt to a JSON backup."""
    export_command(output)


@app.command(name="import")
def import_(
    backup_file: str = typer.Argument(..., help="JSON backup file"),
) -> None:
    """Import receipts from a JSON backup."""
    import_command(backup_file)


@app.command()
def check(
    kind: str = typer.Argument(..., help="'cpf' or 'cnpj'"),
    value: str = typer.Argument(..., help="Identifier in any formatting"),
) -> None:
    """Validate and format a CPF or CNPJ."""
    check_command(kind, value)


@app.command()
def words(
    value: str = typer.Argument(..., help="Amount, e.g. 1.500,50"),
) -> None:
    """Write an amount out in words."""
    words_command(value)


if __name__ == "__main__":
    app()
