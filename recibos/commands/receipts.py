"""Receipt commands: the issuing wizard, listing, rendering and deletion."""

import sqlite3
import sys
from pathlib import Path
from typing import Any

import requests
import typer
from rich.console import Console
from rich.table import Table

from recibos.commands.context import AppContext, find_receipt, load_context
from recibos.dates import format_created_at, normalize_issue_date, today_br
from recibos.domain.form import (
    LAST_STEP,
    STEP_FIELDS,
    STEP_TITLES,
    FieldErrors,
    FormState,
    build_receipt,
    next_step,
    previous_step,
)
from recibos.domain.formatting import format_brl, receipt_filename
from recibos.domain.receipt import ReceiptSchemaError, StoredReceipt, WarrantyReceipt
from recibos.drafts import clear_draft, load_draft, save_draft
from recibos.render.docx_document import write_receipt_docx
from recibos.render.print_view import write_receipt_html
from recibos.store import ReceiptNotFoundError

console = Console()

FIELD_LABELS = {
    "customer_name": "Nome completo",
    "cpf": "CPF",
    "phone": "Telefone / Celular",
    "city": "Cidade",
    "state": "Estado (UF)",
    "product_type": "Tipo de produto",
    "brand": "Marca",
    "model": "Modelo",
    "rom_memory": "Memória ROM (ex: 128GB)",
    "ram_memory": "Memória RAM (ex: 8GB)",
    "imei1": "IMEI 1",
    "imei2": "IMEI 2 (opcional)",
    "sale_value": "Valor da venda (R$)",
    "warranty_months": "Duração da garantia (meses)",
    "observations": "Observações (opcional)",
    "issue_city": "Local de emissão",
    "issue_date": "Data de emissão (dd/mm/aaaa)",
    "signature_name": "Nome para assinatura",
}

OPTIONAL_PROMPTS = {"imei2", "observations"}


def initial_state(ctx: AppContext) -> FormState:
    """Blank form prefilled with configured defaults."""
    return FormState(
        warranty_months=ctx.warranty.default_months,
        issue_city=ctx.issue.city,
        issue_date=today_br(),
        signature_name=ctx.issue.signature_name,
    )


def prompt_field(name: str, current: Any) -> Any:
    """Prompt for one form field, offering the current value as default."""
    label = FIELD_LABELS[name]

    if name == "warranty_months":
        months: int = typer.prompt(label, type=int, default=current)
        return months

    if name in OPTIONAL_PROMPTS:
        optional: str = typer.prompt(label, type=str, default=current or "", show_default=bool(current))
        return optional

    if current:
        value: str = typer.prompt(label, type=str, default=current)
    else:
        value = typer.prompt(label, type=str)

    if name == "issue_date":
        try:
            return normalize_issue_date(value)
        except ValueError:
            console.print("[yellow]Data não reconhecida, mantendo o texto digitado[/yellow]")
    return value


def prompt_step(step: int, state: FormState, only: set[str] | None = None) -> FormState:
    """Prompt for the fields of one step.

    Args:
        step: Step number.
        state: Current form state.
        only: Re-prompt just these fields (after validation errors).

    Returns:
        Updated form state.
    """
    values = state.to_dict()
    for name in STEP_FIELDS[step]:
        if only is not None and name not in only:
            continue
        values[name] = prompt_field(name, values[name])
    return FormState.from_dict(values)


def display_step_header(step: int) -> None:
    console.print("─" * 80, style="dim")
    console.print(f"[bold cyan]Passo {step} de {LAST_STEP}: {STEP_TITLES[step]}[/bold cyan]")


def display_errors(errors: FieldErrors) -> None:
    for name, message in errors.items():
        console.print(f"  [red]✗ {FIELD_LABELS.get(name, name)}: {message}[/red]")


def display_preview(receipt: WarrantyReceipt) -> None:
    """Show the receipt as a two-column table before confirmation."""
    table = Table(title="Pré-visualização do recibo", show_header=False)
    table.add_column("Campo", style="cyan")
    table.add_column("Valor", style="white")

    table.add_row("Cliente", receipt.customer_name)
    table.add_row("CPF", receipt.cpf)
    table.add_row("Telefone", receipt.phone)
    table.add_row("Cidade / Estado", f"{receipt.city} - {receipt.state}")
    table.add_row("Aparelho", f"{receipt.product_type} {receipt.brand} {receipt.model}")
    table.add_row("Memória", f"{receipt.rom_memory} ROM / {receipt.ram_memory} RAM")
    table.add_row("IMEI 1", receipt.imei1)
    if receipt.imei2:
        table.add_row("IMEI 2", receipt.imei2)
    table.add_row("Valor", format_brl(receipt.sale_value))
    table.add_row("Por extenso", receipt.sale_value_in_words)
    table.add_row("Garantia", receipt.warranty_duration)
    if receipt.observations:
        table.add_row("Observações", receipt.observations)
    table.add_row("Emissão", f"{receipt.issue_city}, {receipt.issue_date}")
    table.add_row("Assinatura", receipt.signature_name)

    console.print(table)


def run_wizard(ctx: AppContext) -> FormState | None:
    """Walk through the four steps.

    Returns:
        Completed form state, or None if the operator quit (the draft is kept).
    """
    state = initial_state(ctx)

    draft = load_draft()
    if draft is not None and typer.confirm("Existe um rascunho salvo. Continuar de onde parou?", default=True):
        state = draft

    step = 1
    display_step_header(step)
    state = prompt_step(step, state)

    while True:
        new_step, state, errors = next_step(step, state)
        if errors:
            display_errors(errors)
            state = prompt_step(step, state, only=set(errors))
            continue

        save_draft(state)

        choice: str = typer.prompt(
            "Enter = continuar | v = voltar | q = sair (rascunho salvo)", type=str, default="", show_default=False
        )
        if choice.lower() == "q":
            console.print("[yellow]Rascunho salvo. Use 'recibos new' para continuar.[/yellow]")
            return None
        if choice.lower() == "v":
            step = previous_step(step)
        elif step == LAST_STEP:
            return state
        else:
            step = new_step

        display_step_header(step)
        state = prompt_step(step, state)


def _write_outputs(ctx: AppContext, receipt: WarrantyReceipt, docx: bool, html: bool, output_dir: Path) -> None:
    if docx:
        path = output_dir / receipt_filename(receipt.customer_name, "docx")
        write_receipt_docx(receipt, path, ctx.company.instagram, ctx.warranty.days_per_month)
        console.print(f"[green]✓[/green] DOCX gerado: {path}")
    if html:
        path = output_dir / receipt_filename(receipt.customer_name, "html")
        write_receipt_html(receipt, path, ctx.company.instagram, ctx.warranty.days_per_month)
        console.print(f"[green]✓[/green] Página para impressão gerada: {path}")


def new_command(docx: bool = True, html: bool = False, save: bool = True, output_dir: str | None = None) -> None:
    """Issue a new warranty receipt interactively."""
    ctx = load_context()

    state = run_wizard(ctx)
    if state is None:
        return

    try:
        receipt = build_receipt(state, ctx.company, ctx.warranty.days_per_month)
    except ReceiptSchemaError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    display_preview(receipt)

    if not typer.confirm("Confirmar emissão do recibo?", default=True):
        console.print("[yellow]Emissão cancelada. O rascunho foi mantido.[/yellow]")
        return

    if save:
        try:
            receipt_id = ctx.store.create(receipt)
        except (sqlite3.Error, requests.RequestException) as e:
            console.print(f"[red]Erro ao salvar o recibo: {e}[/red]", style="bold")
            console.print("[dim]O rascunho foi mantido.[/dim]")
            sys.exit(1)
        console.print(f"[green]✓[/green] Recibo salvo (ID: {receipt_id})")

    try:
        _write_outputs(ctx, receipt, docx, html, Path(output_dir).expanduser() if output_dir else Path.cwd())
    except OSError as e:
        console.print(f"[red]Erro ao gerar documento: {e}[/red]", style="bold")
        sys.exit(1)

    clear_draft()


def list_command(limit: int = 50, all: bool = False) -> None:
    """List stored receipts, newest first."""
    try:
        ctx = load_context()
        receipts = ctx.store.list_all()
    except sqlite3.Error as e:
        console.print(f"[red]Erro no banco de dados: {e}[/red]", style="bold")
        sys.exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Erro ao carregar recibos salvos: {e}[/red]", style="bold")
        sys.exit(1)

    if not receipts:
        console.print("[yellow]Nenhum recibo encontrado[/yellow]")
        return

    shown = receipts if all else receipts[:limit]
    title = f"Recibos (mostrando {len(shown)} de {len(receipts)})"
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Registrado em", style="cyan")
    table.add_column("Cliente", style="white")
    table.add_column("Aparelho", style="magenta")
    table.add_column("Valor", justify="right", style="green")
    table.add_column("Garantia")

    for stored in shown:
        receipt = stored.receipt
        table.add_row(
            stored.id[:8],
            format_created_at(stored.created_at),
            receipt.customer_name,
            f"{receipt.brand} {receipt.model}",
            format_brl(receipt.sale_value),
            receipt.warranty_duration,
        )

    console.print(table)


def _load_stored(receipt_id: str) -> tuple[AppContext, StoredReceipt]:
    try:
        ctx = load_context()
        return ctx, find_receipt(ctx.store, receipt_id)
    except ReceiptNotFoundError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except ReceiptSchemaError as e:
        console.print(f"[red]Recibo salvo com dados inválidos: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Erro no banco de dados: {e}[/red]", style="bold")
        sys.exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Erro ao carregar o recibo: {e}[/red]", style="bold")
        sys.exit(1)


def show_command(receipt_id: str, output: str | None = None, open_file: bool = False) -> None:
    """Write the print view of a stored receipt as HTML."""
    ctx, stored = _load_stored(receipt_id)
    receipt = stored.receipt
    path = Path(output).expanduser() if output else Path.cwd() / receipt_filename(receipt.customer_name, "html")

    try:
        write_receipt_html(receipt, path, ctx.company.instagram, ctx.warranty.days_per_month, stored.created_at)
    except OSError as e:
        console.print(f"[red]Erro ao gerar a página: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Página para impressão gerada: {path}")
    if open_file:
        typer.launch(str(path))


def docx_command(receipt_id: str, output: str | None = None) -> None:
    """Generate the DOCX document of a stored receipt."""
    ctx, stored = _load_stored(receipt_id)
    receipt = stored.receipt
    path = Path(output).expanduser() if output else Path.cwd() / receipt_filename(receipt.customer_name, "docx")

    try:
        write_receipt_docx(receipt, path, ctx.company.instagram, ctx.warranty.days_per_month)
    except OSError as e:
        console.print(f"[red]Erro ao gerar documento: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] DOCX gerado: {path}")


def delete_command(receipt_id: str, yes: bool = False) -> None:
    """Delete a stored receipt."""
    ctx, stored = _load_stored(receipt_id)
    receipt = stored.receipt

    if not yes:
        console.print(f"[bold]{receipt.customer_name}[/bold] - {receipt.brand} {receipt.model} - {format_brl(receipt.sale_value)}")
        if not typer.confirm("Excluir este recibo?", default=False):
            console.print("[dim]Nada foi excluído[/dim]")
            return

    try:
        ctx.store.delete(stored.id)
    except ReceiptNotFoundError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except (sqlite3.Error, requests.RequestException) as e:
        console.print(f"[red]Erro ao excluir o recibo: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Recibo {stored.id} excluído")
