"""Standalone helpers: identifier check and amount in words."""

import sys

from rich.console import Console

from recibos.domain.formatting import format_brl, parse_amount
from recibos.domain.taxpayer import TaxpayerKind, format_taxpayer_id, validate
from recibos.domain.words import number_to_words

console = Console()


def check_command(kind: str, value: str) -> None:
    """Validate a CPF or CNPJ and print it formatted."""
    try:
        taxpayer_kind = TaxpayerKind(kind.lower())
    except ValueError:
        console.print(f"[red]Tipo desconhecido: {kind}. Use 'cpf' ou 'cnpj'[/red]", style="bold")
        sys.exit(1)

    label = taxpayer_kind.name
    formatted = format_taxpayer_id(taxpayer_kind, value)

    if not validate(taxpayer_kind, value):
        console.print(f"[red]✗ {label} inválido: {formatted or value}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] {label} válido: [bold]{formatted}[/bold]")


def words_command(value: str) -> None:
    """Print an amount written out in words."""
    try:
        amount = parse_amount(value)
        words = number_to_words(amount)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[cyan]{format_brl(amount)}[/cyan]")
    console.print(words)
