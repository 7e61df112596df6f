"""Admin commands for init and JSON backup export/import."""

import sqlite3
import sys
from pathlib import Path

import requests
from rich.console import Console

from recibos.backup import DEFAULT_BACKUP_FILENAME, BackupError, import_receipts, read_backup_file, write_backup
from recibos.commands.context import load_context
from recibos.config import create_default_config, get_config_path
from recibos.store.schema import database_exists, get_db_path, init_database

console = Console()


def init_command(force: bool = False) -> None:
    """Initialize recibos database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Falha na inicialização:[/red]", style="bold")
            if db_exists:
                console.print(f"  Banco de dados já existe: {db_path}")
            if config_exists:
                console.print(f"  Configuração já existe: {config_path}")
            console.print("\n[yellow]Use 'recibos init --force' para sobrescrever a configuração[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Inicializando banco de dados em {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Banco de dados inicializado")

        console.print(f"[cyan]Criando arquivo de configuração em {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Arquivo de configuração criado (permissões: 600)")

        console.print("\n[green]Inicialização concluída![/green]", style="bold")
        console.print(f"[dim]Banco de dados: {db_path}[/dim]")
        console.print(f"[dim]Configuração: {config_path}[/dim]")

    except sqlite3.Error as e:
        console.print(f"[red]Erro no banco de dados: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Erro no sistema de arquivos: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(output: str | None = None) -> None:
    """Export every stored receipt to a JSON backup file."""
    output_path = Path(output).expanduser() if output else Path.cwd() / DEFAULT_BACKUP_FILENAME

    try:
        ctx = load_context()
        written = write_backup(ctx.store, output_path)
    except sqlite3.Error as e:
        console.print(f"[red]Erro no banco de dados: {e}[/red]", style="bold")
        sys.exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Falha ao exportar os recibos: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Erro no sistema de arquivos: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Backup salvo em: {written}")


def import_command(backup_file: str) -> None:
    """Import receipts from a JSON backup file."""
    path = Path(backup_file).expanduser()

    try:
        backup_data = read_backup_file(path)
        ctx = load_context()
        imported = import_receipts(ctx.store, backup_data)
    except BackupError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Erro ao ler o arquivo de backup: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Erro no banco de dados: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {imported} recibo(s) importado(s)")