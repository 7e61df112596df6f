"""Shared setup for commands: configuration, company profile and store."""

import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from recibos.config import (
    ConfigError,
    IssueDefaults,
    WarrantySettings,
    get_company_profile,
    get_issue_defaults,
    get_store_settings,
    get_warranty_settings,
    load_config,
)
from recibos.domain.receipt import CompanyProfile, StoredReceipt
from recibos.store import ReceiptNotFoundError, ReceiptStore, open_store

console = Console()


@dataclass(frozen=True)
class AppContext:
    """Everything a command needs from configuration."""

    company: CompanyProfile
    issue: IssueDefaults
    warranty: WarrantySettings
    store: ReceiptStore


def load_context(db_path: Path | None = None) -> AppContext:
    """Load configuration and open the configured store.

    Exits with status 1 on configuration errors.

    Args:
        db_path: SQLite path override.
    """
    try:
        config = load_config()
        return AppContext(
            company=get_company_profile(config),
            issue=get_issue_defaults(config),
            warranty=get_warranty_settings(config),
            store=open_store(get_store_settings(config, db_path)),
        )
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Arquivo de configuração inválido: {e}[/red]", style="bold")
        sys.exit(1)
    except ConfigError as e:
        console.print(f"[red]Erro de configuração: {e}[/red]", style="bold")
        sys.exit(1)


def find_receipt(store: ReceiptStore, id_or_prefix: str) -> StoredReceipt:
    """Find a receipt by full ID or by a unique ID prefix.

    Raises:
        ReceiptNotFoundError: If nothing matches or the prefix is ambiguous.
    """
    try:
        return store.get(id_or_prefix)
    except ReceiptNotFoundError:
        pass

    matches = [stored for stored in store.list_all() if stored.id.startswith(id_or_prefix)]
    if len(matches) == 1:
        return matches[0]
    raise ReceiptNotFoundError(id_or_prefix)
