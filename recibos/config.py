"""Configuration file management for recibos."""

import os
import tomllib
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import tomli_w

from recibos.domain.duration import AVERAGE_DAYS_PER_MONTH, DAYS_PER_MONTH, DEFAULT_WARRANTY_MONTHS, DayConvention
from recibos.domain.receipt import CompanyProfile
from recibos.domain.taxpayer import format_cnpj, validate_cnpj

STORE_BACKENDS = ("sqlite", "firestore")
DEFAULT_COLLECTION = "warranty_receipts"

DEFAULT_COMPANY: dict[str, str] = {
    "name": "Telecell Magazine",
    "legal_name": "E dos Santos Silva",
    "cnpj": "06.227.875/0001-07",
    "state_registration": "0311807-01",
    "address": "Galeria Eco Center – Loja 01, Centro, Petrolina – PE",
    "phone1": "(87) 3862-0240",
    "phone2": "(87) 9 8877-5727",
    "instagram": "@telecellmagazine",
}


class ConfigError(ValueError):
    """Raised when the configuration file has invalid values."""


@dataclass(frozen=True)
class IssueDefaults:
    """Prefilled values for the issuance step."""

    city: str
    signature_name: str


@dataclass(frozen=True)
class WarrantySettings:
    """Warranty defaults and the day-per-month convention."""

    default_months: int
    days_per_month: DayConvention


@dataclass(frozen=True)
class StoreSettings:
    """Which record store to use and how to reach it."""

    backend: str
    path: Path | None = None
    project_id: str = ""
    collection: str = DEFAULT_COLLECTION


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "recibos" / "config.toml"


def default_config() -> dict[str, Any]:
    """Build the default configuration dictionary."""
    return {
        "company": dict(DEFAULT_COMPANY),
        "issue": {
            "city": "Petrolina – PE",
            "signature_name": DEFAULT_COMPANY["name"],
        },
        "warranty": {
            "default_months": DEFAULT_WARRANTY_MONTHS,
            "days_per_month": DAYS_PER_MONTH,
        },
        "store": {
            "backend": "sqlite",
            "firestore": {
                "project_id": "",
                "collection": DEFAULT_COLLECTION,
            },
        },
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, or the defaults when the file doesn't exist.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return default_config()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Section {name!r} must be a table")
    return section


def get_company_profile(config: dict[str, Any]) -> CompanyProfile:
    """Read the issuing company from the [company] table.

    Missing keys fall back to the defaults.

    Raises:
        ConfigError: If the CNPJ does not validate.
    """
    values = {**DEFAULT_COMPANY, **_section(config, "company")}
    if not validate_cnpj(values["cnpj"]):
        raise ConfigError(f"Invalid company CNPJ: {values['cnpj']}")
    return CompanyProfile(
        name=str(values["name"]),
        legal_name=str(values["legal_name"]),
        cnpj=format_cnpj(values["cnpj"]),
        state_registration=str(values["state_registration"]),
        address=str(values["address"]),
        phone1=str(values["phone1"]),
        phone2=str(values["phone2"]),
        instagram=str(values.get("instagram", "")),
    )


def get_issue_defaults(config: dict[str, Any]) -> IssueDefaults:
    """Read issuance defaults from the [issue] table."""
    defaults = default_config()["issue"]
    section = {**defaults, **_section(config, "issue")}
    return IssueDefaults(city=str(section["city"]), signature_name=str(section["signature_name"]))


def get_warranty_settings(config: dict[str, Any]) -> WarrantySettings:
    """Read warranty defaults from the [warranty] table.

    Raises:
        ConfigError: If days_per_month is not 30 or 30.44, or default_months < 1.
    """
    section = _section(config, "warranty")
    default_months = section.get("default_months", DEFAULT_WARRANTY_MONTHS)
    days_per_month = section.get("days_per_month", DAYS_PER_MONTH)

    if isinstance(default_months, bool) or not isinstance(default_months, int) or default_months < 1:
        raise ConfigError(f"default_months must be a positive integer, got {default_months!r}")

    convention = Decimal(str(days_per_month))
    if convention == DAYS_PER_MONTH:
        return WarrantySettings(default_months=default_months, days_per_month=DAYS_PER_MONTH)
    if convention == AVERAGE_DAYS_PER_MONTH:
        return WarrantySettings(default_months=default_months, days_per_month=AVERAGE_DAYS_PER_MONTH)
    raise ConfigError(f"days_per_month must be 30 or 30.44, got {days_per_month!r}")


def get_store_settings(config: dict[str, Any], db_path: Path | None = None) -> StoreSettings:
    """Read store settings from the [store] table.

    Args:
        config: Configuration dictionary.
        db_path: SQLite path override. If None, uses [store] path or the default.

    Raises:
        ConfigError: On an unknown backend or a Firestore backend without project_id.
    """
    section = _section(config, "store")
    backend = section.get("backend", "sqlite")
    if backend not in STORE_BACKENDS:
        raise ConfigError(f"Unknown store backend {backend!r}, expected one of {', '.join(STORE_BACKENDS)}")

    if db_path is None and section.get("path"):
        db_path = Path(section["path"]).expanduser()

    firestore = section.get("firestore", {})
    project_id = str(firestore.get("project_id", ""))
    if backend == "firestore" and not project_id:
        raise ConfigError("store.firestore.project_id is required for the firestore backend")

    return StoreSettings(
        backend=backend,
        path=db_path,
        project_id=project_id,
        collection=str(firestore.get("collection", DEFAULT_COLLECTION)),
    )
