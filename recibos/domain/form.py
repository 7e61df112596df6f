"""Pure functions for the four-step receipt form.

This module contains the functional core of the `recibos new` wizard:
- No I/O operations (no database, no console, no files)
- The form state is an immutable value passed between step functions
- Errors are returned as field -> message dictionaries, never raised

Steps:
1. Dados do Cliente
2. Dados do Aparelho
3. Dados da Venda
4. Emissão
"""

from dataclasses import asdict, dataclass, fields, replace
from decimal import Decimal
from typing import Any

from recibos.domain.duration import DAYS_PER_MONTH, DEFAULT_WARRANTY_MONTHS, DayConvention, to_canonical
from recibos.domain.formatting import format_phone, parse_amount
from recibos.domain.receipt import BRAZILIAN_STATES, CompanyProfile, ReceiptSchemaError, WarrantyReceipt
from recibos.domain.taxpayer import format_cpf, validate_cpf
from recibos.domain.words import ONE_BILLION, number_to_words

FIRST_STEP = 1
LAST_STEP = 4

STEP_TITLES = {
    1: "Dados do Cliente",
    2: "Dados do Aparelho",
    3: "Dados da Venda",
    4: "Emissão",
}

# Which form fields each step collects, in prompt order
STEP_FIELDS: dict[int, tuple[str, ...]] = {
    1: ("customer_name", "cpf", "phone", "city", "state"),
    2: ("product_type", "brand", "model", "rom_memory", "ram_memory", "imei1", "imei2"),
    3: ("sale_value", "warranty_months", "observations"),
    4: ("issue_city", "issue_date", "signature_name"),
}

FieldErrors = dict[str, str]


@dataclass(frozen=True)
class FormState:
    """Everything the operator has typed so far. All values are raw text."""

    customer_name: str = ""
    cpf: str = ""
    phone: str = ""
    city: str = ""
    state: str = "PE"

    product_type: str = "Smartphone"
    brand: str = ""
    model: str = ""
    rom_memory: str = ""
    ram_memory: str = ""
    imei1: str = ""
    imei2: str = ""

    sale_value: str = ""
    warranty_months: int = DEFAULT_WARRANTY_MONTHS
    observations: str = ""

    issue_city: str = ""
    issue_date: str = ""
    signature_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary, used for draft files."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormState":
        """Rebuild from a draft dictionary, ignoring keys this version doesn't know."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "warranty_months" in values:
            try:
                values["warranty_months"] = int(values["warranty_months"])
            except (TypeError, ValueError):
                values["warranty_months"] = DEFAULT_WARRANTY_MONTHS
        for name in known - {"warranty_months"}:
            if name in values:
                values[name] = "" if values[name] is None else str(values[name])
        return cls(**values)


def normalize_state(state: FormState) -> FormState:
    """Apply display masks and trim whitespace.

    Args:
        state: Form state as typed.

    Returns:
        New state with CPF and phone formatted and the UF upper-cased.
    """
    return replace(
        state,
        customer_name=state.customer_name.strip(),
        cpf=format_cpf(state.cpf),
        phone=format_phone(state.phone),
        city=state.city.strip(),
        state=state.state.strip().upper(),
        brand=state.brand.strip(),
        model=state.model.strip(),
        rom_memory=state.rom_memory.strip(),
        ram_memory=state.ram_memory.strip(),
        imei1=state.imei1.strip(),
        imei2=state.imei2.strip(),
        sale_value=state.sale_value.strip(),
        observations=state.observations.strip(),
        issue_city=state.issue_city.strip(),
        issue_date=state.issue_date.strip(),
        signature_name=state.signature_name.strip(),
    )


def _customer_errors(state: FormState) -> FieldErrors:
    errors: FieldErrors = {}
    if not state.customer_name:
        errors["customer_name"] = "Nome é obrigatório"
    if not state.cpf:
        errors["cpf"] = "CPF é obrigatório"
    elif not validate_cpf(state.cpf):
        errors["cpf"] = "CPF inválido"
    if not state.phone:
        errors["phone"] = "Telefone é obrigatório"
    if not state.city:
        errors["city"] = "Cidade é obrigatória"
    if not state.state:
        errors["state"] = "Estado é obrigatório"
    elif state.state not in BRAZILIAN_STATES:
        errors["state"] = "Estado inválido"
    return errors


def _device_errors(state: FormState) -> FieldErrors:
    errors: FieldErrors = {}
    if not state.brand:
        errors["brand"] = "Marca é obrigatória"
    if not state.model:
        errors["model"] = "Modelo é obrigatório"
    if not state.rom_memory:
        errors["rom_memory"] = "Memória ROM é obrigatória"
    if not state.ram_memory:
        errors["ram_memory"] = "Memória RAM é obrigatória"
    if not state.imei1:
        errors["imei1"] = "IMEI 1 é obrigatório"
    return errors


def _sale_errors(state: FormState) -> FieldErrors:
    errors: FieldErrors = {}
    if not state.sale_value:
        errors["sale_value"] = "Valor da venda é obrigatório"
    else:
        try:
            amount = parse_amount(state.sale_value)
        except ValueError:
            errors["sale_value"] = "Valor inválido"
        else:
            if amount <= 0:
                errors["sale_value"] = "Valor deve ser maior que zero"
            elif amount >= ONE_BILLION:
                errors["sale_value"] = "Valor muito alto"
    if state.warranty_months < 1:
        errors["warranty_months"] = "A garantia deve ter pelo menos 1 mês"
    return errors


def _issuance_errors(state: FormState) -> FieldErrors:
    errors: FieldErrors = {}
    if not state.issue_city:
        errors["issue_city"] = "Local de emissão é obrigatório"
    if not state.issue_date:
        errors["issue_date"] = "Data de emissão é obrigatória"
    if not state.signature_name:
        errors["signature_name"] = "Nome para assinatura é obrigatório"
    return errors


_STEP_VALIDATORS = {
    1: _customer_errors,
    2: _device_errors,
    3: _sale_errors,
    4: _issuance_errors,
}


def validate_step(step: int, state: FormState) -> tuple[FormState, FieldErrors]:
    """Validate one step of the form.

    Args:
        step: Step number (1-4).
        state: Current form state.

    Returns:
        Tuple of (normalized_state, errors). Errors is empty when the step
        is complete.

    Raises:
        ValueError: If the step number is out of range.
    """
    if step not in _STEP_VALIDATORS:
        raise ValueError(f"Unknown form step: {step}")
    normalized = normalize_state(state)
    return normalized, _STEP_VALIDATORS[step](normalized)


def next_step(step: int, state: FormState) -> tuple[int, FormState, FieldErrors]:
    """Move forward if the current step validates.

    Returns:
        Tuple of (step, normalized_state, errors). The step is unchanged
        when there are errors, and never goes past the last step.
    """
    normalized, errors = validate_step(step, state)
    if errors:
        return step, normalized, errors
    return min(step + 1, LAST_STEP), normalized, errors


def previous_step(step: int) -> int:
    """Move back one step, never before the first."""
    return max(step - 1, FIRST_STEP)


def validate_all(state: FormState) -> tuple[FormState, FieldErrors]:
    """Validate every step and merge the errors."""
    errors: FieldErrors = {}
    normalized = normalize_state(state)
    for step in range(FIRST_STEP, LAST_STEP + 1):
        errors.update(_STEP_VALIDATORS[step](normalized))
    return normalized, errors


def build_receipt(
    state: FormState,
    company: CompanyProfile,
    day_convention: DayConvention = DAYS_PER_MONTH,
) -> WarrantyReceipt:
    """Turn a completed form into a receipt, deriving the computed fields.

    Args:
        state: Completed form state.
        company: Issuing shop.
        day_convention: Days per month for the warranty duration string.

    Returns:
        WarrantyReceipt with value in words and canonical warranty duration.

    Raises:
        ReceiptSchemaError: If any step has errors.
    """
    normalized, errors = validate_all(state)
    if errors:
        detail = "; ".join(f"{field}: {message}" for field, message in errors.items())
        raise ReceiptSchemaError(f"Formulário incompleto: {detail}")

    sale_value: Decimal = parse_amount(normalized.sale_value)

    return WarrantyReceipt(
        customer_name=normalized.customer_name,
        cpf=normalized.cpf,
        phone=normalized.phone,
        city=normalized.city,
        state=normalized.state,
        product_type=normalized.product_type.strip() or "Smartphone",
        brand=normalized.brand,
        model=normalized.model,
        rom_memory=normalized.rom_memory,
        ram_memory=normalized.ram_memory,
        imei1=normalized.imei1,
        imei2=normalized.imei2 or None,
        sale_value=sale_value,
        sale_value_in_words=number_to_words(sale_value),
        warranty_duration=to_canonical(normalized.warranty_months, day_convention),
        issue_city=normalized.issue_city,
        issue_date=normalized.issue_date,
        signature_name=normalized.signature_name,
        observations=normalized.observations or None,
        company_name=company.name,
        company_legal_name=company.legal_name,
        company_cnpj=company.cnpj,
        company_state_registration=company.state_registration,
        company_address=company.address,
        company_phone1=company.phone1,
        company_phone2=company.phone2,
    )
