"""Shared fixtures: a sample company, form and receipt."""

from decimal import Decimal

import pytest

from recibos.config import default_config, get_company_profile
from recibos.domain.form import FormState
from recibos.domain.receipt import CompanyProfile, WarrantyReceipt


@pytest.fixture
def company() -> CompanyProfile:
    return get_company_profile(default_config())


@pytest.fixture
def filled_form() -> FormState:
    """A form that passes every step."""
    return FormState(
        customer_name="Maria Silva",
        cpf="52998224725",
        phone="87988775727",
        city="Petrolina",
        state="pe",
        brand="Samsung",
        model="Galaxy A54",
        rom_memory="128GB",
        ram_memory="8GB",
        imei1="351234567890123",
        sale_value="1.500,50",
        warranty_months=12,
        issue_city="Petrolina – PE",
        issue_date="05/03/2025",
        signature_name="Telecell Magazine",
    )


@pytest.fixture
def receipt() -> WarrantyReceipt:
    return WarrantyReceipt(
        customer_name="Maria Silva",
        cpf="529.982.247-25",
        phone="(87) 98877-5727",
        city="Petrolina",
        state="PE",
        product_type="Smartphone",
        brand="Samsung",
        model="Galaxy A54",
        rom_memory="128GB",
        ram_memory="8GB",
        imei1="351234567890123",
        sale_value=Decimal("1500.50"),
        sale_value_in_words="mil e quinhentos reais e cinquenta centavos",
        warranty_duration="12 meses (360 dias)",
        issue_city="Petrolina – PE",
        issue_date="05/03/2025",
        signature_name="Telecell Magazine",
        company_name="Telecell Magazine",
        company_legal_name="E dos Santos Silva",
        company_cnpj="06.227.875/0001-07",
        company_state_registration="0311807-01",
        company_address="Galeria Eco Center – Loja 01, Centro, Petrolina – PE",
        company_phone1="(87) 3862-0240",
        company_phone2="(87) 9 8877-5727",
    )
