"""Unit tests for billing domain entities

Tests cover:
- ContractId value semantics
- Invoice ownership by contract
- InvoicedTask total
- PlatformInvoice serial number and totals
- BillingInfo rendering
"""

import pytest
from decimal import Decimal
from datetime import datetime
from pydantic import ValidationError

from src.domain import (
    BillingInfo,
    ContractId,
    Invoice,
    InvoicedTask,
    PlatformInvoice,
)


def contract_id(role="DEV", username="john"):
    return ContractId(
        repo_full_name="mihai/test",
        contributor_username=username,
        provider="github",
        role=role,
    )


class TestContractId:

    def test_equal_when_all_parts_equal(self):
        assert contract_id() == contract_id()
        assert hash(contract_id()) == hash(contract_id())

    def test_differs_by_role(self):
        assert contract_id("DEV") != contract_id("QA")

    def test_is_immutable(self):
        cid = contract_id()
        with pytest.raises(ValidationError):
            cid.role = "QA"


class TestInvoice:

    def test_contract_id_and_ownership(self):
        invoice = Invoice(
            id=1,
            repo_full_name="mihai/test",
            contributor_username="john",
            provider="github",
            role="DEV",
        )

        assert invoice.contract_id == contract_id()
        assert invoice.belongs_to(contract_id())
        assert not invoice.belongs_to(contract_id(username="jane"))

    def test_new_invoice_is_unpaid_and_empty(self):
        invoice = Invoice(
            repo_full_name="mihai/test",
            contributor_username="john",
            provider="github",
            role="DEV",
        )

        assert invoice.is_paid is False
        assert invoice.total_amount == Decimal(0)
        assert invoice.transaction_id is None


class TestInvoicedTask:

    def test_total_is_value_plus_commission(self):
        task = InvoicedTask(
            invoice_id=1,
            task_id=7,
            issue_id="42",
            time_spent_minutes=90,
            value=Decimal(19000),
            commission=Decimal(1000),
        )

        assert task.total_amount == Decimal(20000)


class TestPlatformInvoice:

    @pytest.fixture
    def platform_invoice(self):
        return PlatformInvoice(
            id=12,
            invoice_id=1,
            billed_by="Platform",
            billed_to="John",
            commission=Decimal(1000),
            vat=Decimal(190),
            eur_to_ron=Decimal(492),
            transaction_id="fake_payment_abc",
            payment_time=datetime(2024, 2, 1, 12, 0, 0),
        )

    def test_serial_number(self, platform_invoice):
        assert platform_invoice.serial_number == "SLF0000012"

    def test_total_is_commission_plus_vat(self, platform_invoice):
        assert platform_invoice.total_amount == Decimal(1190)

    def test_total_in_ron(self, platform_invoice):
        # 1190 * 4.92 = 5854.8 -> 5855
        assert platform_invoice.total_amount_ron == Decimal(5855)


class TestBillingInfo:

    def test_person_rendering(self):
        info = BillingInfo(
            first_name="John",
            last_name="Doe",
            country="DE",
            address="Street 1",
            city="Berlin",
            zipcode="10115",
            tax_id="DE123",
        )

        assert str(info) == "John Doe\nStreet 1, Berlin, 10115\nDE\nTax ID: DE123"

    def test_company_rendering_uses_legal_name(self):
        info = BillingInfo(is_company=True, legal_name="Acme SRL", country="RO")

        assert str(info) == "Acme SRL\nRO"
