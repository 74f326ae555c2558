"""Unit tests for the withholding calculator (no database)."""

from decimal import Decimal

import pytest

from app.core.entities import (
    AccountingAccount,
    AccountType,
    Company,
    RetentionConcept,
    Supplier,
    TransactionType,
)
from app.core.exceptions import InvalidInputError
from app.core.retenciones import (
    REASON_BELOW_MINIMUM,
    calculate_retentions,
    find_unresolved_references,
    net_payable,
    parse_transaction_type,
    round_to_minor_unit,
    total_withheld,
)

COMPRAS = RetentionConcept(
    code="001", name="Compras generales (declarantes)",
    minimum_base=Decimal("1000000"), rate=Decimal("2.5"),
    account_code="236540", id=1,
)
SERVICIOS = RetentionConcept(
    code="003", name="Servicios generales (declarantes)",
    minimum_base=Decimal("1000000"), rate=Decimal("4"),
    account_code="236525", id=3,
)
HONORARIOS = RetentionConcept(
    code="005", name="Honorarios y comisiones (personas jurídicas)",
    minimum_base=Decimal("0"), rate=Decimal("11"),
    account_code="236515", id=5,
)
INACTIVO = RetentionConcept(
    code="099", name="Concepto retirado", minimum_base=Decimal("0"),
    rate=Decimal("10"), active=False, id=99,
)
CATALOGO = [COMPRAS, SERVICIOS, HONORARIOS, INACTIVO]

CUENTAS = [
    AccountingAccount("236515", "Retención honorarios", AccountType.LIABILITY, 6, "2365"),
    AccountingAccount("236525", "Retención servicios", AccountType.LIABILITY, 6, "2365"),
    AccountingAccount("236540", "Retención compras", AccountType.LIABILITY, 6, "2365"),
]

AGENTE = Company(id=1, tax_id="900123456", name="Pagadora SAS", is_withholding_agent=True)
NO_AGENTE = Company(id=2, tax_id="800197268", name="Pequeña SAS", is_withholding_agent=False)


def make_supplier(goods=(), services=()) -> Supplier:
    return Supplier(
        id=10,
        tax_id="860034313",
        name="Proveedor de prueba",
        assigned_goods_retention_concepts=tuple(goods),
        assigned_services_retention_concepts=tuple(services),
    )


class TestThreshold:
    def test_below_minimum_is_reported_with_zero(self):
        results = calculate_retentions(
            Decimal("999999"), make_supplier(services=["003"]), AGENTE,
            TransactionType.SERVICES, CATALOGO,
        )
        assert len(results) == 1
        assert results[0].applies is False
        assert results[0].withheld_amount == Decimal(0)
        assert results[0].reason == REASON_BELOW_MINIMUM

    def test_base_equal_to_minimum_applies(self):
        results = calculate_retentions(
            Decimal("1000000"), make_supplier(services=["003"]), AGENTE,
            TransactionType.SERVICES, CATALOGO,
        )
        assert results[0].applies is True
        assert results[0].withheld_amount == Decimal("40000")
        assert results[0].reason is None

    def test_zero_minimum_applies_to_zero_base(self):
        results = calculate_retentions(
            0, make_supplier(services=["005"]), AGENTE, "SERVICIOS", CATALOGO,
        )
        assert results[0].applies is True
        assert results[0].withheld_amount == Decimal(0)


class TestRounding:
    @pytest.mark.parametrize(
        "base, esperado",
        [
            ("1000001", Decimal("25000")),
            ("1000020", Decimal("25001")),
            ("2000000", Decimal("50000")),
        ],
    )
    def test_goods_amount_rounds_half_up(self, base, esperado):
        results = calculate_retentions(
            base, make_supplier(goods=["001"]), AGENTE, TransactionType.GOODS, CATALOGO,
        )
        assert results[0].withheld_amount == esperado

    def test_round_to_minor_unit(self):
        assert round_to_minor_unit(Decimal("2.5")) == Decimal("3")
        assert round_to_minor_unit(Decimal("0.5")) == Decimal("1")
        assert round_to_minor_unit(Decimal("0.49")) == Decimal("0")
        assert round_to_minor_unit(Decimal("1.005"), 2) == Decimal("1.01")

    def test_large_base_is_rounded_exactly(self):
        base = "123456789012345678901234567891"
        results = calculate_retentions(
            base, make_supplier(services=["005"]), AGENTE, TransactionType.SERVICES, CATALOGO,
        )
        assert results[0].withheld_amount == Decimal("13580246791358024679135802468")
        assert net_payable(base, results) == Decimal("109876542220987654222098765423")

    def test_round_to_minor_unit_beyond_default_precision(self):
        assert round_to_minor_unit(Decimal("1E+30")) == Decimal("1E+30")
        assert round_to_minor_unit(Decimal("12345678901234567890123456789.5")) == Decimal(
            "12345678901234567890123456790"
        )


class TestShortCircuitAndValidation:
    def test_non_agent_returns_empty(self):
        supplier = make_supplier(goods=["001"], services=["003", "005"])
        assert calculate_retentions(
            5_000_000, supplier, NO_AGENTE, TransactionType.SERVICES, CATALOGO
        ) == []

    def test_validation_runs_before_short_circuit(self):
        with pytest.raises(InvalidInputError):
            calculate_retentions(-1, make_supplier(), NO_AGENTE, "BIENES", CATALOGO)
        with pytest.raises(InvalidInputError):
            calculate_retentions(100, make_supplier(), NO_AGENTE, "AMBOS", CATALOGO)

    @pytest.mark.parametrize(
        "base",
        [-1, Decimal("-0.01"), float("nan"), float("inf"), "abc", None, True, [100], "1e100"],
    )
    def test_invalid_base_raises(self, base):
        with pytest.raises(InvalidInputError):
            calculate_retentions(base, make_supplier(), AGENTE, "BIENES", CATALOGO)

    def test_numeric_strings_and_floats_are_accepted(self):
        supplier = make_supplier(goods=["001"])
        from_str = calculate_retentions("2000000", supplier, AGENTE, "BIENES", CATALOGO)
        from_float = calculate_retentions(2000000.0, supplier, AGENTE, "BIENES", CATALOGO)
        assert from_str[0].withheld_amount == from_float[0].withheld_amount == Decimal("50000")

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            calculate_retentions(-5, make_supplier(), AGENTE, "BIENES", CATALOGO)

    @pytest.mark.parametrize(
        "raw, esperado",
        [
            ("BIENES", TransactionType.GOODS),
            ("bienes", TransactionType.GOODS),
            ("GOODS", TransactionType.GOODS),
            (" servicios ", TransactionType.SERVICES),
            (TransactionType.SERVICES, TransactionType.SERVICES),
        ],
    )
    def test_parse_transaction_type(self, raw, esperado):
        assert parse_transaction_type(raw) is esperado

    @pytest.mark.parametrize("raw", ["AMBOS", TransactionType.BOTH, "COMPRAS", "", None, 1])
    def test_parse_transaction_type_rejects(self, raw):
        with pytest.raises(InvalidInputError):
            parse_transaction_type(raw)


class TestResolution:
    def test_results_follow_assignment_order(self):
        results = calculate_retentions(
            5_000_000, make_supplier(services=["005", "003"]), AGENTE,
            "SERVICIOS", CATALOGO, CUENTAS,
        )
        assert [r.concept.code for r in results] == ["005", "003"]
        assert [r.withheld_amount for r in results] == [Decimal("550000"), Decimal("200000")]

    def test_references_by_id_and_code(self):
        results = calculate_retentions(
            5_000_000, make_supplier(services=[5, "3"]), AGENTE, "SERVICIOS", CATALOGO,
        )
        assert [r.concept.code for r in results] == ["005", "003"]

    def test_unknown_and_inactive_references_are_skipped(self):
        supplier = make_supplier(services=["777", "099", "005"])
        results = calculate_retentions(1_000, supplier, AGENTE, "SERVICIOS", CATALOGO)
        assert [r.concept.code for r in results] == ["005"]

    def test_duplicate_reference_is_emitted_once(self):
        supplier = make_supplier(services=["005", 5, "005"])
        results = calculate_retentions(1_000, supplier, AGENTE, "SERVICIOS", CATALOGO)
        assert len(results) == 1

    def test_transaction_types_are_isolated(self):
        supplier = make_supplier(goods=["001"], services=["005"])
        goods = calculate_retentions(2_000_000, supplier, AGENTE, "BIENES", CATALOGO)
        services = calculate_retentions(2_000_000, supplier, AGENTE, "SERVICIOS", CATALOGO)
        assert [r.concept.code for r in goods] == ["001"]
        assert [r.concept.code for r in services] == ["005"]

    def test_no_assignments_gives_empty_list(self):
        assert calculate_retentions(2_000_000, make_supplier(), AGENTE, "BIENES", CATALOGO) == []

    def test_account_is_attached_when_known(self):
        results = calculate_retentions(
            2_000_000, make_supplier(goods=["001"]), AGENTE, "BIENES", CATALOGO, CUENTAS,
        )
        assert results[0].account is not None
        assert results[0].account.code == "236540"

    def test_account_is_none_when_missing(self):
        results = calculate_retentions(
            2_000_000, make_supplier(goods=["001"]), AGENTE, "BIENES", CATALOGO,
        )
        assert results[0].account is None

    def test_find_unresolved_references(self):
        supplier = make_supplier(services=["777", "099", "005"])
        unresolved = find_unresolved_references(supplier, "SERVICIOS", CATALOGO)
        assert [u.reference for u in unresolved] == ["777", "099"]
        assert all(u.transaction_type == "SERVICIOS" for u in unresolved)
        assert "777" in str(unresolved[0])

    def test_calculation_is_deterministic(self):
        supplier = make_supplier(services=["005", "003"])
        first = calculate_retentions(3_333_333, supplier, AGENTE, "SERVICIOS", CATALOGO, CUENTAS)
        second = calculate_retentions(3_333_333, supplier, AGENTE, "SERVICIOS", CATALOGO, CUENTAS)
        assert first == second

    def test_catalog_can_be_keyed_by_code_only(self):
        sin_id = RetentionConcept(
            code="010", name="Arrendamiento bienes raíces",
            minimum_base=Decimal("0"), rate=Decimal("3.5"),
        )
        results = calculate_retentions(
            1_000_000, make_supplier(services=["010"]), AGENTE, "SERVICIOS", [sin_id],
        )
        assert results[0].withheld_amount == Decimal("35000")


class TestTotals:
    def test_total_and_net(self):
        supplier = make_supplier(services=["005", "003"])
        results = calculate_retentions(50_000, supplier, AGENTE, "SERVICIOS", CATALOGO)
        # 003 is below its minimum and must not count
        assert total_withheld(results) == Decimal("5500")
        assert net_payable(50_000, results) == Decimal("44500")

    def test_empty_results(self):
        assert total_withheld([]) == Decimal(0)
        assert net_payable("1000", []) == Decimal("1000")
