from dataclasses import replace
from decimal import Decimal

import pytest

from propfolio.engine.scoring import (
    calculate_flip_score,
    calculate_hold_arv_ratio_score,
    calculate_hold_score,
    calculate_legacy_score,
    calculate_perfect_arv_for_flip_score,
    calculate_perfect_rent_for_hold_score,
    flip_arv_ratio_score,
    flip_equity_score,
    get_flip_score_breakdown,
    get_hold_score_breakdown,
    hold_cashflow_score,
    hold_rent_ratio_score,
    property_cashflow,
)
from propfolio.models.policy import ScoringPolicy
from propfolio.models.property import Property


class TestHoldCashflowScore:
    @pytest.mark.parametrize("cashflow,points", [
        ("200", 8),
        ("199.99", 7),
        ("175", 7),
        ("150", 6),
        ("125", 5),
        ("100", 4),
        ("75", 3),
        ("50", 2),
        ("0", 1),
        ("-0.01", 0),
    ])
    def test_bands(self, cashflow, points):
        assert hold_cashflow_score(Decimal(cashflow)) == points

    def test_per_unit(self):
        assert hold_cashflow_score(Decimal("400"), units=2) == 8
        assert hold_cashflow_score(Decimal("400"), units=4) == 4

    def test_missing_units_count_as_one(self):
        assert hold_cashflow_score(Decimal("200"), units=None) == 8
        assert hold_cashflow_score(Decimal("200"), units=0) == 8


class TestHoldRentRatioScore:
    def test_one_percent(self):
        assert hold_rent_ratio_score(Decimal("0.01")) == 2

    def test_point_eight_percent(self):
        assert hold_rent_ratio_score(Decimal("0.008")) == 1

    def test_below(self):
        assert hold_rent_ratio_score(Decimal("0.0079")) == 0


class TestFlipArvRatioScore:
    def test_at_threshold(self):
        assert flip_arv_ratio_score(Decimal("0.65")) == 10

    def test_below_threshold(self):
        assert flip_arv_ratio_score(Decimal("0.40")) == 10

    def test_one_full_step(self):
        assert flip_arv_ratio_score(Decimal("0.685")) == 9

    def test_partial_step_costs_nothing(self):
        assert flip_arv_ratio_score(Decimal("0.6849")) == 10

    def test_two_steps(self):
        assert flip_arv_ratio_score(Decimal("0.72")) == 8

    def test_floors_at_zero(self):
        assert flip_arv_ratio_score(Decimal("2.0")) == 0


class TestFlipEquityScore:
    @pytest.mark.parametrize("equity,points", [
        ("75000", 2),
        ("74999.99", 1),
        ("60000", 1),
        ("59999", 0),
        ("-10000", 0),
    ])
    def test_bands(self, equity, points):
        assert flip_equity_score(Decimal(equity)) == points


class TestDeprecatedHoldArvScore:
    def test_always_zero_with_warning(self):
        with pytest.warns(DeprecationWarning):
            assert calculate_hold_arv_ratio_score(Decimal("0.5")) == 0


class TestPropertyScores:
    def test_typical_cashflow(self, typical_property):
        assert property_cashflow(typical_property) == Decimal("316.37")

    def test_typical_hold(self, typical_property):
        breakdown = get_hold_score_breakdown(typical_property)
        assert breakdown.cashflow_score == 8
        assert breakdown.rent_ratio_score == 2
        assert breakdown.total_score == 10
        assert calculate_hold_score(typical_property) == 10

    def test_typical_flip_is_clamped(self, typical_property):
        breakdown = get_flip_score_breakdown(typical_property)
        assert breakdown.arv_ratio_score == 10
        assert breakdown.equity_score == 2
        assert breakdown.total_score == 10

    def test_poor_hold_floors_at_one(self, poor_property):
        breakdown = get_hold_score_breakdown(poor_property)
        assert breakdown.cashflow_score == 0
        assert breakdown.rent_ratio_score == 0
        assert breakdown.total_score == 1

    def test_poor_flip_floors_at_one(self, poor_property):
        breakdown = get_flip_score_breakdown(poor_property)
        assert breakdown.arv_ratio_score == 0
        assert breakdown.equity_score == 0
        assert calculate_flip_score(poor_property) == 1

    def test_multi_unit_divides_cashflow(self, typical_property):
        duplex = replace(typical_property, units=2)
        # $316.37 / 2 units = $158.19 per unit
        assert get_hold_score_breakdown(duplex).cashflow_score == 6

    def test_empty_property_scores_stay_in_range(self, empty_property):
        assert 1 <= calculate_hold_score(empty_property) <= 10
        assert 1 <= calculate_flip_score(empty_property) <= 10

    def test_hold_score_monotonic_in_rent(self, typical_property):
        scores = [
            calculate_hold_score(replace(typical_property, potential_rent=Decimal(rent)))
            for rent in range(0, 3000, 50)
        ]
        assert scores == sorted(scores)

    def test_flip_score_monotonic_in_arv(self, typical_property):
        scores = [
            calculate_flip_score(replace(typical_property, arv=Decimal(arv)))
            for arv in range(130000, 260000, 2500)
        ]
        assert scores == sorted(scores)


class TestLegacyScore:
    def test_typical(self, typical_property):
        assert calculate_legacy_score(typical_property) == 10

    def test_poor(self, poor_property):
        assert calculate_legacy_score(poor_property) == 1

    def test_middling(self):
        prop = Property(
            offer_price=Decimal("100000"),
            rehab_costs=Decimal("0"),
            arv=Decimal("125000"),
            potential_rent=Decimal("990"),
        )
        # ratio 0.99% -> 2, ARV 80% -> 2, equity $45K -> 0, cashflow $0.63 -> 1
        assert calculate_legacy_score(prop) == 5


class TestPerfectRent:
    def test_typical(self):
        rent = calculate_perfect_rent_for_hold_score(
            Decimal("100000"), Decimal("20000"), Decimal("180000")
        )
        assert rent == Decimal("1367.77")

    def test_round_trip_scores_ten(self, typical_property):
        rent = calculate_perfect_rent_for_hold_score(
            typical_property.offer_price, typical_property.rehab_costs, typical_property.arv
        )
        assert calculate_hold_score(replace(typical_property, potential_rent=rent)) == 10

    def test_a_dollar_less_misses_top_cashflow_band(self, typical_property):
        rent = calculate_perfect_rent_for_hold_score(
            typical_property.offer_price, typical_property.rehab_costs, typical_property.arv
        )
        cheaper = replace(typical_property, potential_rent=rent - Decimal("1"))
        assert get_hold_score_breakdown(cheaper).cashflow_score < 8

    def test_multi_unit_round_trip(self, typical_property):
        fourplex = replace(typical_property, units=4)
        rent = calculate_perfect_rent_for_hold_score(
            fourplex.offer_price, fourplex.rehab_costs, fourplex.arv, units=4
        )
        assert calculate_hold_score(replace(fourplex, potential_rent=rent)) == 10

    def test_rent_ratio_binds_for_cheap_financing(self):
        """With a large buffer the loan is small and the 1% rule decides."""
        policy = ScoringPolicy(cash_remaining=Decimal("200000"))
        rent = calculate_perfect_rent_for_hold_score(
            Decimal("300000"), Decimal("0"), Decimal("400000"), policy=policy
        )
        assert rent == Decimal("3000.00")

    def test_nothing_invested_prices_cashflow_only(self):
        rent = calculate_perfect_rent_for_hold_score(Decimal("0"), Decimal("0"), Decimal("100000"))
        # (200 per unit + 130 fixed) / (1 - 12% management)
        assert rent == Decimal("375.00")
        assert get_hold_score_breakdown(Property(potential_rent=rent)).cashflow_score == 8

    def test_negative_investment_does_not_raise(self):
        rent = calculate_perfect_rent_for_hold_score(Decimal("10000"), Decimal("-20000"), Decimal("0"))
        assert rent > 0


class TestPerfectArv:
    def test_typical(self):
        arv = calculate_perfect_arv_for_flip_score(Decimal("100000"), Decimal("20000"))
        assert arv == Decimal("184615.39")

    def test_round_trip_scores_ten(self, typical_property):
        arv = calculate_perfect_arv_for_flip_score(
            typical_property.offer_price, typical_property.rehab_costs
        )
        breakdown = get_flip_score_breakdown(replace(typical_property, arv=arv))
        assert breakdown.arv_ratio_score == 10
        assert breakdown.equity_score == 2

    def test_equity_binds_for_small_deals(self):
        # 40000 / 0.65 = 61538.47; new loan 20000 + 75000 = 95000
        arv = calculate_perfect_arv_for_flip_score(Decimal("40000"), Decimal("0"))
        assert arv == Decimal("95000.00")

    def test_never_negative(self):
        assert calculate_perfect_arv_for_flip_score(Decimal("0"), Decimal("0")) >= 0


OFFERS = ["45000", "137500", "250000", "412345.67"]
REHABS = ["-5000", "0", "0.01", "35000"]


class TestSolverRoundTrips:
    @pytest.mark.parametrize("offer", OFFERS)
    @pytest.mark.parametrize("rehab", REHABS)
    @pytest.mark.parametrize("units", [None, 0, 1, 2, 4])
    def test_perfect_rent_scores_ten(self, offer, rehab, units):
        offer, rehab = Decimal(offer), Decimal(rehab)
        rent = calculate_perfect_rent_for_hold_score(offer, rehab, Decimal("300000"), units)
        prop = Property(
            offer_price=offer,
            rehab_costs=rehab,
            arv=Decimal("300000"),
            potential_rent=rent,
            units=units,
        )
        assert calculate_hold_score(prop) == 10

    @pytest.mark.parametrize("offer", OFFERS)
    @pytest.mark.parametrize("rehab", REHABS)
    def test_perfect_arv_scores_ten(self, offer, rehab):
        offer, rehab = Decimal(offer), Decimal(rehab)
        arv = calculate_perfect_arv_for_flip_score(offer, rehab)
        breakdown = get_flip_score_breakdown(Property(offer_price=offer, rehab_costs=rehab, arv=arv))
        assert breakdown.arv_ratio_score == 10
        assert breakdown.equity_score == 2
