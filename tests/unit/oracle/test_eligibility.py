"""Eligibility oracle tests: benefit math, short-circuits, deductions, determinism."""

from casework.domain.models.oracle import (
    EligibleDetermination,
    HouseholdMember,
    IncomeFrequency,
    IncomeItem,
    IncomeType,
    IneligibleDetermination,
    ResourceItem,
    ShelterCosts,
    SuaTier,
)
from casework.oracle.eligibility import compute_eligibility, format_amount, fpl_threshold


def _earned(amount, frequency=IncomeFrequency.MONTHLY):
    return IncomeItem(type=IncomeType.EARNED, amount=amount, frequency=frequency)


def _unearned(amount):
    return IncomeItem(type=IncomeType.UNEARNED, amount=amount, frequency=IncomeFrequency.MONTHLY)


def test_zero_income_single_gets_max_allotment(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(), rules)
    assert isinstance(out, EligibleDetermination)
    assert out.eligible is True
    assert out.benefit_amount == 298
    assert out.net_income == 0
    assert len(out.calculation_steps) == 16
    assert [s.step_number for s in out.calculation_steps] == list(range(1, 17))
    assert out.expedited_eligible is True


def test_resource_test_short_circuits(rules, make_oracle_input):
    oracle_input = make_oracle_input(resources=[ResourceItem(type="savings", value=3500)])
    out = compute_eligibility(oracle_input, rules)
    assert isinstance(out, IneligibleDetermination)
    assert out.benefit_amount == 0
    assert len(out.calculation_steps) == 4
    assert out.reason == "Resources ($3500) exceed limit ($3000)"
    assert out.failed_tests[0].name == "Resource Test"
    assert out.cited_rules == ("ELIG-GROSS-001", "INC-CONV-001", "ELIG-RES-001")


def test_uncountable_resources_ignored(rules, make_oracle_input):
    oracle_input = make_oracle_input(resources=[ResourceItem(type="vehicle", value=9000, countable=False)])
    assert compute_eligibility(oracle_input, rules).eligible


def test_qualifying_member_raises_resource_limit(rules, make_oracle_input):
    oracle_input = make_oracle_input(
        household_members=[HouseholdMember(age=65)],
        resources=[ResourceItem(type="savings", value=3500)],
    )
    assert compute_eligibility(oracle_input, rules).eligible


def test_gross_income_test(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(income=[_earned(2200)]), rules)
    assert not out.eligible
    assert len(out.calculation_steps) == 5
    assert out.reason == "Gross income ($2200) exceeds 165% FPL ($2153)"
    assert out.failed_tests[0].name == "Gross Income Test"
    assert out.failed_tests[0].limit == 2153


def test_fpl_threshold_floors(rules):
    assert fpl_threshold(1, 165, rules) == 2153
    assert fpl_threshold(1, 200, rules) == 2610


def test_earned_income_deduction_floors(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(income=[_earned(333)]), rules)
    assert out.deductions.earned_income == 66
    assert out.calculation_steps[6].output == 66
    assert out.net_income == 62
    assert out.benefit_amount == 279


def test_weekly_income_converted(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(income=[_earned(100, IncomeFrequency.WEEKLY)]), rules)
    assert out.gross_income == 430


def test_excluded_income_ignored(rules, make_oracle_input):
    excluded = IncomeItem(type=IncomeType.EXCLUDED, amount=5000, frequency=IncomeFrequency.MONTHLY)
    out = compute_eligibility(make_oracle_input(income=[excluded]), rules)
    assert out.gross_income == 0
    assert out.benefit_amount == 298


def test_excess_shelter_capped_unless_elderly(rules, make_oracle_input):
    shelter = ShelterCosts(rent=2000)
    capped = compute_eligibility(make_oracle_input(income=[_unearned(1000)], shelter_costs=shelter), rules)
    assert capped.deductions.excess_shelter == 744
    assert capped.net_income == 51
    assert capped.benefit_amount == 282

    uncapped = compute_eligibility(
        make_oracle_input(
            household_members=[HouseholdMember(age=70)],
            income=[_unearned(1000)],
            shelter_costs=shelter,
        ),
        rules,
    )
    assert uncapped.deductions.excess_shelter == 1602.5
    assert uncapped.net_income == 0


def test_utility_allowance_added_to_shelter(rules, make_oracle_input):
    out = compute_eligibility(
        make_oracle_input(shelter_costs=ShelterCosts(rent=500, sua_tier=SuaTier.HEATING_COOLING)),
        rules,
    )
    detail = out.deductions.shelter_cost_detail
    assert detail.sua_amount == 546
    assert detail.total_shelter_costs == 1046


def test_medical_deduction_only_for_elderly_or_disabled(rules, make_oracle_input):
    plain = compute_eligibility(make_oracle_input(medical_expenses=100), rules)
    assert plain.deductions.medical == 0
    disabled = compute_eligibility(
        make_oracle_input(household_members=[HouseholdMember(age=40, is_disabled=True)], medical_expenses=100),
        rules,
    )
    assert disabled.deductions.medical == 65


def test_minimum_benefit_for_small_households(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(income=[_unearned(1155)]), rules)
    assert out.net_income == 950
    assert out.benefit_amount == 24


def test_zero_benefit_is_ineligible(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(income=[_unearned(1305)]), rules)
    assert isinstance(out, IneligibleDetermination)
    assert out.reason == "Calculated benefit is $0 or less"
    assert out.failed_tests == ()
    assert len(out.calculation_steps) == 16


def test_net_income_never_negative(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(dependent_care_costs=400, child_support_paid=300), rules)
    assert out.net_income == 0


def test_large_household_extrapolates(rules, make_oracle_input):
    out = compute_eligibility(make_oracle_input(household_size=11), rules)
    assert out.benefit_amount == 2225 + 218


def test_determinism(rules, make_oracle_input):
    oracle_input = make_oracle_input(income=[_earned(900, IncomeFrequency.BIWEEKLY)], shelter_costs=ShelterCosts(rent=700))
    first = compute_eligibility(oracle_input, rules)
    second = compute_eligibility(oracle_input, rules)
    assert first.model_dump_json() == second.model_dump_json()


def test_format_amount():
    assert format_amount(2150.0) == "2150"
    assert format_amount(62.5) == "62.5"


def test_shelter_costs_default_to_none_tier(rules):
    """Households without shelter costs are evaluated with an empty shelter record."""
    from datetime import date

    from casework.domain.models.oracle import OracleInput

    oracle_input = OracleInput(
        household_size=1,
        household_members=[HouseholdMember(age=30)],
        application_date=date(2026, 1, 15),
        policy_pack_id="snap-illinois-fy2026-v1",
    )
    assert oracle_input.shelter_costs == ShelterCosts()
    assert oracle_input.shelter_costs.sua_tier == SuaTier.NONE
    assert compute_eligibility(oracle_input, rules).benefit_amount == 298


def test_expedited_flag_is_informational(rules, make_oracle_input):
    screened_in = compute_eligibility(make_oracle_input(), rules)
    screened_out = compute_eligibility(
        make_oracle_input(resources=[ResourceItem(type="savings", value=150)]), rules
    )
    assert screened_in.expedited_eligible is True
    assert screened_out.expedited_eligible is False
    assert screened_in.benefit_amount == screened_out.benefit_amount == 298
    assert screened_in.cited_rules == screened_out.cited_rules
    assert "ELIG-EXP-001" not in screened_in.cited_rules
