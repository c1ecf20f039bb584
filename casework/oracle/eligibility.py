"""
Deterministic SNAP eligibility and benefit calculator.
Pure function of (OracleInput, PolicyRules): no I/O, no clock, no shared state.
"""

import math
from typing import Optional, Union

from casework.domain.models.oracle import (
    CalculationStep,
    DeductionBreakdown,
    EligibleDetermination,
    FailedTest,
    IncomeFrequency,
    IncomeItem,
    IncomeType,
    IneligibleDetermination,
    OracleInput,
    ShelterCostDetail,
    StepValue,
    SuaTier,
)
from casework.domain.models.policy import IncomeConversion, PolicyRules

Determination = Union[EligibleDetermination, IneligibleDetermination]

ELDERLY_AGE = 60


def format_amount(amount: float) -> str:
    """Number without a trailing .0 for whole values."""
    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def format_money(amount: float) -> str:
    return f"${format_amount(amount)}"


def to_monthly(item: IncomeItem, conversion: IncomeConversion) -> float:
    if item.frequency == IncomeFrequency.WEEKLY:
        return item.amount * conversion.weekly_multiplier
    if item.frequency == IncomeFrequency.BIWEEKLY:
        return item.amount * conversion.biweekly_multiplier
    if item.frequency == IncomeFrequency.ANNUAL:
        return item.amount / conversion.annual_divisor
    return item.amount


def fpl_threshold(household_size: int, pct_fpl: int, rules: PolicyRules) -> int:
    """floor(poverty guideline for the size * pct / 100)."""
    base = rules.fpl_table.amount_for(household_size)
    return math.floor(base * pct_fpl / 100)


def shelter_cost_detail(oracle_input: OracleInput, rules: PolicyRules) -> ShelterCostDetail:
    costs = oracle_input.shelter_costs
    sua_amount = 0
    if costs.sua_tier != SuaTier.NONE:
        sua_amount = rules.utility_allowances.tiers.get(costs.sua_tier.value, 0)
    total = costs.rent + costs.mortgage + costs.property_tax + costs.insurance + costs.condo_fees + sua_amount
    return ShelterCostDetail(
        rent=costs.rent,
        mortgage=costs.mortgage,
        property_tax=costs.property_tax,
        insurance=costs.insurance,
        condo_fees=costs.condo_fees,
        sua_tier=costs.sua_tier,
        sua_amount=sua_amount,
        total_shelter_costs=total,
    )


def screen_expedited(
    gross_income: float,
    liquid_resources: float,
    total_shelter_costs: float,
    rules: PolicyRules,
) -> bool:
    """Expedited service: very low income and resources, or shelter costs above income plus resources."""
    expedited = rules.expedited_service
    if gross_income < expedited.gross_income_limit and liquid_resources <= expedited.liquid_resource_limit:
        return True
    return gross_income + liquid_resources < total_shelter_costs


class _Trace:
    """Accumulates calculation steps and the de-duplicated, insertion-ordered cited rules."""

    def __init__(self) -> None:
        self.steps: list[CalculationStep] = []
        self.cited_rules: list[str] = []

    def cite(self, rule_id: str) -> None:
        if rule_id not in self.cited_rules:
            self.cited_rules.append(rule_id)

    def record(
        self,
        description: str,
        rule_id: str,
        inputs: dict[str, StepValue],
        output: StepValue,
        formula: Optional[str] = None,
    ) -> None:
        self.steps.append(
            CalculationStep(
                step_number=len(self.steps) + 1,
                description=description,
                rule_id=rule_id,
                inputs=inputs,
                output=output,
                formula=formula,
            )
        )


def _ineligible(
    trace: _Trace,
    *,
    reason: str,
    gross_income: float,
    expedited: bool,
    failed_test: Optional[FailedTest] = None,
    net_income: float = 0,
    deductions: Optional[DeductionBreakdown] = None,
) -> IneligibleDetermination:
    return IneligibleDetermination(
        reason=reason,
        failed_tests=(failed_test,) if failed_test else (),
        gross_income=gross_income,
        net_income=net_income,
        deductions=deductions or DeductionBreakdown(),
        cited_rules=tuple(trace.cited_rules),
        calculation_steps=tuple(trace.steps),
        expedited_eligible=expedited,
    )


def compute_eligibility(oracle_input: OracleInput, rules: PolicyRules) -> Determination:
    """
    Run the 16-step determination. Disqualifying steps short-circuit into an
    IneligibleDetermination carrying the steps recorded so far.
    """
    trace = _Trace()
    gross_rule = rules.income_tests.gross_income_test
    net_rule = rules.income_tests.net_income_test
    size = oracle_input.household_size

    # Step 1: household classification
    elderly_or_disabled = any(
        m.age >= ELDERLY_AGE or m.is_disabled for m in oracle_input.household_members
    )
    trace.record(
        "Classify household (elderly/disabled)",
        gross_rule.rule_id,
        {"member_count": len(oracle_input.household_members), "has_elderly_or_disabled": elderly_or_disabled},
        elderly_or_disabled,
        f"any member age >= {ELDERLY_AGE} OR is_disabled",
    )
    trace.cite(gross_rule.rule_id)

    # Step 2: monthly conversion, excluded income dropped
    conversion = rules.income_conversion
    gross_earned = 0.0
    gross_unearned = 0.0
    for item in oracle_input.income:
        if item.type == IncomeType.EXCLUDED:
            continue
        monthly = to_monthly(item, conversion)
        if item.type == IncomeType.EARNED:
            gross_earned += monthly
        else:
            gross_unearned += monthly
    trace.cite(conversion.rule_id)
    trace.record(
        "Convert all income to monthly amounts",
        conversion.rule_id,
        {
            "earned_items": sum(1 for i in oracle_input.income if i.type == IncomeType.EARNED),
            "unearned_items": sum(1 for i in oracle_input.income if i.type == IncomeType.UNEARNED),
            "excluded_items": sum(1 for i in oracle_input.income if i.type == IncomeType.EXCLUDED),
        },
        gross_earned + gross_unearned,
        (
            f"weekly * {conversion.weekly_multiplier}, biweekly * {conversion.biweekly_multiplier}, "
            f"annual / {conversion.annual_divisor}"
        ),
    )

    # Step 3: gross income
    gross_income = gross_earned + gross_unearned
    trace.record(
        "Calculate gross monthly income",
        gross_rule.rule_id,
        {"gross_earned": gross_earned, "gross_unearned": gross_unearned},
        gross_income,
        "gross_earned + gross_unearned",
    )

    total_resources = sum(r.value for r in oracle_input.resources if r.countable)
    shelter = shelter_cost_detail(oracle_input, rules)
    expedited = screen_expedited(gross_income, total_resources, shelter.total_shelter_costs, rules)

    # Step 4: resource test
    resource_limit = (
        rules.resource_limits.with_qualifying_member
        if elderly_or_disabled
        else rules.resource_limits.standard
    )
    trace.cite(resource_limit.rule_id)
    resources_ok = total_resources <= resource_limit.amount
    trace.record(
        "Resource test",
        resource_limit.rule_id,
        {"total_resources": total_resources, "resource_limit": resource_limit.amount},
        resources_ok,
        "total_countable_resources <= limit",
    )
    if not resources_ok:
        return _ineligible(
            trace,
            reason=f"Resources ({format_money(total_resources)}) exceed limit ({format_money(resource_limit.amount)})",
            gross_income=gross_income,
            expedited=expedited,
            failed_test=FailedTest(
                name="Resource Test",
                rule_id=resource_limit.rule_id,
                reason=(
                    f"Countable resources ({format_money(total_resources)}) "
                    f"exceed limit ({format_money(resource_limit.amount)})"
                ),
                actual=total_resources,
                limit=resource_limit.amount,
            ),
        )

    # Step 5: gross income test
    gross_pct = gross_rule.threshold_pct_fpl
    if elderly_or_disabled and gross_rule.threshold_pct_fpl_with_qualifying_member is not None:
        gross_pct = gross_rule.threshold_pct_fpl_with_qualifying_member
    gross_limit = fpl_threshold(size, gross_pct, rules)
    trace.cite(gross_rule.rule_id)
    trace.cite(rules.fpl_table.rule_id)
    gross_ok = gross_income <= gross_limit
    trace.record(
        f"Gross income test ({gross_pct}% FPL)",
        gross_rule.rule_id,
        {"gross_income": gross_income, "gross_income_limit": gross_limit, "pct_fpl": gross_pct},
        gross_ok,
        f"gross_income <= FPL * {gross_pct}%",
    )
    if not gross_ok:
        return _ineligible(
            trace,
            reason=f"Gross income ({format_money(gross_income)}) exceeds {gross_pct}% FPL ({format_money(gross_limit)})",
            gross_income=gross_income,
            expedited=expedited,
            failed_test=FailedTest(
                name="Gross Income Test",
                rule_id=gross_rule.rule_id,
                reason=(
                    f"Gross income ({format_money(gross_income)}) exceeds {gross_pct}% "
                    f"FPL limit ({format_money(gross_limit)})"
                ),
                actual=gross_income,
                limit=gross_limit,
            ),
        )

    deduction_rules = rules.deductions

    # Step 6: standard deduction
    standard = deduction_rules.standard.amount_for(size)
    trace.cite(deduction_rules.standard.rule_id)
    trace.record(
        "Apply standard deduction",
        deduction_rules.standard.rule_id,
        {"household_size": size},
        standard,
        "lookup by household size bracket",
    )

    # Step 7: earned income deduction, earned income only
    earned_rate = deduction_rules.earned_income.rate
    earned_deduction = math.floor(gross_earned * earned_rate)
    trace.cite(deduction_rules.earned_income.rule_id)
    trace.record(
        f"Earned income deduction ({round(earned_rate * 100)}%)",
        deduction_rules.earned_income.rule_id,
        {"gross_earned": gross_earned, "rate": earned_rate},
        earned_deduction,
        f"floor(gross_earned * {earned_rate})",
    )

    # Step 8: dependent care
    dependent_care = oracle_input.dependent_care_costs
    trace.cite(deduction_rules.dependent_care.rule_id)
    trace.record(
        "Dependent care deduction",
        deduction_rules.dependent_care.rule_id,
        {"dependent_care_costs": dependent_care},
        dependent_care,
    )

    # Step 9: child support
    child_support = oracle_input.child_support_paid
    trace.cite(deduction_rules.child_support.rule_id)
    trace.record(
        "Child support deduction",
        deduction_rules.child_support.rule_id,
        {"child_support_paid": child_support},
        child_support,
    )

    # Step 10: medical, elderly/disabled households only
    medical_threshold = deduction_rules.medical.threshold
    medical = 0.0
    if elderly_or_disabled and oracle_input.medical_expenses > 0:
        medical = max(0.0, oracle_input.medical_expenses - medical_threshold)
    trace.cite(deduction_rules.medical.rule_id)
    trace.record(
        "Medical deduction (elderly/disabled only)",
        deduction_rules.medical.rule_id,
        {
            "medical_expenses": oracle_input.medical_expenses,
            "threshold": medical_threshold,
            "has_elderly_or_disabled": elderly_or_disabled,
        },
        medical,
        f"max(0, medical_expenses - {format_money(medical_threshold)})",
    )

    # Step 11: excess shelter
    shelter_rule = deduction_rules.excess_shelter
    adjusted_income = gross_income - standard - earned_deduction - dependent_care - child_support - medical
    trace.cite(rules.utility_allowances.rule_id)
    income_share = adjusted_income * shelter_rule.income_multiplier
    excess_shelter = max(0.0, shelter.total_shelter_costs - income_share)
    if not elderly_or_disabled:
        excess_shelter = min(excess_shelter, shelter_rule.cap)
    trace.cite(shelter_rule.rule_id)
    trace.record(
        "Excess shelter deduction",
        shelter_rule.rule_id,
        {
            "total_shelter_costs": shelter.total_shelter_costs,
            "half_adjusted_income": income_share,
            "cap": shelter_rule.cap,
            "has_elderly_or_disabled": elderly_or_disabled,
        },
        excess_shelter,
        (
            f"max(0, total_shelter - {shelter_rule.income_multiplier} * adjusted_income); "
            f"capped at {format_money(shelter_rule.cap)} unless elderly/disabled"
        ),
    )

    # Step 12: net income
    total_deductions = standard + earned_deduction + dependent_care + child_support + medical + excess_shelter
    net_income = max(0.0, gross_income - total_deductions)
    trace.cite(net_rule.rule_id)
    trace.record(
        "Calculate net income",
        net_rule.rule_id,
        {"gross_income": gross_income, "total_deductions": total_deductions},
        net_income,
        "max(0, gross_income - total_deductions)",
    )
    deductions = DeductionBreakdown(
        standard=standard,
        earned_income=earned_deduction,
        dependent_care=dependent_care,
        child_support=child_support,
        medical=medical,
        excess_shelter=excess_shelter,
        total_deductions=total_deductions,
        shelter_cost_detail=shelter,
    )

    # Step 13: net income test
    net_limit = fpl_threshold(size, net_rule.threshold_pct_fpl, rules)
    net_ok = net_income <= net_limit
    trace.record(
        f"Net income test ({net_rule.threshold_pct_fpl}% FPL)",
        net_rule.rule_id,
        {"net_income": net_income, "net_income_limit": net_limit},
        net_ok,
        f"net_income <= FPL * {net_rule.threshold_pct_fpl}%",
    )
    if not net_ok:
        return _ineligible(
            trace,
            reason=(
                f"Net income ({format_money(net_income)}) exceeds "
                f"{net_rule.threshold_pct_fpl}% FPL ({format_money(net_limit)})"
            ),
            gross_income=gross_income,
            expedited=expedited,
            failed_test=FailedTest(
                name="Net Income Test",
                rule_id=net_rule.rule_id,
                reason=(
                    f"Net income ({format_money(net_income)}) exceeds "
                    f"{net_rule.threshold_pct_fpl}% FPL limit ({format_money(net_limit)})"
                ),
                actual=net_income,
                limit=net_limit,
            ),
            net_income=net_income,
            deductions=deductions,
        )

    # Step 14: benefit
    allotments = rules.max_allotments
    formula = rules.benefit_formula
    max_allotment = allotments.amount_for(size)
    trace.cite(allotments.rule_id)
    trace.cite(formula.rule_id)
    benefit = math.floor(max_allotment - formula.contribution_rate * net_income)
    trace.record(
        "Calculate benefit amount",
        formula.rule_id,
        {"max_allotment": max_allotment, "contribution_rate": formula.contribution_rate, "net_income": net_income},
        benefit,
        f"floor(max_allotment - {formula.contribution_rate} * net_income)",
    )

    # Step 15: minimum benefit for designated sizes
    minimum_applies = size in allotments.minimum_benefit_applies_to
    if minimum_applies and 0 < benefit < allotments.minimum_benefit:
        benefit = allotments.minimum_benefit
    trace.record(
        "Apply minimum benefit rule",
        allotments.rule_id,
        {
            "benefit_amount": benefit,
            "minimum_benefit": allotments.minimum_benefit,
            "household_size": size,
            "minimum_benefit_applies": minimum_applies,
        },
        benefit,
        f"if size in {list(allotments.minimum_benefit_applies_to)} and 0 < benefit < {allotments.minimum_benefit}, raise to minimum",
    )

    # Step 16: final eligibility
    eligible = benefit > 0
    trace.record(
        "Final eligibility determination",
        formula.rule_id,
        {"benefit_amount": benefit},
        eligible,
        "benefit > 0",
    )
    if not eligible:
        return _ineligible(
            trace,
            reason="Calculated benefit is $0 or less",
            gross_income=gross_income,
            expedited=expedited,
            net_income=net_income,
            deductions=deductions,
        )

    return EligibleDetermination(
        benefit_amount=benefit,
        gross_income=gross_income,
        net_income=net_income,
        deductions=deductions,
        cited_rules=tuple(trace.cited_rules),
        calculation_steps=tuple(trace.steps),
        expedited_eligible=expedited,
    )
