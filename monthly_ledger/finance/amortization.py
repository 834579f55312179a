"""
Installment Calculator

Equal-installment (French / annuity) amortization with optional
insurance and tax-on-insurance surcharges.

All rates are fractions: 0.0185 means 1.85% per month.
Results are whole currency units, rounded half up.
"""

import math

from pydantic import BaseModel, Field


def round_currency(value: float) -> int:
    """Round half up to a whole currency unit."""
    return int(math.floor(value + 0.5))


def base_installment(principal: float, monthly_rate: float, term_months: int) -> float:
    """Unrounded annuity payment; simple division when there is no interest."""
    if term_months <= 0:
        return 0.0
    if not monthly_rate:
        return principal / term_months
    factor = (1 + monthly_rate) ** term_months
    return principal * monthly_rate * factor / (factor - 1)


def insurance_installment(principal: float, insurance_pct: float, term_months: int) -> float:
    """Monthly share of the insurance charged over the principal."""
    if term_months <= 0:
        return 0.0
    return principal * (insurance_pct or 0.0) / term_months


def cuota(
    principal: float,
    monthly_rate: float,
    term_months: int,
    insurance_pct: float = 0.0,
    insurance_tax_pct: float = 0.0,
) -> int:
    """
    Monthly installment for a debt.

    Args:
        principal: Amount financed
        monthly_rate: Interest per month as a fraction
        term_months: Number of installments; <= 0 yields 0
        insurance_pct: Insurance over principal as a fraction
        insurance_tax_pct: Tax on the insurance as a fraction

    Returns:
        base + insurance + insurance * tax, rounded half up
    """
    if term_months <= 0:
        return 0
    base = base_installment(principal, monthly_rate, term_months)
    insurance = insurance_installment(principal, insurance_pct, term_months)
    tax = insurance * (insurance_tax_pct or 0.0)
    return round_currency(base + insurance + tax)


class InstallmentBreakdown(BaseModel):
    """Parts of an installment, for display."""

    base: float = Field(..., ge=0)
    insurance: float = Field(default=0.0, ge=0)
    insurance_tax: float = Field(default=0.0, ge=0)
    total: int = Field(..., ge=0, description="Rounded installment, same as cuota()")


def installment_breakdown(
    principal: float,
    monthly_rate: float,
    term_months: int,
    insurance_pct: float = 0.0,
    insurance_tax_pct: float = 0.0,
) -> InstallmentBreakdown:
    base = base_installment(principal, monthly_rate, term_months)
    insurance = insurance_installment(principal, insurance_pct, term_months)
    return InstallmentBreakdown(
        base=base,
        insurance=insurance,
        insurance_tax=insurance * (insurance_tax_pct or 0.0),
        total=cuota(principal, monthly_rate, term_months, insurance_pct, insurance_tax_pct),
    )
