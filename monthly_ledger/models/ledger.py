"""
Ledger Data Models

These models define the records kept for one calendar month:
incomes, fixed expenses, purchases, revolving debts (cards),
installment loans and savings goals.

DESIGN DECISION: Each entry kind is its own model with a `kind`
discriminator instead of one loose record with optional fields.
Type-specific rules (paid flags, preserved counters, insurance
add-ons) live on the kind that owns them.

DESIGN DECISION: Copies between months go through an explicit
`rolled_over()` constructor per kind. Fields are enumerated by hand so
nothing unexpected leaks into the next month, and every reset rule is
visible in one place.
"""

from enum import Enum
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from monthly_ledger.finance.amortization import cuota


FIRST_DAY = 1


# =============================================================================
# ENTRY KINDS
# =============================================================================

class EntryBase(BaseModel):
    """Fields shared by every entry kind."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: int = Field(
        ...,
        ge=1,
        description="Identifier unique within the store"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name"
    )
    day_of_month: int = Field(
        default=FIRST_DAY,
        ge=1,
        le=31,
        description="Day of the month the entry falls on"
    )


class IncomeEntry(EntryBase):
    """Money coming in during the month."""
    kind: Literal["income"] = "income"

    amount: float = Field(..., ge=0)
    category: str = Field(default="", max_length=100)

    def rolled_over(self, new_id: int) -> "IncomeEntry":
        return IncomeEntry(
            id=new_id,
            name=self.name,
            amount=self.amount,
            category=self.category,
            day_of_month=FIRST_DAY,
        )


class FixedExpenseEntry(EntryBase):
    """Recurring expense (rent, utilities...) paid once per month."""
    kind: Literal["fixed_expense"] = "fixed_expense"

    amount: float = Field(..., ge=0)
    category: str = Field(default="", max_length=100)
    paid: bool = False

    def rolled_over(self, new_id: int) -> "FixedExpenseEntry":
        return FixedExpenseEntry(
            id=new_id,
            name=self.name,
            amount=self.amount,
            category=self.category,
            day_of_month=FIRST_DAY,
            paid=False,
        )


class PurchaseExpenseEntry(EntryBase):
    """Discretionary purchase."""
    kind: Literal["purchase"] = "purchase"

    amount: float = Field(..., ge=0)
    category: str = Field(default="", max_length=100)
    paid: bool = False

    def rolled_over(self, new_id: int) -> "PurchaseExpenseEntry":
        return PurchaseExpenseEntry(
            id=new_id,
            name=self.name,
            amount=self.amount,
            category=self.category,
            day_of_month=FIRST_DAY,
            paid=False,
        )


class RevolvingDebt(EntryBase):
    """
    Credit card balance paid in equal installments.

    `installments_paid` is cumulative progress and survives rollover.
    `paid` is this month's status and does not.
    """
    kind: Literal["revolving_debt"] = "revolving_debt"

    total_principal: float = Field(
        ...,
        ge=0,
        description="Amount financed"
    )
    term_months: int = Field(
        ...,
        ge=1,
        description="Number of installments"
    )
    installments_paid: int = Field(
        default=0,
        ge=0,
        description="Installments already paid"
    )
    monthly_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=0.5,
        description="Monthly interest rate as a fraction (0.0185 = 1.85%)"
    )
    computed_installment: Optional[int] = Field(
        default=None,
        description="Stored monthly installment; None until first computed"
    )
    paid: bool = False

    @model_validator(mode='after')
    def validate_progress(self) -> 'RevolvingDebt':
        if self.installments_paid > self.term_months:
            raise ValueError("Installments paid cannot exceed the number of installments")
        return self

    @property
    def remaining_installments(self) -> int:
        return self.term_months - self.installments_paid

    def installment(self) -> int:
        """Installment implied by the current parameters."""
        return cuota(self.total_principal, self.monthly_rate, self.term_months)

    def rolled_over(self, new_id: int) -> "RevolvingDebt":
        return RevolvingDebt(
            id=new_id,
            name=self.name,
            day_of_month=FIRST_DAY,
            total_principal=self.total_principal,
            term_months=self.term_months,
            installments_paid=self.installments_paid,
            monthly_rate=self.monthly_rate,
            computed_installment=self.computed_installment,
            paid=False,
        )


class InstallmentLoan(RevolvingDebt):
    """
    Bank loan with an optional insurance (aval) surcharge on the
    principal and a tax on that surcharge.
    """
    kind: Literal["installment_loan"] = "installment_loan"

    insurance_pct: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Insurance over principal as a fraction"
    )
    insurance_tax_pct: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Tax charged on the insurance as a fraction"
    )

    def installment(self) -> int:
        return cuota(
            self.total_principal,
            self.monthly_rate,
            self.term_months,
            self.insurance_pct,
            self.insurance_tax_pct,
        )

    def rolled_over(self, new_id: int) -> "InstallmentLoan":
        return InstallmentLoan(
            id=new_id,
            name=self.name,
            day_of_month=FIRST_DAY,
            total_principal=self.total_principal,
            term_months=self.term_months,
            installments_paid=self.installments_paid,
            monthly_rate=self.monthly_rate,
            insurance_pct=self.insurance_pct,
            insurance_tax_pct=self.insurance_tax_pct,
            computed_installment=self.computed_installment,
            paid=False,
        )


class SavingsGoal(EntryBase):
    """Savings target with a running balance. No paid flag."""
    kind: Literal["savings_goal"] = "savings_goal"

    target_amount: float = Field(..., ge=0)
    current_amount: float = Field(default=0.0, ge=0)

    @property
    def progress(self) -> float:
        """Fraction of the target reached, capped at 1."""
        if not self.target_amount:
            return 0.0
        return min(1.0, self.current_amount / self.target_amount)

    def rolled_over(self, new_id: int) -> "SavingsGoal":
        return SavingsGoal(
            id=new_id,
            name=self.name,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            day_of_month=FIRST_DAY,
        )


LedgerEntry = Annotated[
    Union[
        IncomeEntry,
        FixedExpenseEntry,
        PurchaseExpenseEntry,
        RevolvingDebt,
        InstallmentLoan,
        SavingsGoal,
    ],
    Field(discriminator="kind"),
]


# =============================================================================
# SECTIONS
# =============================================================================

class Section(str, Enum):
    """The six ordered sequences of a month."""
    INCOMES = "incomes"
    FIXED_EXPENSES = "fixed_expenses"
    PURCHASES = "purchases"
    REVOLVING_DEBTS = "revolving_debts"
    INSTALLMENT_LOANS = "installment_loans"
    SAVINGS_GOALS = "savings_goals"

    @property
    def entry_type(self) -> type:
        return SECTION_TYPES[self]

    @property
    def has_paid_flag(self) -> bool:
        return self not in (Section.INCOMES, Section.SAVINGS_GOALS)

    @property
    def is_debt(self) -> bool:
        return self in (Section.REVOLVING_DEBTS, Section.INSTALLMENT_LOANS)


SECTION_TYPES = {
    Section.INCOMES: IncomeEntry,
    Section.FIXED_EXPENSES: FixedExpenseEntry,
    Section.PURCHASES: PurchaseExpenseEntry,
    Section.REVOLVING_DEBTS: RevolvingDebt,
    Section.INSTALLMENT_LOANS: InstallmentLoan,
    Section.SAVINGS_GOALS: SavingsGoal,
}


# =============================================================================
# MONTH
# =============================================================================

class LedgerMonth(BaseModel):
    """
    All entries recorded for one month.

    The six lists always exist once a month is materialized; an empty
    month is six empty lists, never a missing field.
    """
    model_config = ConfigDict(extra="forbid")

    incomes: list[IncomeEntry] = Field(default_factory=list)
    fixed_expenses: list[FixedExpenseEntry] = Field(default_factory=list)
    purchases: list[PurchaseExpenseEntry] = Field(default_factory=list)
    revolving_debts: list[RevolvingDebt] = Field(default_factory=list)
    installment_loans: list[InstallmentLoan] = Field(default_factory=list)
    savings_goals: list[SavingsGoal] = Field(default_factory=list)

    def section(self, section: Section) -> list:
        return getattr(self, Section(section).value)

    def entries(self) -> Iterator[tuple[Section, EntryBase]]:
        for section in Section:
            for entry in self.section(section):
                yield section, entry

    def debts(self) -> Iterator[RevolvingDebt]:
        """Cards first, then loans."""
        yield from self.revolving_debts
        yield from self.installment_loans

    def has_data(self) -> bool:
        return any(self.section(section) for section in Section)

    def find(self, section: Section, entry_id: int) -> Optional[EntryBase]:
        for entry in self.section(section):
            if entry.id == entry_id:
                return entry
        return None

    def max_id(self) -> int:
        return max((entry.id for _, entry in self.entries()), default=0)
