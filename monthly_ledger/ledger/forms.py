"""
Debt Form Input

Raw values typed into the card / loan forms. Rates arrive as
comma-decimal percentage text ("1,85") and are turned into fractions
here, with a readable error when they are out of range.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaValidationError

from monthly_ledger.errors import ValidationError
from monthly_ledger.finance.percent import parse_percent
from monthly_ledger.models.ledger import Section


MAX_MONTHLY_RATE = 0.5
MAX_INSURANCE_PCT = 1.0


class DebtFormInput(BaseModel):
    """What the user typed for a card or a loan."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    total_principal: float = Field(..., ge=0)
    term_months: int = Field(..., ge=1)
    installments_paid: int = Field(default=0, ge=0)
    rate: str = Field(default="0", description="Monthly rate, e.g. 1,85")
    insurance: str = Field(default="0", description="Insurance over principal, e.g. 12,00")
    insurance_tax: str = Field(default="0", description="Tax on insurance, e.g. 19,00")

    @classmethod
    def from_form(cls, raw: dict[str, Any]) -> "DebtFormInput":
        """
        Raises:
            ValidationError: If a field is missing or malformed
        """
        try:
            return cls.model_validate(raw)
        except SchemaValidationError as e:
            raise ValidationError.from_pydantic(e)

    def to_fields(self, section: Section) -> dict[str, Any]:
        """
        Entry fields for `section` with percentages parsed.

        Raises:
            ValidationError: On malformed or out-of-range percentages
        """
        section = Section(section)
        if not section.is_debt:
            raise ValidationError(f"{section.value} is not a debt section")

        rate = parse_percent(self.rate, "rate")
        if not 0 <= rate <= MAX_MONTHLY_RATE:
            raise ValidationError("rate: monthly rate must be between 0% and 50%")

        fields: dict[str, Any] = {
            "name": self.name,
            "total_principal": self.total_principal,
            "term_months": self.term_months,
            "installments_paid": self.installments_paid,
            "monthly_rate": rate,
        }

        if section == Section.INSTALLMENT_LOANS:
            insurance = parse_percent(self.insurance, "insurance")
            insurance_tax = parse_percent(self.insurance_tax, "insurance_tax")
            if not 0 <= insurance <= MAX_INSURANCE_PCT:
                raise ValidationError("insurance: must be between 0% and 100%")
            if not 0 <= insurance_tax <= MAX_INSURANCE_PCT:
                raise ValidationError("insurance_tax: must be between 0% and 100%")
            fields["insurance_pct"] = insurance
            fields["insurance_tax_pct"] = insurance_tax

        return fields
