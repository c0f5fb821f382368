"""Search filter parsing and money conversion."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError

MINOR_UNITS_PER_MAJOR = 100


class FilterOptions(BaseModel):
    """Optional property search constraints. Missing fields mean no constraint."""

    city: Optional[str] = None
    owner_id: Optional[int] = Field(None, alias="ownerId", ge=0)
    minimum_price_per_night: Optional[Decimal] = Field(None, alias="minimumPricePerNight", ge=0)
    maximum_price_per_night: Optional[Decimal] = Field(None, alias="maximumPricePerNight", ge=0)
    minimum_rating: Optional[float] = Field(None, alias="minimumRating", ge=0)

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        # Search forms submit empty inputs as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value


def parse_filter_options(options: Union[FilterOptions, Mapping[str, Any], None]) -> FilterOptions:
    """Coerce a mapping (camelCase or snake_case keys) into FilterOptions.

    Raises:
        ValidationError: If a value has the wrong type or is negative
    """
    if options is None:
        return FilterOptions()
    if isinstance(options, FilterOptions):
        return options
    try:
        return FilterOptions.model_validate(dict(options))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid search filters: {e}") from e


def to_minor_units(amount: Union[Decimal, int, float, str]) -> int:
    """Convert a major-unit amount (dollars) to minor units (cents).

    Examples:
        50 -> 5000
        "123.45" -> 12345
        0.125 -> 13
    """
    try:
        value = Decimal(str(amount))
    except ArithmeticError as e:
        raise ValidationError(f"Invalid amount: {amount!r}") from e
    if not value.is_finite():
        raise ValidationError(f"Invalid amount: {amount!r}")
    return int((value * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
