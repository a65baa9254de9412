"""Wire models for complex values and operand lists.

A complex value crosses a serialization boundary as a tagged object::

    {"representation": "rectangular", "real": 3.0, "imag": 4.0}
    {"representation": "polar", "modulus": 2.0, "phase": 1.5707963}

``representation`` is the discriminator; an operand list may mix tagged
values with bare real numbers.  Everything else is rejected at the
boundary with a single ``InvalidArgumentError`` carrying the pydantic
error as its cause.  This module defines the data models and the
conversions only -- no arithmetic.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
)

from complex_value import (
    ComplexValue,
    InvalidArgumentError,
    Polar,
    Rectangular,
    Representation,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tagged complex values
# ---------------------------------------------------------------------------

class RectangularModel(BaseModel):
    """``real + imag*i`` on the wire."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    representation: Literal["rectangular"] = Representation.RECTANGULAR.value
    real: float = Field(strict=True)
    imag: float = Field(strict=True)

    def to_value(self) -> Rectangular:
        return Rectangular(self.real, self.imag)


class PolarModel(BaseModel):
    """``modulus * e^(i*phase)`` on the wire.

    The pair is taken as given: a negative modulus or an angle outside
    [-pi, pi] is accepted and normalized by the value it builds.
    """

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    representation: Literal["polar"] = Representation.POLAR.value
    modulus: float = Field(strict=True)
    phase: float = Field(strict=True)

    def to_value(self) -> Polar:
        return Polar(self.modulus, self.phase)


ComplexModel = Annotated[
    Union[RectangularModel, PolarModel],
    Field(discriminator="representation"),
]

OperandModel = Union[ComplexModel, StrictInt, StrictFloat]


class OperandList(BaseModel):
    """A non-empty, heterogeneous list of operands for a variadic operation."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    operands: list[OperandModel] = Field(..., min_length=1)

    def to_operands(self) -> list[ComplexValue | float]:
        out: list[ComplexValue | float] = []
        for op in self.operands:
            if isinstance(op, (RectangularModel, PolarModel)):
                out.append(op.to_value())
            else:
                out.append(float(op))
        return out


_complex_adapter: TypeAdapter[RectangularModel | PolarModel] = TypeAdapter(ComplexModel)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def to_model(value: ComplexValue) -> RectangularModel | PolarModel:
    """Build the wire model for a value, keeping its representation.

    Polar values are written with their normalized modulus and phase.
    """
    if value.representation is Representation.POLAR:
        return PolarModel(modulus=value.modulus(), phase=value.phase())
    return RectangularModel(real=value.real(), imag=value.imag())


def dump_value(value: ComplexValue) -> dict[str, Any]:
    return to_model(value).model_dump()


def load_value(data: Any) -> ComplexValue:
    """Parse a tagged mapping (or JSON string) into a complex value."""
    try:
        if isinstance(data, (str, bytes)):
            model = _complex_adapter.validate_json(data)
        else:
            model = _complex_adapter.validate_python(data)
    except ValidationError as e:
        logger.debug("rejected complex value payload: %s", e)
        raise InvalidArgumentError(
            f"Invalid complex value: {e.error_count()} validation error(s)"
        ) from e
    return model.to_value()


def parse_operands(data: Any) -> list[ComplexValue | float]:
    """Validate an operand list payload and return arithmetic operands.

    Accepts ``{"operands": [...]}``, a bare list, or the JSON text of
    the object form.  ``None``, an empty list, or any element that is neither a
    tagged complex value nor a real number raises InvalidArgumentError.
    """
    if data is None:
        raise InvalidArgumentError("The operand list must not be None.")
    try:
        if isinstance(data, (str, bytes)):
            payload = OperandList.model_validate_json(data)
        elif isinstance(data, list):
            payload = OperandList(operands=data)
        else:
            payload = OperandList.model_validate(data)
    except ValidationError as e:
        logger.debug("rejected operand list payload: %s", e)
        raise InvalidArgumentError(
            f"Invalid operand list: {e.error_count()} validation error(s)"
        ) from e
    return payload.to_operands()
