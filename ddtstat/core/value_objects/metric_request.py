from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Subcommand(str, Enum):
    MEM = "mem"
    DISK = "disk"


class Unit(int, Enum):
    """Fixed unit divisors selectable from the command line"""
    BYTES = 1
    KIB = 1024
    MIB = 1024 ** 2
    GIB = 1024 ** 3
    TIB = 1024 ** 4


class MetricRequest(BaseModel):
    """Which metric to compute and the divisor to scale it by.

    `is_percent` only records that the divisor was derived from a capacity
    figure; the calculator treats every divisor the same way.
    """
    model_config = ConfigDict(frozen=True)

    subcommand: Subcommand
    divisor: int = Field(default=Unit.BYTES.value, description="Final divisor applied to the metric")
    is_percent: bool = Field(default=False, description="Divisor is total/100 of a capacity figure")

    @field_validator('divisor')
    @classmethod
    def validate_divisor(cls, v):
        if v < 0:
            raise ValueError('Divisor cannot be negative')
        return v

    @model_validator(mode='after')
    def validate_unit_divisor(self):
        # A zero percent divisor is left for the calculator to reject
        if not self.is_percent and self.divisor == 0:
            raise ValueError('Unit divisor must be positive')
        return self
