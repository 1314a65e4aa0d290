"""Concentration to AQI conversion on the two supported scales."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .breakpoints import BREAKPOINTS, MAX_AQI, SUPPORTED_POLLUTANTS


class AQIError(Exception):
    """Base class for failures that make an AQI calculation unavailable."""


class UnknownPollutantError(AQIError, KeyError):
    def __init__(self, pollutant: object) -> None:
        super().__init__(pollutant)
        self.pollutant = pollutant

    def __str__(self) -> str:
        return f"Unsupported pollutant {self.pollutant!r}; expected one of {', '.join(SUPPORTED_POLLUTANTS)}"


class InvalidConcentrationError(AQIError, ValueError):
    pass


class AQIScale(Enum):
    QUALITATIVE = "qualitative"
    STANDARD = "standard"

    @property
    def bounds(self) -> Tuple[int, int]:
        return (1, 5) if self is AQIScale.QUALITATIVE else (0, 500)


@dataclass(frozen=True)
class AQIValue:
    """An AQI number tagged with the scale it belongs to.

    Values on different scales compare unequal and refuse ordering, so a
    provider 1-5 index can never be mixed up with a locally computed 0-500 AQI.
    """

    value: int
    scale: AQIScale

    def __post_init__(self) -> None:
        low, high = self.scale.bounds
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"AQI value must be an integer, got {self.value!r}")
        if not low <= self.value <= high:
            raise ValueError(f"{self.scale.value} AQI must be within [{low}, {high}], got {self.value}")

    @classmethod
    def qualitative(cls, value: int) -> "AQIValue":
        return cls(int(value), AQIScale.QUALITATIVE)

    @classmethod
    def standard(cls, value: int) -> "AQIValue":
        return cls(int(value), AQIScale.STANDARD)

    def _check_scale(self, other: object) -> "AQIValue":
        if not isinstance(other, AQIValue):
            return NotImplemented
        if other.scale is not self.scale:
            raise TypeError(f"Cannot compare {self.scale.value} AQI with {other.scale.value} AQI")
        return other

    def __lt__(self, other: object) -> bool:
        checked = self._check_scale(other)
        if checked is NotImplemented:
            return NotImplemented
        return self.value < checked.value

    def __le__(self, other: object) -> bool:
        checked = self._check_scale(other)
        if checked is NotImplemented:
            return NotImplemented
        return self.value <= checked.value

    def __gt__(self, other: object) -> bool:
        checked = self._check_scale(other)
        if checked is NotImplemented:
            return NotImplemented
        return self.value > checked.value

    def __ge__(self, other: object) -> bool:
        checked = self._check_scale(other)
        if checked is NotImplemented:
            return NotImplemented
        return self.value >= checked.value

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class PollutantReading(Mapping[str, float]):
    """Immutable pollutant concentrations keyed by pollutant id."""

    concentrations: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        checked: Dict[str, float] = {}
        for pollutant, value in self.concentrations.items():
            if pollutant not in BREAKPOINTS:
                raise UnknownPollutantError(pollutant)
            checked[pollutant] = validate_concentration(value)
        object.__setattr__(self, "concentrations", MappingProxyType(checked))

    @classmethod
    def from_components(cls, components: Mapping[str, object]) -> "PollutantReading":
        """Keep the supported pollutants from an upstream ``components`` mapping."""
        return cls({key: float(value) for key, value in components.items() if key in BREAKPOINTS and value is not None})

    def __getitem__(self, pollutant: str) -> float:
        return self.concentrations[pollutant]

    def __iter__(self) -> Iterator[str]:
        return iter(self.concentrations)

    def __len__(self) -> int:
        return len(self.concentrations)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.concentrations)


def validate_concentration(concentration: object) -> float:
    if isinstance(concentration, bool) or not isinstance(concentration, Real):
        raise InvalidConcentrationError(f"Concentration must be numeric, got {concentration!r}")
    value = float(concentration)
    if math.isnan(value) or value < 0:
        raise InvalidConcentrationError(f"Concentration must be a non-negative number, got {concentration!r}")
    return value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_aqi(pollutant: str, concentration: float) -> int:
    """Convert a concentration to the 0-500 AQI for ``pollutant``.

    The concentration is floored to the pollutant's reporting resolution before
    the breakpoint lookup. Concentrations beyond the last tier saturate at the
    table maximum (``MAX_AQI``) instead of failing, however large they are.
    """
    breakpoints = BREAKPOINTS.get(pollutant)
    if breakpoints is None:
        raise UnknownPollutantError(pollutant)
    value = validate_concentration(concentration)
    if value >= breakpoints.saturation_threshold:
        return MAX_AQI

    truncated = breakpoints.truncate(value)
    for tier in breakpoints.tiers:
        if tier.contains(truncated):
            slope = (tier.aqi_high - tier.aqi_low) / (tier.conc_high - tier.conc_low)
            return _round_half_up(slope * (truncated - tier.conc_low) + tier.aqi_low)
    return MAX_AQI


def to_aqi_value(pollutant: str, concentration: float) -> AQIValue:
    return AQIValue.standard(to_aqi(pollutant, concentration))


def sub_indices(reading: Mapping[str, float]) -> Dict[str, int]:
    """Standard AQI per pollutant, skipping pollutants with no positive concentration."""
    return {pollutant: to_aqi(pollutant, value) for pollutant, value in reading.items() if value and value > 0}


def aqi_for_reading(reading: Mapping[str, float]) -> Optional[AQIValue]:
    """Overall AQI of a reading: the highest pollutant sub-index."""
    indices = sub_indices(reading)
    if not indices:
        return None
    return AQIValue.standard(max(indices.values()))


_UG_PER_PPM = {"co": 1150.0, "o3": 1960.0}
_MG_PER_PPM = {"co": 1.15, "o3": 1.96}


def concentration_in_table_units(pollutant: str, value: float, unit: str = "ug/m3") -> float:
    """Convert an upstream concentration into the units the breakpoint table uses.

    Only ``co`` and ``o3`` are tabulated in ppm; other pollutants pass through.
    """
    if pollutant not in _UG_PER_PPM:
        return value
    normalized = unit.lower().replace("µ", "u").replace("μ", "u").replace("³", "3")
    if normalized in ("ug/m3", "micrograms per cubic meter"):
        return value / _UG_PER_PPM[pollutant]
    if normalized in ("mg/m3", "milligrams per cubic meter"):
        return value / _MG_PER_PPM[pollutant]
    return value
