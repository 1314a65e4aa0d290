"""US EPA breakpoint definitions for the 0-500 AQI scale."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple


@dataclass(frozen=True)
class BreakpointTier:
    aqi_low: int
    aqi_high: int
    conc_low: float
    conc_high: float

    def contains(self, concentration: float) -> bool:
        return self.conc_low <= concentration <= self.conc_high


@dataclass(frozen=True)
class PollutantBreakpoints:
    """Ordered tiers for one pollutant plus the truncation applied before lookup."""

    pollutant: str
    resolution: Decimal
    tiers: Tuple[BreakpointTier, ...]

    def truncate(self, concentration: float) -> float:
        """Floor ``concentration`` to the pollutant's reporting resolution."""
        exact = Decimal(repr(float(concentration)))
        return float(exact.quantize(self.resolution, rounding=ROUND_FLOOR))

    @property
    def saturation_threshold(self) -> float:
        """Smallest concentration that truncates past the last tier."""
        return float(Decimal(repr(self.tiers[-1].conc_high)) + self.resolution)

    def validate(self) -> None:
        """Raise ``ValueError`` unless the tiers partition the domain without gaps."""
        previous = None
        for tier in self.tiers:
            if tier.aqi_low > tier.aqi_high or tier.conc_low >= tier.conc_high:
                raise ValueError(f"{self.pollutant}: tier {tier} is not increasing")
            if previous is not None:
                expected = Decimal(repr(previous.conc_high)) + self.resolution
                if Decimal(repr(tier.conc_low)) != expected:
                    raise ValueError(
                        f"{self.pollutant}: tier starting at {tier.conc_low} does not follow "
                        f"{previous.conc_high} at resolution {self.resolution}"
                    )
                if tier.aqi_low != previous.aqi_high + 1:
                    raise ValueError(f"{self.pollutant}: AQI bands are not contiguous at {tier.aqi_low}")
            previous = tier


AQI_BANDS: Tuple[Tuple[int, int], ...] = (
    (0, 50),
    (51, 100),
    (101, 150),
    (151, 200),
    (201, 300),
    (301, 500),
)

MAX_AQI = AQI_BANDS[-1][1]

# Concentration ranges per band; pm2_5, pm10, no2 and so2 in ug/m3, o3 and co in ppm.
_CONCENTRATION_RANGES: Dict[str, Tuple[str, List[Tuple[float, float]]]] = {
    "pm2_5": ("0.1", [(0.0, 12.0), (12.1, 35.4), (35.5, 55.4), (55.5, 150.4), (150.5, 250.4), (250.5, 500.4)]),
    "pm10": ("1", [(0, 54), (55, 154), (155, 254), (255, 354), (355, 424), (425, 604)]),
    "o3": ("0.001", [(0.0, 0.054), (0.055, 0.070), (0.071, 0.085), (0.086, 0.105), (0.106, 0.200)]),
    "co": ("0.1", [(0.0, 4.4), (4.5, 9.4), (9.5, 12.4), (12.5, 15.4), (15.5, 30.4), (30.5, 50.4)]),
    "so2": ("1", [(0, 35), (36, 75), (76, 185), (186, 304), (305, 604), (605, 1004)]),
    "no2": ("1", [(0, 53), (54, 100), (101, 360), (361, 649), (650, 1249), (1250, 2049)]),
}


def _build_table() -> Mapping[str, PollutantBreakpoints]:
    table: Dict[str, PollutantBreakpoints] = {}
    for pollutant, (resolution, ranges) in _CONCENTRATION_RANGES.items():
        tiers = tuple(
            BreakpointTier(aqi_low, aqi_high, float(conc_low), float(conc_high))
            for (aqi_low, aqi_high), (conc_low, conc_high) in zip(AQI_BANDS, ranges)
        )
        entry = PollutantBreakpoints(pollutant, Decimal(resolution), tiers)
        entry.validate()
        table[pollutant] = entry
    return MappingProxyType(table)


BREAKPOINTS: Mapping[str, PollutantBreakpoints] = _build_table()

SUPPORTED_POLLUTANTS: Sequence[str] = tuple(BREAKPOINTS)
