"""
Climate risk detection from short-term weather forecasts.

Turns a WeatherSnapshot into at most one drought, flood and pest
assessment. Each risk type is an ordered tier table, most severe tier
first; the first tier whose condition holds decides the severity.
"""
import math
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from agroguard.models.risk import RiskAssessment, RiskType, Severity
from agroguard.models.weather import WeatherSnapshot
from agroguard.utils.helpers import all_finite
from agroguard.utils.logger import get_logger


# Weather thresholds
DRY_DAY_MAX_RAIN_MM = 5.0
HEAVY_RAIN_MIN_MM = 30.0
PEST_OPTIMAL_TEMP_C = (25.0, 32.0)
HIGH_HUMIDITY_PCT = 70.0

# Raw degree distance, not geodesic (~111 km at the equator)
NEAR_LOCATION_DEGREES = 1.0


class Tier(NamedTuple):
    """One row of a severity table."""
    severity: Severity
    condition: Callable[[Dict[str, Any]], bool]
    description: str


def _in_range(value: float, low: float, high: float) -> bool:
    return low <= value <= high


DROUGHT_TIERS: Tuple[Tier, ...] = (
    Tier(Severity.SEVERE,
         lambda s: s["dry_days"] >= 6 and s["total_rainfall"] < 10,
         "Critical drought conditions: {dry_days} dry days forecast with only "
         "{total_rainfall:.1f}mm total rainfall expected"),
    Tier(Severity.HIGH,
         lambda s: s["dry_days"] >= 5 or s["total_rainfall"] < 15,
         "High drought risk: {dry_days} dry days forecast with minimal rainfall ({total_rainfall:.1f}mm)"),
    Tier(Severity.MEDIUM,
         lambda s: s["dry_days"] >= 4 or s["total_rainfall"] < 25,
         "Moderate drought risk: {dry_days} dry days with low rainfall ({total_rainfall:.1f}mm)"),
    Tier(Severity.LOW,
         lambda s: s["dry_days"] >= 3,
         "Low drought risk: {dry_days} dry days expected"),
)

FLOOD_TIERS: Tuple[Tier, ...] = (
    Tier(Severity.SEVERE,
         lambda s: s["max_daily_rain"] > 100 or s["heavy_rain_days"] >= 3,
         "Severe flood warning: Heavy rainfall expected (max {max_daily_rain:.1f}mm/day)"),
    Tier(Severity.HIGH,
         lambda s: s["max_daily_rain"] > 70 or (s["heavy_rain_days"] >= 2 and s["total_rainfall"] > 150),
         "High flood risk: Significant rainfall forecast ({total_rainfall:.1f}mm total)"),
    Tier(Severity.MEDIUM,
         lambda s: s["max_daily_rain"] > 50 or s["total_rainfall"] > 120,
         "Moderate flood risk: Heavy rain periods expected ({max_daily_rain:.1f}mm peak)"),
    Tier(Severity.LOW,
         lambda s: s["max_daily_rain"] > 35,
         "Low flood risk: Some heavy rain expected"),
)

PEST_TIERS: Tuple[Tier, ...] = (
    Tier(Severity.HIGH,
         lambda s: (_in_range(s["avg_temp"], 27, 31) and s["avg_humidity"] > 75
                    and s["optimal_temp_days"] >= 5),
         "High pest risk: Optimal conditions for pest activity "
         "({avg_temp:.1f}°C, {avg_humidity:.0f}% humidity)"),
    Tier(Severity.MEDIUM,
         lambda s: (_in_range(s["avg_temp"], 25, 32) and s["avg_humidity"] > 70
                    and s["optimal_temp_days"] >= 3),
         "Moderate pest risk: Favorable conditions for pest development "
         "({avg_temp:.1f}°C, {avg_humidity:.0f}% humidity)"),
    Tier(Severity.LOW,
         lambda s: (_in_range(s["avg_temp"], 25, 32)
                    and (s["avg_humidity"] > 65 or s["high_humidity_days"] >= 2)),
         "Low pest risk: Some favorable conditions present"),
)


def evaluate_tiers(tiers: Iterable[Tier], stats: Dict[str, Any]) -> Optional[Tuple[Severity, str]]:
    """
    Walk a severity table in order and return the first match.

    Args:
        tiers: Ordered tiers, most severe first
        stats: Values the tier conditions and descriptions refer to

    Returns:
        (severity, description) of the first satisfied tier, or None
    """
    for tier in tiers:
        if tier.condition(stats):
            return tier.severity, tier.description.format(**stats)
    return None


def _coordinates(entry: Any) -> Tuple[float, float]:
    if isinstance(entry, dict):
        return float(entry["latitude"]), float(entry["longitude"])
    return float(entry.latitude), float(entry.longitude)


def is_near_location(lat1: float, lon1: float, lat2: float, lon2: float) -> bool:
    """Euclidean distance in degree space below NEAR_LOCATION_DEGREES."""
    return math.sqrt((lat1 - lat2) ** 2 + (lon1 - lon2) ** 2) < NEAR_LOCATION_DEGREES


def count_nearby_farmers(roster: Iterable[Any], latitude: float, longitude: float) -> int:
    """
    Count roster entries near a location.

    Args:
        roster: Entries with latitude/longitude (attributes or mapping keys)
        latitude: Reference latitude
        longitude: Reference longitude

    Returns:
        Number of entries within NEAR_LOCATION_DEGREES
    """
    return sum(
        1 for entry in roster
        if is_near_location(*_coordinates(entry), latitude, longitude)
    )


def count_active_warnings(assessments: Iterable[RiskAssessment]) -> int:
    """Number of high or severe assessments."""
    return sum(1 for risk in assessments if risk.is_active_warning)


class RiskDetector:
    """
    Detects drought, flood and pest risk from a weather snapshot.

    Holds no state besides its logger, so one instance can serve any
    number of concurrent callers.
    """

    def __init__(self, logger=None):
        """
        Initialize risk detector

        Args:
            logger: Logger instance
        """
        self.logger = logger or get_logger("agroguard.risk")

    def detect_risks(self, snapshot: WeatherSnapshot) -> List[RiskAssessment]:
        """
        Detect all risks for a snapshot.

        Non-finite readings are not rejected: NaN fails every threshold
        comparison, so the tiers that depend on it never fire.

        Args:
            snapshot: Current conditions and daily forecast

        Returns:
            Assessments in drought, flood, pest order (at most one each)
        """
        if not all_finite(snapshot.numeric_values()):
            self.logger.warning(
                f"Snapshot for {snapshot.location} contains non-finite values; "
                f"affected risk tiers will not trigger"
            )

        risks = []
        for detect in (self.detect_drought, self.detect_flood, self.detect_pest):
            risk = detect(snapshot)
            if risk is not None:
                risks.append(risk)

        self.logger.debug(
            f"Detected {len(risks)} risk(s) for {snapshot.location} "
            f"from {len(snapshot.forecast)} forecast day(s)"
        )
        return risks

    def get_risks_with_farmer_count(
        self,
        snapshot: WeatherSnapshot,
        roster: Iterable[Any]
    ) -> List[RiskAssessment]:
        """
        Detect risks and fill in how many roster farmers are nearby.

        Args:
            snapshot: Current conditions and daily forecast
            roster: Farmer entries with latitude/longitude

        Returns:
            Assessments with affected_farmers set
        """
        risks = self.detect_risks(snapshot)
        if not risks:
            return risks

        affected = count_nearby_farmers(roster, snapshot.latitude, snapshot.longitude)
        return [risk.model_copy(update={"affected_farmers": affected}) for risk in risks]

    def detect_drought(self, snapshot: WeatherSnapshot) -> Optional[RiskAssessment]:
        rainfall = self._daily_rainfall(snapshot)
        stats = {
            "dry_days": int(np.count_nonzero(rainfall < DRY_DAY_MAX_RAIN_MM)),
            "total_rainfall": float(rainfall.sum()),
        }

        # Without a single dry day there is nothing to call a drought
        if stats["dry_days"] == 0:
            return None

        return self._assessment(RiskType.DROUGHT, snapshot, evaluate_tiers(DROUGHT_TIERS, stats))

    def detect_flood(self, snapshot: WeatherSnapshot) -> Optional[RiskAssessment]:
        rainfall = self._daily_rainfall(snapshot)
        stats = {
            "heavy_rain_days": int(np.count_nonzero(rainfall > HEAVY_RAIN_MIN_MM)),
            # np.max propagates NaN
            "max_daily_rain": float(rainfall.max()) if rainfall.size else 0.0,
            "total_rainfall": float(rainfall.sum()),
        }
        return self._assessment(RiskType.FLOOD, snapshot, evaluate_tiers(FLOOD_TIERS, stats))

    def detect_pest(self, snapshot: WeatherSnapshot) -> Optional[RiskAssessment]:
        daily_temp = np.array([day.mean_temp for day in snapshot.forecast], dtype=float)
        daily_humidity = np.array([day.humidity for day in snapshot.forecast], dtype=float)
        samples = len(snapshot.forecast) + 1

        low, high = PEST_OPTIMAL_TEMP_C
        stats = {
            "avg_temp": float((snapshot.temperature + daily_temp.sum()) / samples),
            "avg_humidity": float((snapshot.humidity + daily_humidity.sum()) / samples),
            "optimal_temp_days": int(np.count_nonzero((daily_temp >= low) & (daily_temp <= high))),
            "high_humidity_days": int(np.count_nonzero(daily_humidity > HIGH_HUMIDITY_PCT)),
        }
        return self._assessment(RiskType.PEST, snapshot, evaluate_tiers(PEST_TIERS, stats))

    @staticmethod
    def _daily_rainfall(snapshot: WeatherSnapshot) -> np.ndarray:
        return np.array([day.rainfall for day in snapshot.forecast], dtype=float)

    @staticmethod
    def _assessment(
        risk_type: RiskType,
        snapshot: WeatherSnapshot,
        match: Optional[Tuple[Severity, str]]
    ) -> Optional[RiskAssessment]:
        if match is None:
            return None
        severity, description = match
        return RiskAssessment(
            type=risk_type,
            severity=severity,
            location=snapshot.location,
            description=description,
        )


def detect_risks(snapshot: WeatherSnapshot) -> List[RiskAssessment]:
    """Detect risks with a freshly constructed detector."""
    return RiskDetector().detect_risks(snapshot)


def get_risks_with_farmer_count(snapshot: WeatherSnapshot, roster: Iterable[Any]) -> List[RiskAssessment]:
    """Detect risks and count nearby roster farmers."""
    return RiskDetector().get_risks_with_farmer_count(snapshot, roster)
