"""
Risk monitor service.
Periodically fetches forecasts for configured locations and keeps the
latest detected risks in memory.
"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from agroguard.models.risk import RiskAssessment
from agroguard.risk.detector import RiskDetector
from agroguard.utils.errors import WeatherProviderError
from agroguard.utils.logger import get_logger
from api.services.weather_service import WeatherService


class RiskMonitor:
    """
    Scheduler service scanning monitored locations for climate risks.
    """

    def __init__(
        self,
        weather_service: WeatherService,
        detector: RiskDetector,
        roster: Optional[List[Any]] = None,
        interval_seconds: int = 3600,
        logger=None
    ):
        """
        Initialize risk monitor.

        Args:
            weather_service: Source of weather snapshots
            detector: Risk detector
            roster: Farmer entries used for affected-farmer counts
            interval_seconds: Seconds between scans
            logger: Logger instance
        """
        self.weather_service = weather_service
        self.detector = detector
        self.roster = list(roster or [])
        self.interval_seconds = interval_seconds
        self.logger = logger or get_logger("agroguard.monitor")
        self.running = False
        self.task = None

        self.locations = []
        self.latest: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def location_key(latitude: float, longitude: float) -> str:
        return f"{latitude}_{longitude}"

    def add_location(self, latitude: float, longitude: float, name: Optional[str] = None):
        """
        Add a location to scan.

        Args:
            latitude: Latitude coordinate
            longitude: Longitude coordinate
            name: Location label
        """
        key = self.location_key(latitude, longitude)
        if key not in [loc['key'] for loc in self.locations]:
            self.locations.append({
                'key': key,
                'name': name or key,
                'latitude': latitude,
                'longitude': longitude
            })

    def remove_location(self, latitude: float, longitude: float):
        key = self.location_key(latitude, longitude)
        self.locations = [loc for loc in self.locations if loc['key'] != key]
        self.latest.pop(key, None)

    async def scan_location(self, location: Dict[str, Any]) -> List[RiskAssessment]:
        """
        Fetch the forecast for one location and record its risks.

        Args:
            location: Location entry created by add_location

        Returns:
            Detected risks (empty when the fetch failed)
        """
        checked_at = datetime.now(timezone.utc)
        try:
            snapshot = await self.weather_service.get_snapshot(
                location['latitude'], location['longitude'], location['name']
            )
        except WeatherProviderError as e:
            self.logger.error(f"✗ Failed to fetch weather for {location['name']}: {e}")
            self.latest[location['key']] = {
                'location': location['name'],
                'latitude': location['latitude'],
                'longitude': location['longitude'],
                'checked_at': checked_at,
                'risks': [],
                'error': str(e),
            }
            return []

        risks = self.detector.get_risks_with_farmer_count(snapshot, self.roster)
        self.latest[location['key']] = {
            'location': location['name'],
            'latitude': location['latitude'],
            'longitude': location['longitude'],
            'checked_at': checked_at,
            'risks': risks,
            'error': None,
        }
        self.logger.info(f"✓ {location['name']}: {len(risks)} risk(s) detected")
        return risks

    async def scan_all(self):
        """Scan every configured location concurrently."""
        if not self.locations:
            self.logger.warning("⚠️  No locations configured for risk monitoring")
            return
        await asyncio.gather(*(self.scan_location(loc) for loc in self.locations))

    async def _monitor_loop(self):
        """
        Main loop that runs until stopped.
        """
        self.logger.info(f"🌤️  Risk monitor started (interval: {self.interval_seconds}s)")

        while self.running:
            try:
                await self.scan_all()
                await asyncio.sleep(self.interval_seconds)

            except asyncio.CancelledError:
                self.logger.info("🛑 Risk monitor cancelled")
                break
            except Exception as e:
                self.logger.error(f"✗ Risk monitor loop error: {e}")
                await asyncio.sleep(self.interval_seconds)

    async def start(self):
        """
        Start the risk monitor.
        """
        if self.running:
            self.logger.warning("Risk monitor is already running")
            return

        self.running = True
        self.task = asyncio.create_task(self._monitor_loop())

    async def stop(self):
        """
        Stop the risk monitor.
        """
        if not self.running:
            return

        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
        self.logger.info("🛑 Risk monitor stopped")
