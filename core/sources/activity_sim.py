"""Weather-seeded stand-in for fitness data.

There is no fitness API behind the ACTIVITY source: sleep, steps, and stress are
simulated, with step counts nudged by current weather.  The random generator is
injected so tests (and callers that want reproducible output) can seed it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class WeatherConditions:
    temperature: float
    humidity: float
    wind_speed: float
    daylight_hours: Optional[float] = None

    def is_pleasant(self) -> bool:
        """Mild, calm, dry weather that encourages walking."""
        return 15 <= self.temperature <= 25 and self.wind_speed < 20 and self.humidity < 70

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "daylightHours": self.daylight_hours,
        }


class ActivitySimulator:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def simulate(self, weather: Optional[WeatherConditions] = None) -> Dict[str, float]:
        """Return an ACTIVITY payload; unknown weather counts as unpleasant."""
        rng = self.rng
        if weather is not None and weather.is_pleasant():
            steps = 6000 + rng.randrange(4000)
        else:
            steps = 2000 + rng.randrange(3000)
        sleep_duration = 5 + rng.random() * 3
        sleep_quality = 0.5 + rng.random() * 0.3
        stress_level = 0.4 + rng.random() * 0.4
        return {
            "sleepDuration": round(sleep_duration, 1),
            "sleepQuality": round(sleep_quality, 2),
            "dailySteps": steps,
            "activeMinutes": steps // 100,
            "stressLevel": round(stress_level, 2),
            "restingHeartRate": 60 + rng.randrange(20),
        }


def interpret_activity(payload: Dict[str, float]) -> Dict[str, str]:
    sleep = payload["sleepDuration"]
    steps = payload["dailySteps"]
    stress = payload["stressLevel"]
    if sleep < 6:
        sleep_status = "Sleep Deprived"
    elif sleep < 7:
        sleep_status = "Insufficient Sleep"
    else:
        sleep_status = "Healthy Sleep"
    if steps < 5000:
        activity_status = "Sedentary"
    elif steps < 8000:
        activity_status = "Lightly Active"
    else:
        activity_status = "Active"
    if sleep < 6:
        advice = "Sleep duration below recommended 7-9 hours - prioritize rest tonight"
    elif steps < 5000:
        advice = "Low activity detected - consider a 15-minute walk"
    else:
        advice = "Health metrics look good - maintain current habits"
    return {
        "sleepStatus": sleep_status,
        "activityStatus": activity_status,
        "stressStatus": "High Stress" if stress > 0.7 else "Moderate Stress",
        "recommendation": advice,
        "trend": (
            f"Sleep: {'declining' if sleep < 6.5 else 'stable'}, "
            f"Activity: {'low' if steps < 5000 else 'moderate'}, "
            f"Stress: {'increasing' if stress > 0.7 else 'moderate'}"
        ),
    }
