__version__ = "1.0.0"

from .calendar_utils import MONSOON_MONTHS, build_history_calendar, day_of_year, is_monsoon
from .simulation.estimator import PanelConfiguration, PredictionResult, WeatherSnapshot, YieldEstimator
from .simulation.history import HistoricalRecord, HistoricalSeriesSynthesizer
from .simulation.locations import DEFAULT_PROFILES, ClimateProfileTable, LocationClimateProfile
from .simulation.requirements import Appliance, RequirementsCalculator, summarize_load
from .weather import OpenWeatherClient
from .result_builder import ResultBuilder
from .application import SolarApplication

__all__ = [
    "__version__",
    "MONSOON_MONTHS",
    "build_history_calendar",
    "day_of_year",
    "is_monsoon",
    "PanelConfiguration",
    "PredictionResult",
    "WeatherSnapshot",
    "YieldEstimator",
    "HistoricalRecord",
    "HistoricalSeriesSynthesizer",
    "DEFAULT_PROFILES",
    "ClimateProfileTable",
    "LocationClimateProfile",
    "Appliance",
    "RequirementsCalculator",
    "summarize_load",
    "OpenWeatherClient",
    "ResultBuilder",
    "SolarApplication",
]
