"""Runtime settings for ingestion, search and reporting.

Values come from the environment (or a .env file next to the working directory): CSV input
paths, the maximum layover in hours, the HTML report path, log level and progress bars.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


@dataclass(slots=True)
class Settings:
    clients_csv: Path = Path(os.getenv("CLIENTS_CSV", "clients.csv"))
    flights_csv: Path = Path(os.getenv("FLIGHTS_CSV", "flights.csv"))
    max_layover_hours: float = float(os.getenv("MAX_LAYOVER_HOURS", "6"))
    output_html: Path = Path(os.getenv("OUTPUT_HTML", "itineraries.html"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    show_progress: bool = os.getenv("SHOW_PROGRESS", "1").lower() not in ("0", "false", "no")

    @property
    def max_layover(self) -> timedelta:
        return timedelta(hours=self.max_layover_hours)


settings = Settings()
