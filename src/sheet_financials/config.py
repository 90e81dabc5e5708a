"""
Configuration for the spreadsheet financials ingestion

Settings for the SheetDB endpoint serving one spreadsheet tab per company,
plus the pacing and retry policy of the request gateway.
"""

import os
from dataclasses import dataclass
from typing import Dict

from dotenv import load_dotenv

from src.utils.core.retry import RetryConfig

# Load environment variables from a .env file if present
load_dotenv()


@dataclass
class SheetConfig:
    """Configuration for the SheetDB spreadsheet API"""

    # API Configuration
    BASE_URL: str = os.getenv("SHEETDB_BASE_URL", "https://sheetdb.io/api/v1")
    SHEET_ID: str = os.getenv("SHEETDB_SHEET_ID", "h383llrajzdr9")
    API_TOKEN: str = os.getenv("SHEETDB_API_TOKEN", "")
    TAB_PARAM: str = "sheet"
    TAB_PREFIX: str = os.getenv("SHEETDB_TAB_PREFIX", "$")

    # Pacing (seconds between outgoing call starts)
    PACING_GAP: float = float(os.getenv("SHEETDB_PACING_GAP", "0.12"))

    # Retry policy, only 429 and 5xx responses are retried
    RETRY_ATTEMPTS: int = int(os.getenv("SHEETDB_RETRY_ATTEMPTS", "4"))
    RETRY_BASE_DELAY: float = 0.25  # seconds
    BACKOFF_FACTOR: float = 2.0

    # Timeouts
    REQUEST_TIMEOUT: int = int(os.getenv("SHEETDB_REQUEST_TIMEOUT", "15"))  # seconds
    CONNECTION_TIMEOUT: int = 10  # seconds

    @property
    def headers(self) -> Dict[str, str]:
        """Get HTTP headers for API requests"""
        headers = {
            "Accept": "application/json",
            "User-Agent": "sheet-financials/1.0",
        }
        if self.API_TOKEN:
            headers["Authorization"] = f"Bearer {self.API_TOKEN}"
        return headers

    @property
    def sheet_url(self) -> str:
        """Full URL of the spreadsheet endpoint"""
        return f"{self.BASE_URL.rstrip('/')}/{self.SHEET_ID}"

    @property
    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.RETRY_ATTEMPTS,
            base_delay=self.RETRY_BASE_DELAY,
            backoff_factor=self.BACKOFF_FACTOR,
            jitter=False,
        )

    def tab_name(self, company: str) -> str:
        """Spreadsheet tab name for a company identifier, e.g. ``$AAPL``"""
        return f"{self.TAB_PREFIX}{company}"

    def get_request_params(self, company: str) -> Dict[str, str]:
        return {self.TAB_PARAM: self.tab_name(company)}


# Global configuration instance
sheet_config = SheetConfig()
