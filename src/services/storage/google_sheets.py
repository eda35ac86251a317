"""
Google Sheets Storage Implementation

Remote replication target for savings.

DESIGN DECISION: Google Sheets is used as the remote backend because:
1. Users can look at their savings directly in a spreadsheet
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- Not suitable for high-volume data (fine for personal use)
- No transactions; a batch append either lands or raises
- Limited query capabilities (we filter in Python)

Only savings are stored here. Incomes have no remote implementation.
"""

from datetime import datetime
from typing import Optional

import gspread
import structlog
from google.oauth2.service_account import Credentials
from pydantic import ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential

from src.config import GoogleSheetsSettings, get_settings
from src.models.saving import Saving
from src.services.storage.interface import (
    SavingStorageInterface,
    StorageConnectionError,
    StorageError,
)


logger = structlog.get_logger(__name__)

# Column mappings for Savings sheet
SAVING_COLUMNS = [
    "id",
    "amount",
    "hours",
    "month",
    "created_at",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_savings_sheet(self) -> gspread.Worksheet:
        """Get or create the Savings worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.savings_sheet_name)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=self._settings.savings_sheet_name,
                rows=1000,
                cols=len(SAVING_COLUMNS),
            )
            sheet.append_row(SAVING_COLUMNS)
        return sheet


class GoogleSheetsSavingStorage(SavingStorageInterface):
    """
    Google Sheets implementation of remote saving storage.

    Savings are stored as rows in a worksheet, one saving per row.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _row_to_saving(self, row: list) -> Saving:
        """Convert a spreadsheet row to a Saving."""
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return Saving(
            id=safe_get(0),
            amount=float(safe_get(1, "0")),
            hours=float(safe_get(2, "0")),
            month=safe_get(3),
            created_at=datetime.fromisoformat(safe_get(4)),
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def save_saving(self, saving: Saving) -> bool:
        """Append one saving to the sheet."""
        try:
            sheet = self._client.get_savings_sheet()
            sheet.append_row(saving.to_sheets_row(), value_input_option="RAW")
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save saving: {e}")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def save_savings(self, savings: list[Saving]) -> bool:
        """Append a batch of savings in one API call."""
        if not savings:
            return True
        try:
            sheet = self._client.get_savings_sheet()
            sheet.append_rows(
                [saving.to_sheets_row() for saving in savings],
                value_input_option="RAW",
            )
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save savings: {e}")

    async def list_savings(self, month: Optional[str] = None) -> list[Saving]:
        """List savings, newest first, optionally for one month label."""
        try:
            sheet = self._client.get_savings_sheet()
            all_rows = sheet.get_all_values()[1:]  # Skip header
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to list savings: {e}")

        savings = []
        for row in all_rows:
            if not row or not row[0]:  # Skip empty rows
                continue

            try:
                saving = self._row_to_saving(row)
            except (ValueError, ValidationError) as e:
                logger.warning("malformed_saving_row", saving_id=row[0], error=str(e))
                continue

            if month is not None and saving.month != month:
                continue
            savings.append(saving)

        savings.sort(key=lambda s: s.created_at, reverse=True)
        return savings
