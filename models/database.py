"""
Database module for the Google Sheets event store.

Provides:
- EventSheet: the `Events` worksheet as an ordered table of event rows
"""

from typing import List, Optional

import gspread
from gspread.exceptions import WorksheetNotFound
from gspread.utils import ValueInputOption, ValueRenderOption

from config import EVENT_HEADERS, ScheduleConfig

LAST_COLUMN = chr(ord('A') + len(EVENT_HEADERS) - 1)  # 'H'

# Start/end columns are declared TEXT so the sheet never turns "09:00" into a time
TIME_COLUMNS_RANGE = 'C:D'


class EventSheet:
    """Manages the `Events` worksheet: header row plus one row per event

    Row indices used by this class are 0-based positions in `read_all()`
    output. They shift after every delete, so callers must re-locate rows
    by event id instead of remembering positions.
    """

    def __init__(self, config: ScheduleConfig, client: Optional[gspread.Client] = None):
        self.config = config
        self.gc = client
        self.sh = None
        self.ws = None

    def _connect(self):
        """Connect to Google Sheets"""
        if self.gc is None:
            self.gc = gspread.service_account(filename=self.config.SERVICE_ACCOUNT_FILE)
        self.sh = self.gc.open_by_key(self.config.GOOGLE_SHEET_ID)
        print("✅ Connected to Google Sheets")

    def initialize(self):
        """Ensure the worksheet and its header exist

        Safe to call before every operation; only the first call talks to
        the API.
        """
        if self.ws is not None:
            return self.ws

        if self.sh is None:
            self._connect()

        sheet_name = self.config.EVENTS_SHEET_NAME
        try:
            ws = self.sh.worksheet(sheet_name)
        except WorksheetNotFound:
            ws = self.sh.add_worksheet(title=sheet_name, rows=1000, cols=len(EVENT_HEADERS))
            print(f"📄 Created '{sheet_name}' sheet")

        headers = ws.row_values(1)
        if not headers:
            self._setup_headers(ws)
        elif headers != EVENT_HEADERS:
            print(f"⚠️ '{sheet_name}' sheet has unexpected headers")
            print(f"   EXPECTED: {EVENT_HEADERS}")
            print(f"   ACTUAL:   {headers}")

        self.ws = ws
        return ws

    def _setup_headers(self, ws):
        """Write the bold, frozen header row and declare time columns as text"""
        ws.update(
            range_name=f'A1:{LAST_COLUMN}1',
            values=[EVENT_HEADERS],
            value_input_option=ValueInputOption.raw
        )
        ws.format(f'A1:{LAST_COLUMN}1', {'textFormat': {'bold': True}})
        ws.freeze(rows=1)
        ws.format(TIME_COLUMNS_RANGE, {'numberFormat': {'type': 'TEXT'}})

    def append_row(self, fields: List[str]):
        """Add one row after the last event"""
        ws = self.initialize()
        ws.append_row(fields, value_input_option=ValueInputOption.raw)

    def read_all(self) -> List[list]:
        """Get every data row (header excluded) as raw typed cells"""
        ws = self.initialize()
        values = ws.get_all_values(value_render_option=ValueRenderOption.unformatted)
        return values[1:]

    def update_row(self, row_index: int, fields: List[str]):
        """Overwrite all cells of one event row in a single write"""
        ws = self.initialize()
        sheet_row = row_index + 2  # 1-indexed, after header
        ws.update(
            range_name=f'A{sheet_row}:{LAST_COLUMN}{sheet_row}',
            values=[fields],
            value_input_option=ValueInputOption.raw
        )

    def delete_row(self, row_index: int):
        """Remove one event row; later rows shift up"""
        ws = self.initialize()
        ws.delete_rows(row_index + 2)
