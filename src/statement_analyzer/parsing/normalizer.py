"""Locale normalization of date, amount and description tokens."""
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

import pandas as pd
from dateutil import parser as date_parser

from ..utils.exceptions import InvalidRecordError

# Spreadsheet serial dates count days from this epoch
SPREADSHEET_EPOCH = date(1899, 12, 30)

MIN_DESCRIPTION_LENGTH = 3


class LocaleNormalizer:
    """
    Converts locale-formatted tokens into canonical values.

    Statements use day-first dates and `.` as thousands separator, so
    "89.990" is eighty-nine thousand nine hundred ninety.
    """

    DATE_TOKEN = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{4}))?$")
    ROW_AMOUNT_NOISE = re.compile(r"[$,\s]")

    def __init__(self, reference_year: Optional[int] = None):
        """
        Initialize normalizer.

        Args:
            reference_year: Year assumed for DD/MM tokens (defaults to current year)
        """
        self.reference_year = reference_year or date.today().year

    def parse_date(self, token: str) -> date:
        """
        Parse a DD/MM/YYYY or DD/MM token.

        Args:
            token: Date token as found in the statement

        Returns:
            Calendar date

        Raises:
            InvalidRecordError: If the token is malformed or not a real date
        """
        match = self.DATE_TOKEN.match(token.strip())
        if not match:
            raise InvalidRecordError(f"Malformed date token: {token!r}")

        day, month = int(match.group(1)), int(match.group(2))
        year = int(match.group(3)) if match.group(3) else self.reference_year

        if not (1 <= day <= 31 and 1 <= month <= 12):
            raise InvalidRecordError(f"Date out of range: {token!r}")

        try:
            parsed = date(year, month, day)
        except ValueError:
            raise InvalidRecordError(f"Not a calendar date: {token!r}")

        # e.g. 31/04 must not roll over into May
        if (parsed.day, parsed.month, parsed.year) != (day, month, year):
            raise InvalidRecordError(f"Date does not round-trip: {token!r}")

        return parsed

    @staticmethod
    def format_date(value: date, with_year: bool = True) -> str:
        """Render a date back into the statement's DD/MM[/YYYY] form."""
        if with_year:
            return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"
        return f"{value.day:02d}/{value.month:02d}"

    def parse_amount(self, token: str, allow_negative: bool = False) -> Decimal:
        """
        Parse a thousands-separated amount token.

        Args:
            token: Amount token, e.g. "89.990" or "-17.040"
            allow_negative: Accept a leading minus sign (reversals)

        Returns:
            Parsed amount (negative only when allowed)

        Raises:
            InvalidRecordError: If the amount is non-numeric, zero, or wrongly signed
        """
        cleaned = token.strip().replace(".", "").replace(",", ".")
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise InvalidRecordError(f"Non-numeric amount: {token!r}")

        if not amount.is_finite():
            raise InvalidRecordError(f"Non-numeric amount: {token!r}")

        if amount == 0 or (amount < 0 and not allow_negative):
            raise InvalidRecordError(f"Amount must be positive: {token!r}")

        return amount

    @staticmethod
    def clean_description(text: str) -> str:
        """
        Collapse whitespace and validate description length.

        Raises:
            InvalidRecordError: If fewer than three characters remain
        """
        cleaned = re.sub(r"\s+", " ", text or "").strip()
        if len(cleaned) < MIN_DESCRIPTION_LENGTH:
            raise InvalidRecordError(f"Description too short: {text!r}")
        return cleaned

    def parse_row_date(self, value) -> date:
        """
        Parse a date cell from a delimited or spreadsheet row.

        Accepts date/datetime objects, spreadsheet serial numbers, locale
        DD/MM/YYYY strings and any other day-first textual date.

        Raises:
            InvalidRecordError: For empty cells (None, NaN, NaT) and unparseable values
        """
        if is_missing(value):
            raise InvalidRecordError("Missing date")

        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return SPREADSHEET_EPOCH + timedelta(days=int(value))
            except (OverflowError, ValueError):
                # e.g. 20250315 exported as an integer, far past any serial day
                raise InvalidRecordError(f"Serial date out of range: {value!r}")

        text = str(value).strip()
        if self.DATE_TOKEN.match(text):
            return self.parse_date(text)

        try:
            return date_parser.parse(text, dayfirst=True).date()
        except (ValueError, OverflowError):
            raise InvalidRecordError(f"Unparseable date: {value!r}")

    def parse_row_amount(self, value) -> Decimal:
        """
        Parse an amount cell from a row, keeping its sign.

        Strings drop currency symbols, commas and whitespace; `.` is the
        decimal point in exported files. Empty cells count as zero.

        Raises:
            InvalidRecordError: If the value is non-numeric or infinite
        """
        if is_missing(value) or value == "":
            return Decimal(0)

        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            amount = Decimal(str(value))
        else:
            cleaned = self.ROW_AMOUNT_NOISE.sub("", str(value))
            if not cleaned:
                return Decimal(0)
            try:
                amount = Decimal(cleaned)
            except InvalidOperation:
                raise InvalidRecordError(f"Non-numeric amount: {value!r}")

        if not amount.is_finite():
            raise InvalidRecordError(f"Non-numeric amount: {value!r}")
        return amount


def is_missing(value) -> bool:
    """None, NaN and NaT cells as produced by pandas readers."""
    return value is None or (pd.api.types.is_scalar(value) and bool(pd.isna(value)))
