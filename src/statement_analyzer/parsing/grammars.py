"""Ordered line grammars for each statement dialect."""
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Optional, Pattern, Tuple

from ..utils.exceptions import AmbiguousAmountError
from .models import Dialect

UNIDENTIFIED_LOCATION = "Unidentified"
UNIDENTIFIED_MARKER = "S/I"

THOUSANDS_RUN = re.compile(r"[1-9]\d{0,2}(?:\.\d{3})+")
EMBEDDED_NUMERIC = re.compile(r"\S*\d\S*")


@dataclass(frozen=True)
class GrammarMatch:
    """Fields captured by one grammar from one line."""
    grammar: str
    location: Optional[str]
    date: str
    description: str
    amount: str


def select_ledger_amount(digit_run: str) -> str:
    """
    Pick the transaction amount out of a concatenated digit run.

    The largest thousands-separated run is the running balance and a run
    equal to the sum of the remaining ones is an accumulated total; the
    first run that is neither is the amount.

    Raises:
        AmbiguousAmountError: If no run qualifies
    """
    runs = THOUSANDS_RUN.findall(digit_run)
    if not runs:
        raise AmbiguousAmountError(f"No amount in digit run: {digit_run!r}")
    if len(runs) == 1:
        return runs[0]

    values = [Decimal(run.replace(".", "")) for run in runs]
    balance = max(values)
    non_balance = [v for v in values if v != balance]

    for run, value in zip(runs, values):
        if value == balance:
            continue
        accumulated = sum(non_balance) - value
        if len(non_balance) > 2 and value == accumulated:
            continue
        return run

    raise AmbiguousAmountError(f"Cannot isolate amount from digit run: {digit_run!r}")


@dataclass(frozen=True)
class Grammar:
    """
    Structural template for one line shape.

    The pattern is matched against the whole line; named groups
    `date`, `description` and `amount` (or `digits`) are required,
    `location` is optional.
    """
    name: str
    pattern: Pattern
    strip_numerics: bool = False
    amount_selector: Optional[Callable[[str], str]] = None
    allows_negative: bool = False

    def parse(self, content: str) -> Optional[GrammarMatch]:
        """
        Try this grammar on a line.

        Returns:
            GrammarMatch, or None if the line has a different shape

        Raises:
            AmbiguousAmountError: If the shape matched but no amount could be isolated
        """
        match = self.pattern.fullmatch(content)
        if not match:
            return None

        groups = match.groupdict()
        location = (groups.get("location") or "").strip() or None
        if location and location.upper() == UNIDENTIFIED_MARKER:
            location = UNIDENTIFIED_LOCATION

        description = groups["description"]
        if self.strip_numerics:
            description = EMBEDDED_NUMERIC.sub(" ", description)

        if self.amount_selector is not None:
            amount = self.amount_selector(groups["digits"])
        else:
            amount = groups["amount"]

        return GrammarMatch(
            grammar=self.name,
            location=location,
            date=groups["date"],
            description=description,
            amount=amount
        )


_DATE = r"(?P<date>\d{1,2}/\d{1,2}/\d{4})"
_TAIL = r"(?P<installment>\d{2}/\d{2})\s*(?P<period>[A-Za-z]+-\d{4})\s*"

# Las Condes 19/07/2025 Mercadopago *sociedad A2 89.990 89.990 01/01 sep-2025 89.990
SPACED = Grammar(
    name="spaced",
    pattern=re.compile(
        r"(?P<location>[A-Za-z\s]+?)\s+" + _DATE + r"\s+(?P<description>.+?)\s+"
        r"(?P<code>[A-Z]\d+)\s+(?P<charged>[\d.,]+)\s+(?P<total>[\d.,]+)\s+"
        r"(?P<installment>\d{2}/\d{2})\s+(?P<period>[A-Za-z]+-\d{4})\s+(?P<amount>[\d.,]+)"
    )
)

# Las Condes17/08/2025Mercadopago *lavuelta T7.1507.15001/01sep-20257.150
CONDENSED = Grammar(
    name="condensed",
    pattern=re.compile(
        r"(?P<location>[A-Za-z\s]+?)\s*" + _DATE + r"\s*(?P<description>.+?)\s?"
        r"(?P<code>T[A-Z]?\d*)(?P<charged>[\d.,]+)\s*" + _TAIL + r"(?P<amount>[\d.,]+)"
    )
)

# S/I27/07/2025Compra falabella plaza vespucio T37.90537.90501/01sep-202537.905
UNIDENTIFIED = Grammar(
    name="unidentified-location",
    pattern=re.compile(
        r"(?P<location>S/I)\s*" + _DATE + r"\s*(?P<description>.+?)\s*"
        r"(?:(?P<code>[A-Z]{1,2}\d*)\s*)?(?P<charged>[\d.,]+(?:\s+[\d.,]+)*)\s*"
        + _TAIL + r"(?P<amount>[\d.,]+)"
    )
)

# 27/07/2025Compra falabella T37.90537.90501/01sep-202537.905
CITYLESS = Grammar(
    name="cityless",
    pattern=re.compile(
        _DATE + r"\s*(?P<description>.+?)\s*"
        r"(?:(?P<code>[A-Z]{1,2}\d*)\s*)?(?P<charged>[\d.,]+(?:\s+[\d.,]+)*)\s*"
        + _TAIL + r"(?P<amount>[\d.,]+)"
    )
)

# 06/08/2025Anulacion pago automatico abono T17.040-17.04001/01sep-2025-17.040
REVERSAL = Grammar(
    name="reversal",
    pattern=re.compile(
        r"(?:(?P<location>S/I|[A-Za-z\s]+?)\s*)?" + _DATE + r"\s*(?P<description>.+?)\s*"
        r"(?:(?P<code>[A-Z]{1,2}\d*)\s*)?(?P<charged>-?[\d.,]+(?:\s+-?[\d.,]+|-[\d.,]+)*)\s*"
        + _TAIL + r"(?P<amount>-?[\d.,]+)"
    ),
    allows_negative=True
)

# Anything with a date and a trailing number
FALLBACK = Grammar(
    name="fallback",
    pattern=re.compile(
        r"(?P<location>[^\d]*?)\s*" + _DATE + r"\s*(?P<description>.*?)\s*"
        r"(?<![\d.,])(?P<amount>\d[\d.,]*)"
    ),
    strip_numerics=True
)

# 01/08Agustinas0797601101 Transf. GENERA SPA8000012.975.000
LEDGER_CODED = Grammar(
    name="ledger-coded",
    pattern=re.compile(
        r"(?P<date>\d{1,2}/\d{1,2})(?P<location>[A-Za-z\s]+?)(?P<code>\d+)\s"
        r"(?P<description>.+?)\s*(?P<digits>\d+.*\d{1,3}(?:\.\d{3})+)"
    ),
    amount_selector=select_ledger_amount
)

# 05/08AgustinasTraspaso Internet a T. Crédito2.561.017
LEDGER_LOCATED = Grammar(
    name="ledger-located",
    pattern=re.compile(
        r"(?P<date>\d{1,2}/\d{1,2})(?P<location>[A-Z][a-z]+)"
        r"(?P<description>.+?)(?P<amount>\d{1,3}(?:\.\d{3})+)"
    )
)

LEDGER_LOOSE = Grammar(
    name="ledger-loose",
    pattern=re.compile(
        r"(?P<date>\d{1,2}/\d{1,2})(?![/\d])\s*(?P<description>.+?)\s*"
        r"(?P<amount>\d{1,3}(?:\.\d{3})+)"
    )
)

# Most specific first; the first grammar that matches a line wins.
GRAMMARS: Dict[Dialect, Tuple[Grammar, ...]] = {
    Dialect.CREDIT_STATEMENT: (SPACED, CONDENSED, UNIDENTIFIED, CITYLESS, REVERSAL, FALLBACK),
    Dialect.RUNNING_LEDGER: (LEDGER_CODED, LEDGER_LOCATED, LEDGER_LOOSE),
}

GRAMMAR_ORDER: Dict[Dialect, Tuple[str, ...]] = {
    dialect: tuple(g.name for g in grammars) for dialect, grammars in GRAMMARS.items()
}
