"""Pydantic schemas for trades sent to the statistics API.

Malformed values are normalised to None rather than rejected: a pnl that is
not a finite number makes the trade open, an unparsable date sorts last.
"""

import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from journal.models.trade import TradeRecord, normalize_pnl, normalize_date
from journal.services.trade_calculator import calculate_pnl
from journal.utils.constants import VALID_SIDES

logger = logging.getLogger(__name__)


class TradeIn(BaseModel):
    trade_date: datetime | None = None
    side: str | None = None
    pnl: float | None = None
    symbol: str | None = None
    entry_price: float | None = None
    exit_price: float | None = None
    position_size: float | None = None
    stop_loss: float | None = None
    exit_date: datetime | None = None
    leverage: float | None = None  # below 1 is treated as unset

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("pnl", "entry_price", "exit_price", "position_size", "stop_loss", "leverage", mode="before")
    @classmethod
    def _coerce_number(cls, value, info):
        number = normalize_pnl(value)
        if info.field_name == "leverage" and number is not None and number < 1:
            logger.warning(f"Ignoring leverage below 1: {value!r}")
            return None
        if number is None and value is not None:
            logger.warning(f"Ignoring non-numeric {info.field_name}={value!r}")
        return number

    @field_validator("trade_date", "exit_date", mode="before")
    @classmethod
    def _coerce_date(cls, value, info):
        dt = normalize_date(value)
        if dt is None and value is not None:
            logger.warning(f"Ignoring unparsable {info.field_name}={value!r}")
        return dt

    @field_validator("side", mode="before")
    @classmethod
    def _coerce_side(cls, value):
        if not isinstance(value, str):
            return None
        side = value.strip().upper()
        return side if side in VALID_SIDES else None

    def resolved_pnl(self) -> float | None:
        """Explicit pnl, else derived from prices when the trade has an exit."""
        if self.pnl is not None:
            return self.pnl
        if (
            self.side is None
            or self.entry_price is None
            or self.exit_price is None
            or self.position_size is None
        ):
            return None
        return calculate_pnl(self.side, self.entry_price, self.exit_price, self.position_size)

    def to_record(self) -> TradeRecord:
        return TradeRecord(
            trade_date=self.trade_date,
            pnl=self.resolved_pnl(),
            side=self.side,
            symbol=self.symbol,
            entry_price=self.entry_price,
            exit_price=self.exit_price,
            position_size=self.position_size,
            stop_loss=self.stop_loss,
            exit_date=self.exit_date,
            leverage=self.leverage or 1.0,
        )


class StatsRequest(BaseModel):
    trades: list[TradeIn] = []

    def records(self) -> list[TradeRecord]:
        return [t.to_record() for t in self.trades]
