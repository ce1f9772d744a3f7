import math
import re
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from . import bit_layout
from .errors import InvalidInputError, InvalidSnowflakeError, InvalidTimestampError

DEFAULT_EPOCH_MS = 1420070400000  # 2015-01-01T00:00:00.000Z
DEFAULT_WORKER_ID = 1
DEFAULT_PROCESS_ID = 0

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

TimestampLike = Union[int, float, datetime, str]

_SNOWFLAKE_RE = re.compile(r"0|[1-9][0-9]*")
_MAX_SNOWFLAKE_DIGITS = len(str(bit_layout.MAX_SNOWFLAKE))


def datetime_to_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - UNIX_EPOCH) // timedelta(milliseconds=1)


def ms_to_datetime(value: int) -> datetime:
    return UNIX_EPOCH + timedelta(milliseconds=value)


@dataclass(frozen=True)
class DeconstructedSnowflake:
    timestamp: int
    epoch: int
    date: datetime
    worker_id: int
    process_id: int
    increment: int
    binary: str
    snowflake: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "epoch": self.epoch,
            "date": self.date.isoformat().replace("+00:00", "Z"),
            "worker_id": self.worker_id,
            "process_id": self.process_id,
            "increment": self.increment,
            "binary": self.binary,
            "snowflake": self.snowflake,
        }


@dataclass
class GeneratorState:
    epoch: int = DEFAULT_EPOCH_MS
    increment: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def next_increment(self) -> int:
        """Return the increment for this call and advance the counter.

        Once the counter has reached 4095 it starts over at 0, so the
        increment field never carries into the process id.
        """
        with self._lock:
            if self.increment >= bit_layout.MAX_INCREMENT:
                self.increment = 0
            current = self.increment
            self.increment += 1
            return current


def _check_epoch_range(epoch_ms: int, original: Any) -> int:
    # Every timestamp the layout can hold must map to a datetime.
    try:
        ms_to_datetime(epoch_ms)
        ms_to_datetime(epoch_ms + bit_layout.MAX_TIMESTAMP_DELTA)
    except OverflowError as exc:
        raise InvalidTimestampError(f"epoch {original!r} is outside the representable date range", original) from exc
    return epoch_ms


def _resolve_epoch(epoch: Union[int, float, datetime]) -> int:
    if isinstance(epoch, datetime):
        return _check_epoch_range(datetime_to_ms(epoch), epoch)
    if isinstance(epoch, bool) or not isinstance(epoch, (int, float)):
        raise InvalidTimestampError(f"epoch must be milliseconds or a datetime (received {type(epoch).__name__})", epoch)
    if not math.isfinite(epoch):
        raise InvalidTimestampError(f"epoch must be finite (received {epoch!r})", epoch)
    return _check_epoch_range(math.floor(epoch), epoch)


def _check_tag(name: str, value: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise ValueError(f"{name} must be an integer in [0, {maximum}] (received {value!r})")
    return value


class SnowflakeGenerator:
    """Builds and takes apart snowflakes for a single producer.

    The worker and process ids default to 1 and 0; every id from one
    generator carries the same pair.
    """

    def __init__(
        self,
        epoch: Union[int, float, datetime] = DEFAULT_EPOCH_MS,
        increment: int = 0,
        worker_id: int = DEFAULT_WORKER_ID,
        process_id: int = DEFAULT_PROCESS_ID,
    ) -> None:
        increment = _check_tag("increment", increment, bit_layout.MAX_INCREMENT)
        self._worker_id = _check_tag("worker_id", worker_id, bit_layout.MAX_WORKER_ID)
        self._process_id = _check_tag("process_id", process_id, bit_layout.MAX_PROCESS_ID)
        self.state = GeneratorState(epoch=_resolve_epoch(epoch), increment=increment)

    @property
    def epoch(self) -> int:
        return self.state.epoch

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def process_id(self) -> int:
        return self._process_id

    @staticmethod
    def _current_time_ms() -> int:
        return int(time.time() * 1000)

    def _resolve_timestamp(self, timestamp: Optional[TimestampLike]) -> Union[int, float]:
        if timestamp is None:
            return self._current_time_ms()
        if isinstance(timestamp, datetime):
            return datetime_to_ms(timestamp)
        if isinstance(timestamp, str):
            try:
                parsed = datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
            except ValueError as exc:
                raise InvalidTimestampError(f"timestamp is not an ISO-8601 instant: {timestamp!r}", timestamp) from exc
            return datetime_to_ms(parsed)
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise InvalidTimestampError(
                f"timestamp must be a number (received {type(timestamp).__name__})", timestamp
            )
        if not math.isfinite(timestamp):
            raise InvalidTimestampError(f"timestamp must be a finite number (received {timestamp!r})", timestamp)
        return timestamp

    def generate(self, timestamp: Optional[TimestampLike] = None) -> str:
        resolved = self._resolve_timestamp(timestamp)
        delta = math.floor(resolved - self.state.epoch)
        if delta < 0:
            raise InvalidTimestampError(f"timestamp {timestamp!r} is before the epoch {self.state.epoch}", timestamp)
        if delta > bit_layout.MAX_TIMESTAMP_DELTA:
            raise InvalidTimestampError(
                f"timestamp {timestamp!r} is too far after the epoch {self.state.epoch}", timestamp
            )
        bits = bit_layout.compose(delta, self._worker_id, self._process_id, self.state.next_increment())
        if bits == bit_layout.ZERO_BITS:
            return "0"
        return bit_layout.decimal_from_binary(bits)

    def deconstruct(self, snowflake: str) -> DeconstructedSnowflake:
        epoch = self.state.epoch
        if snowflake == "0":
            return DeconstructedSnowflake(
                timestamp=epoch,
                epoch=epoch,
                date=ms_to_datetime(epoch),
                worker_id=0,
                process_id=0,
                increment=0,
                binary=bit_layout.ZERO_BITS,
                snowflake=snowflake,
            )
        if not isinstance(snowflake, str) or not _SNOWFLAKE_RE.fullmatch(snowflake):
            raise InvalidSnowflakeError(f"snowflake must be a non-negative decimal string (received {snowflake!r})", snowflake)
        if len(snowflake) > _MAX_SNOWFLAKE_DIGITS or int(snowflake) > bit_layout.MAX_SNOWFLAKE:
            raise InvalidSnowflakeError(f"snowflake {snowflake!r} does not fit in 64 bits", snowflake)
        try:
            binary = bit_layout.binary_from_decimal(snowflake)
            binary = binary.zfill(bit_layout.TOTAL_BITS)
            delta, worker_id, process_id, increment = bit_layout.split(binary)
        except InvalidInputError as exc:
            raise InvalidSnowflakeError(f"invalid snowflake {snowflake!r}: {exc}", snowflake) from exc
        timestamp = delta + epoch
        return DeconstructedSnowflake(
            timestamp=timestamp,
            epoch=epoch,
            date=ms_to_datetime(timestamp),
            worker_id=worker_id,
            process_id=process_id,
            increment=increment,
            binary=binary,
            snowflake=snowflake,
        )
