from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import ValidationError

NANOS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class Timerange:
    """Interval of media time, possibly open on either side.

    An unbounded side always carries zero seconds and nanoseconds.
    """
    start_seconds: int = 0
    start_nanos: int = 0
    end_seconds: int = 0
    end_nanos: int = 0
    start_unbounded: bool = False
    end_unbounded: bool = False

    def __post_init__(self) -> None:
        for name in ('start_seconds', 'start_nanos', 'end_seconds', 'end_nanos'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f'{name} must be an integer, got {value!r}')
            if value < 0:
                raise ValidationError(f'{name} must not be negative, got {value}')
        if self.start_nanos >= NANOS_PER_SECOND or self.end_nanos >= NANOS_PER_SECOND:
            raise ValidationError('nanosecond components must be below 1e9')
        if self.start_unbounded and (self.start_seconds or self.start_nanos):
            raise ValidationError('an unbounded start cannot carry a timestamp')
        if self.end_unbounded and (self.end_seconds or self.end_nanos):
            raise ValidationError('an unbounded end cannot carry a timestamp')
        if not self.start_unbounded and not self.end_unbounded and self.start > self.end:
            raise ValidationError(
                f'start {self.start_seconds}:{self.start_nanos} is after '
                f'end {self.end_seconds}:{self.end_nanos}'
            )

    @property
    def start(self) -> Optional[Tuple[int, int]]:
        if self.start_unbounded:
            return None
        return (self.start_seconds, self.start_nanos)

    @property
    def end(self) -> Optional[Tuple[int, int]]:
        if self.end_unbounded:
            return None
        return (self.end_seconds, self.end_nanos)

    @property
    def is_unbounded(self) -> bool:
        """True when the range matches everything."""
        return self.start_unbounded and self.end_unbounded

    @classmethod
    def unbounded(cls) -> 'Timerange':
        return cls(start_unbounded=True, end_unbounded=True)

    @classmethod
    def from_seconds(cls, start: Optional[float] = None, end: Optional[float] = None) -> 'Timerange':
        """Build a range from (fractional) seconds; None leaves that side open.

        Args:
            start: Start of the range in seconds, or None for an unbounded start
            end: End of the range in seconds, or None for an unbounded end

        Returns:
            The corresponding Timerange

        Raises:
            ValidationError: If a bound is negative or start is after end
        """
        start_seconds, start_nanos = _split_seconds(start) if start is not None else (0, 0)
        end_seconds, end_nanos = _split_seconds(end) if end is not None else (0, 0)
        return cls(
            start_seconds=start_seconds,
            start_nanos=start_nanos,
            end_seconds=end_seconds,
            end_nanos=end_nanos,
            start_unbounded=start is None,
            end_unbounded=end is None,
        )


def _split_seconds(value: float) -> Tuple[int, int]:
    if value < 0:
        raise ValidationError(f'time must not be negative, got {value}')
    return divmod(round(value * NANOS_PER_SECOND), NANOS_PER_SECOND)
