import random
import time

from pydantic import Field
from pydantic.dataclasses import dataclass


@dataclass
class ExponentialBackoff:
    """
    ExponentialBackoff computes the delays between two status polls. The delay grows by ``multiplier`` with every
    call of ``next_backoff()`` until it reaches ``max_interval``, and is optionally jittered by
    ``randomization_factor``:

        ```
        randomized_interval = random_between(retry_interval * (1 - randomization_factor), retry_interval * (1 + randomization_factor))
        ```

    With ``initial_interval=0.5``, ``multiplier=2``, ``max_interval=10`` and no jitter, the sequence is
    0.5, 1, 2, 4, 8, 10, 10, ...

    Note:
        - the randomized value is capped by ``max_interval`` as well
        - ``next_backoff()`` returns 0 once ``max_retries`` or ``max_time_elapsed`` is exceeded
        - instances are stateful and not thread-safe, every wait uses its own instance
    """

    initial_interval: float = Field(0.5, title="Initial backoff interval in seconds", gt=0)
    randomization_factor: float = Field(0.5, title="Factor to randomize backoff", ge=0, le=1)
    multiplier: float = Field(1.5, title="Multiply interval by this factor each retry", ge=1)
    max_interval: float = Field(60.0, title="Maximum backoff interval in seconds", gt=0)
    max_retries: int = Field(-1, title="Max retry attempts (-1 for unlimited)", ge=-1)
    max_time_elapsed: float = Field(-1, title="Max total time in seconds (-1 for unlimited)", ge=-1)

    def __post_init__(self):
        self.retry_interval: float = 0
        self.retries: int = 0
        self.start_time: float = 0.0

    @property
    def elapsed_duration(self) -> float:
        return max(time.monotonic() - self.start_time, 0)

    @property
    def exhausted(self) -> bool:
        """Whether the retry or time limits have been reached."""
        if self.max_retries >= 0 and self.retries > self.max_retries:
            return True
        if self.retry_interval and self.max_time_elapsed > 0:
            return self.elapsed_duration > self.max_time_elapsed
        return False

    def reset(self) -> None:
        self.retry_interval = 0
        self.retries = 0
        self.start_time = 0

    def next_backoff(self) -> float:
        if self.retry_interval == 0:
            self.retry_interval = min(self.initial_interval, self.max_interval)
            self.start_time = time.monotonic()

        self.retries += 1
        if self.exhausted:
            return 0

        next_interval = self.retry_interval
        if 0 < self.randomization_factor <= 1:
            next_interval = random.uniform(
                self.retry_interval * (1 - self.randomization_factor),
                self.retry_interval * (1 + self.randomization_factor),
            )

        self.retry_interval = min(self.max_interval, self.retry_interval * self.multiplier)

        return min(next_interval, self.max_interval)
