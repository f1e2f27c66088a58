import time
import unittest

import pytest
from pydantic import ValidationError

from resourcekit import config
from resourcekit.utils.backoff import ExponentialBackoff


class TestExponentialBackoff(unittest.TestCase):
    def test_next_backoff(self):
        boff = ExponentialBackoff(randomization_factor=0)  # no jitter for deterministic testing

        self.assertEqual(boff.next_backoff(), 0.5)
        self.assertEqual(boff.next_backoff(), 0.75)
        self.assertEqual(boff.next_backoff(), 0.5 * 1.5**2)

    def test_backoff_is_capped_by_max_interval(self):
        boff = ExponentialBackoff(
            initial_interval=0.5, multiplier=2, max_interval=3, randomization_factor=0
        )

        self.assertEqual(
            [boff.next_backoff() for _ in range(6)],
            [0.5, 1, 2, 3, 3, 3],
        )

    def test_jitter_stays_within_bounds(self):
        boff = ExponentialBackoff(initial_interval=1, multiplier=1, randomization_factor=0.5)

        for _ in range(20):
            self.assertTrue(0.5 <= boff.next_backoff() <= 1.5)

    def test_jittered_backoff_is_capped_by_max_interval(self):
        boff = ExponentialBackoff(
            initial_interval=1, multiplier=1, max_interval=1, randomization_factor=1
        )

        for _ in range(20):
            self.assertLessEqual(boff.next_backoff(), 1)

    def test_backoff_retry_limit(self):
        boff = ExponentialBackoff(randomization_factor=0, max_retries=1)

        self.assertEqual(boff.next_backoff(), 0.5)

        # max_retries exceeded, only 0 should be returned until reset() called
        self.assertEqual(boff.next_backoff(), 0)
        self.assertTrue(boff.exhausted)

        boff.reset()

        self.assertFalse(boff.exhausted)
        self.assertEqual(boff.next_backoff(), 0.5)
        self.assertEqual(boff.next_backoff(), 0)

    def test_backoff_retry_limit_disable_retries(self):
        boff = ExponentialBackoff(randomization_factor=0, max_retries=0)

        # zero max_retries means backoff will always fail
        self.assertEqual(boff.next_backoff(), 0)
        boff.reset()
        self.assertEqual(boff.next_backoff(), 0)

    def test_backoff_time_elapsed_limit(self):
        boff = ExponentialBackoff(randomization_factor=0, max_time_elapsed=0.2)

        self.assertEqual(boff.next_backoff(), 0.5)
        time.sleep(0.3)

        self.assertEqual(boff.next_backoff(), 0)

        boff.reset()
        self.assertEqual(boff.next_backoff(), 0.5)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_interval": 0},
        {"randomization_factor": 2},
        {"multiplier": 0.5},
        {"max_retries": -2},
    ],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(ValidationError):
        ExponentialBackoff(**kwargs)


def test_default_backoff(monkeypatch):
    monkeypatch.setattr(config, "WAITER_POLL_INTERVAL", 0.2)
    monkeypatch.setattr(config, "WAITER_MAX_POLL_INTERVAL", 0.1)

    boff = config.default_backoff()

    assert boff.initial_interval == 0.2
    # the max interval is never lower than the initial one
    assert boff.max_interval == 0.2
    assert boff.multiplier == 2.0
