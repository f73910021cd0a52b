"""
Tests for settings validation.
"""

import pytest

from identity_cache.config import Settings, settings


def test_defaults():
    assert settings.identity_cache_bucket == "uuid-cache"
    assert settings.identity_cache_ttl == 3 * 24 * 60 * 60


@pytest.mark.parametrize(
    "overrides",
    [
        {"identity_cache_ttl": 0},
        {"redis_max_connections": 0},
        {"redis_pool_timeout": 0.0},
        {"authority_timeout": -1.0},
        {"authority_batch_size": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)
