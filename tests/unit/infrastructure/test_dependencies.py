"""Unit tests for dependency factories."""

from unittest.mock import patch

import pytest

from pdf_unlock_bot.adapters.outbound.decryption import PikepdfDecryptor, QpdfDecryptor
from pdf_unlock_bot.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from pdf_unlock_bot.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from pdf_unlock_bot.infrastructure.config.settings import settings
from pdf_unlock_bot.infrastructure.wiring.dependencies import (
    create_decryptor,
    create_idempotency_store,
)


def test_create_decryptor_pikepdf():
    """Test the default decryption backend."""
    with patch.object(settings, "decryptor_backend", "pikepdf"):
        assert isinstance(create_decryptor(), PikepdfDecryptor)


def test_create_decryptor_qpdf():
    """Test selecting the qpdf backend."""
    with patch.object(settings, "decryptor_backend", "qpdf"):
        assert isinstance(create_decryptor(), QpdfDecryptor)


def test_create_decryptor_unknown_backend():
    """Test that an unknown backend is a configuration error."""
    with patch.object(settings, "decryptor_backend", "ghostscript"):
        with pytest.raises(ValueError, match="ghostscript"):
            create_decryptor()


def test_idempotency_disabled_uses_noop():
    """Test NoOp store when de-duplication is off."""
    with patch.object(settings, "update_idempotency_enabled", False):
        assert isinstance(create_idempotency_store(), NoOpIdempotencyStore)


def test_idempotency_enabled_uses_redis():
    """Test Redis store when de-duplication is on."""
    with patch.object(settings, "update_idempotency_enabled", True), patch.object(
        settings, "redis_url", "redis://localhost:6379/1"
    ):
        assert isinstance(create_idempotency_store(), RedisIdempotencyStore)
