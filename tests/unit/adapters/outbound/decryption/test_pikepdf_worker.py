"""Tests for the pikepdf worker against real encrypted PDFs."""

import io

import pikepdf
import pytest

from pdf_unlock_bot.adapters.outbound.decryption import PikepdfDecryptor, pikepdf_worker
from pdf_unlock_bot.application.dtos.unlock import UnlockFailureReason


@pytest.fixture
def encrypted_pdf(tmp_path):
    """Create a PDF protected with user password 'secret'."""
    path = tmp_path / "encrypted.pdf"
    pdf = pikepdf.new()
    pdf.add_blank_page()
    pdf.save(path, encryption=pikepdf.Encryption(user="secret", owner="owner-secret"))
    pdf.close()
    return path


def test_unlock_with_correct_password(encrypted_pdf, tmp_path):
    """Test that the output opens without a password."""
    output = tmp_path / "out.pdf"

    assert pikepdf_worker.unlock(str(encrypted_pdf), str(output), "secret") == pikepdf_worker.EXIT_OK

    with pikepdf.open(output) as pdf:
        assert not pdf.is_encrypted
        assert len(pdf.pages) == 1


def test_unlock_with_wrong_password(encrypted_pdf, tmp_path):
    """Test the exit code for an incorrect password."""
    output = tmp_path / "out.pdf"

    assert pikepdf_worker.unlock(str(encrypted_pdf), str(output), "nope") == pikepdf_worker.EXIT_PASSWORD
    assert not output.exists()


def test_unlock_not_a_pdf(tmp_path):
    """Test the exit code for an unreadable input."""
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"this is not a pdf")

    code = pikepdf_worker.unlock(str(bogus), str(tmp_path / "out.pdf"), "secret")

    assert code == pikepdf_worker.EXIT_CORRUPT


def test_unlock_missing_input(tmp_path):
    """Test the exit code for a missing input."""
    code = pikepdf_worker.unlock(str(tmp_path / "missing.pdf"), str(tmp_path / "out.pdf"), "x")

    assert code == pikepdf_worker.EXIT_CORRUPT


def test_main_reads_password_from_stdin(encrypted_pdf, tmp_path, monkeypatch):
    """Test the command-line entry point."""
    output = tmp_path / "out.pdf"
    stdin = io.TextIOWrapper(io.BytesIO(b"secret"))
    monkeypatch.setattr("sys.stdin", stdin)

    assert pikepdf_worker.main([str(encrypted_pdf), str(output)]) == pikepdf_worker.EXIT_OK
    assert output.exists()


def test_main_usage_error():
    """Test that wrong arguments fail without reading stdin."""
    assert pikepdf_worker.main(["only-one"]) == pikepdf_worker.EXIT_OTHER


@pytest.mark.asyncio
async def test_decryptor_end_to_end(encrypted_pdf, tmp_path):
    """Test the decryptor running the worker in a real child process."""
    decryptor = PikepdfDecryptor(timeout_seconds=60)
    output = tmp_path / "out.pdf"

    wrong = await decryptor.unlock(encrypted_pdf, output, "wrong")
    assert wrong.success is False
    assert wrong.reason == UnlockFailureReason.WRONG_OR_MISSING_PASSWORD

    right = await decryptor.unlock(encrypted_pdf, output, "secret")
    assert right.success is True
    with pikepdf.open(output) as pdf:
        assert not pdf.is_encrypted
