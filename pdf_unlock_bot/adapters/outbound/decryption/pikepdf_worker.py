"""
Standalone pikepdf decryption worker.

Usage: python -m pdf_unlock_bot.adapters.outbound.decryption.pikepdf_worker <input> <output>

The password is read from stdin. Exit codes:
    0  unlocked, output written
    1  any other error
    2  password required or incorrect
    3  input missing, corrupted or not a PDF
"""

import sys
from typing import Optional

import pikepdf

EXIT_OK = 0
EXIT_OTHER = 1
EXIT_PASSWORD = 2
EXIT_CORRUPT = 3


def log(message: str) -> None:
    """Report progress to the parent process."""
    print(message, file=sys.stderr)
    sys.stderr.flush()


def unlock(input_path: str, output_path: str, password: str) -> int:
    """
    Open a PDF with a password and save it without encryption.

    Returns:
        Process exit code
    """
    try:
        pdf = pikepdf.open(input_path, password=password)
    except pikepdf.PasswordError:
        log("Error: invalid password")
        return EXIT_PASSWORD
    except (pikepdf.PdfError, OSError) as err:
        log(f"Error: unreadable input: {err}")
        return EXIT_CORRUPT

    try:
        with pdf:
            pdf.save(output_path)
    except Exception as err:  # noqa: BLE001 - reported through the exit code
        log(f"Error: {err}")
        return EXIT_OTHER

    log("Success: PDF unlocked")
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        log("Usage: pikepdf_worker <input_path> <output_path> (password on stdin)")
        return EXIT_OTHER

    password = sys.stdin.buffer.read().decode("utf-8")
    return unlock(args[0], args[1], password)


if __name__ == "__main__":
    sys.exit(main())
