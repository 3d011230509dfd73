"""Decryption outbound adapter."""

from pdf_unlock_bot.adapters.outbound.decryption.pikepdf_decryptor import PikepdfDecryptor
from pdf_unlock_bot.adapters.outbound.decryption.qpdf_decryptor import QpdfDecryptor

__all__ = [
    "PikepdfDecryptor",
    "QpdfDecryptor",
]
