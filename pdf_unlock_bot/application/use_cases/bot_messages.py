"""User-facing messages of the PDF unlock bot (Telegram Markdown)."""

from typing import Callable, Optional

from pdf_unlock_bot.application.ports.messaging_transport import Buttons
from pdf_unlock_bot.domain.entities.session import SessionStep


class BotMessages:
    """
    Centralized user-facing messages and keyboards.

    Texts use Markdown. Values supplied by users (names, file names) go
    through the escape function of the transport that will send them.
    """

    # Keyboards
    WELCOME_BUTTONS: Buttons = [[("📖 Help", "help"), ("ℹ️ About", "about")]]
    PASSWORD_REQUEST_BUTTONS: Buttons = [[("❓ Help with Password", "help"), ("❌ Cancel", "cancel")]]
    RETRY_BUTTONS: Buttons = [[("🔄 Try Again", "help"), ("❌ Cancel", "cancel")]]
    START_BUTTONS: Buttons = [[("🚀 Start New Session", "start")]]

    def __init__(self, escape: Callable[[str], str]) -> None:
        """
        Initialize messages.

        Args:
            escape: Escapes user-supplied values for the message format
        """
        self._escape = escape

    def welcome(self, first_name: Optional[str]) -> str:
        """Generate the /start greeting."""
        return (
            f"🎉 Welcome {self._escape(first_name or 'there')}!\n\n"
            "I'm your PDF Unlock Assistant. I can help you unlock password-protected "
            "PDF files quickly and securely.\n\n"
            "📋 *How it works:*\n"
            "1️⃣ Send me your PDF file\n"
            "2️⃣ Provide the password when prompted\n"
            "3️⃣ Get your unlocked PDF back!\n\n"
            "🔐 *Security:* Your files are processed locally and deleted after processing.\n\n"
            "Ready to get started? Just send me a PDF file! 📄"
        )

    HELP = (
        "🆘 *Help & Instructions*\n\n"
        "*Commands:*\n"
        "• /start - Start the bot\n"
        "• /help - Show this help message\n"
        "• /status - Check your current session\n"
        "• /cancel - Cancel current operation\n\n"
        "*Method 1: Send PDF first*\n"
        "1. Send your PDF file\n"
        "2. Wait for confirmation\n"
        "3. Send password in format: `password: your_password`\n\n"
        "*Method 2: Include password in caption*\n"
        "1. Send PDF with caption: `password: your_password`\n"
        "2. File will be processed automatically\n\n"
        "*Tips:*\n"
        "✅ Make sure your PDF is password-protected\n"
        "✅ Use the exact format for passwords\n"
        "✅ Files are automatically deleted after processing\n"
        "✅ Maximum file size: 20MB"
    )

    QUICK_HELP = (
        "🆘 *Quick Help*\n\n"
        "*Steps to unlock PDF:*\n"
        "1. Send your PDF file 📄\n"
        "2. Send password: `password: your_password` 🔐\n"
        "3. Get unlocked file! ✅\n\n"
        "*Alternative:* Include password in PDF caption when sending.\n\n"
        "Type /help for detailed instructions."
    )

    ABOUT = (
        "ℹ️ *About PDF Unlock Bot*\n\n"
        "🔐 *Purpose:* Unlock password-protected PDF files\n"
        "🛡️ *Security:* Files processed locally & deleted after use\n"
        "⚡ *Speed:* Fast processing with real-time feedback\n"
        "🎯 *Accuracy:* Detailed error messages & status updates"
    )

    START_FROM_BUTTON = "🚀 *Starting new session...*\n\nPlease send me a PDF file to unlock!"

    CANCELLED = (
        "❌ *Operation cancelled*\n\n"
        "Your session has been reset. Send /start to begin again!"
    )

    NO_SESSION_STATUS = "📊 *Status:* No active session\n\nSend /start to begin!"

    STEP_EMOJI = {
        SessionStep.AWAITING_FILE: "⏳",
        SessionStep.AWAITING_PASSWORD: "🔐",
        SessionStep.PROCESSING: "⚙️",
    }
    STEP_TEXT = {
        SessionStep.AWAITING_FILE: "Waiting for PDF file",
        SessionStep.AWAITING_PASSWORD: "Waiting for password",
        SessionStep.PROCESSING: "Processing your file",
    }

    def status(
        self,
        step: SessionStep,
        file_name: Optional[str],
        elapsed_seconds: int,
        attempts: int,
    ) -> str:
        """Generate the /status report."""
        message = (
            "📊 *Current Status*\n\n"
            f"{self.STEP_EMOJI[step]} *Step:* {self.STEP_TEXT[step]}\n"
            f"📄 *File:* {self._escape(file_name or 'None')}\n"
            f"⏱️ *Time:* {elapsed_seconds}s ago\n"
            f"🔄 *Attempts:* {attempts}"
        )
        if step == SessionStep.AWAITING_PASSWORD:
            message += "\n\n💡 Send your password in format: `password: your_password`"
        return message

    # Identification and validation errors
    UNIDENTIFIED_USER = "❌ Could not identify your user ID. Please restart the bot with /start"

    INVALID_FILE_TYPE = (
        "❌ *Invalid file type*\n\n"
        "📄 Please send a valid PDF file only.\n\n"
        "💡 *Tip:* Make sure your file has a .pdf extension!"
    )

    @staticmethod
    def file_too_large(file_size: int, max_size: int) -> str:
        """Generate the oversized-file rejection."""
        return (
            "❌ *File too large*\n\n"
            f"📏 Maximum file size: {max_size / (1024 * 1024):.0f}MB\n"
            f"📄 Your file: {file_size / (1024 * 1024):.1f}MB\n\n"
            "💡 *Tip:* Try compressing your PDF first!"
        )

    EMPTY_PASSWORD = (
        "❌ *Empty Password*\n\n"
        "🔐 Please provide a valid password:\n\n"
        "`password: your_actual_password`"
    )

    INVALID_PASSWORD_FORMAT = (
        "❌ *Invalid Password Format*\n\n"
        "🔐 *Correct format:*\n"
        "`password: your_password`\n\n"
        "📝 *Examples:*\n"
        "`password: abc123`\n"
        "`password: my secret password`"
    )

    NO_PDF_FOUND = (
        "📄 *No PDF file found*\n\n"
        "💡 Please send me a PDF file first, then provide the password.\n\n"
        "Use /start to begin!"
    )

    STILL_PROCESSING = "⚙️ *Still processing*\n\nPlease wait for the current unlock attempt to finish."

    # Download flow
    @staticmethod
    def _size_label(file_size: Optional[int]) -> str:
        return f" ({file_size / 1024:.1f}KB)" if file_size else ""

    def downloading(self, file_name: str, file_size: Optional[int]) -> str:
        """Generate the download progress message."""
        return (
            "📥 *Downloading PDF*\n\n"
            f"📄 *File:* {self._escape(file_name)}{self._size_label(file_size)}\n"
            "⏳ *Status:* Downloading..."
        )

    def download_complete(self, file_name: str, file_size: Optional[int]) -> str:
        """Generate the download completion message."""
        return (
            "✅ *Download Complete*\n\n"
            f"📄 *File:* {self._escape(file_name)}{self._size_label(file_size)}\n"
            "✅ *Status:* Ready for password"
        )

    DOWNLOAD_FAILED = (
        "❌ *Download Failed*\n\n"
        "🔧 An error occurred while downloading your file.\n\n"
        "💡 *Try:*\n"
        "• Check your internet connection\n"
        "• Resend the file\n"
        "• Contact support if issue persists"
    )

    def password_required(self, file_name: str) -> str:
        """Generate the password request after a download."""
        return (
            "🔐 *Password Required*\n\n"
            f"📄 *File:* {self._escape(file_name)}\n"
            "💡 *Next Step:* Send the password in this format:\n\n"
            "`password: your_secret_password`\n\n"
            "🔒 *Example:* `password: mypassword123`"
        )

    # Unlock flow
    PASSWORD_IN_CAPTION = "🔐 *Password found in caption*\n\n⚙️ Processing your PDF..."

    def processing(self, file_name: str, masked_password: str) -> str:
        """Generate the unlock progress message."""
        return (
            "🔐 *Processing PDF*\n\n"
            f"📄 *File:* {self._escape(file_name)}\n"
            f"🔑 *Password:* `{masked_password}`\n"
            "⚙️ *Status:* Unlocking..."
        )

    def unlock_succeeded(self, file_name: str) -> str:
        """Generate the success report."""
        return (
            "✅ *Success!*\n\n"
            f"📄 *File:* {self._escape(file_name)}\n"
            "✅ *Status:* Unlocked and sent!\n\n"
            "🎉 Your PDF is ready above!"
        )

    def unlock_failed(self, file_name: str, attempts: int) -> str:
        """Generate the retry prompt after a failed attempt."""
        return (
            "❌ *Unlock Failed*\n\n"
            f"📄 *File:* {self._escape(file_name)}\n"
            f"🔐 *Attempt:* {attempts}\n\n"
            "💡 *Possible issues:*\n"
            "• Incorrect password\n"
            "• File is corrupted\n"
            "• Unsupported encryption\n\n"
            "🔄 *Try again with correct password:*\n"
            "`password: your_password`"
        )

    def processing_error(self, file_name: str) -> str:
        """Generate the report for an unexpected processing error."""
        return (
            "❌ *Processing Error*\n\n"
            f"📄 *File:* {self._escape(file_name)}\n"
            "🔧 *Error:* Technical issue occurred\n\n"
            "💡 *Try:*\n"
            "• Send the file again\n"
            "• Check if file is corrupted\n"
            "• Contact support if issue persists"
        )

    @staticmethod
    def unlocked_file_name(original_name: str) -> str:
        """Name of the document sent back to the user."""
        return f"unlocked_{original_name}"
