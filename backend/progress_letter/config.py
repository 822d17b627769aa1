"""
Progress Letter - Configuration

Environment-driven settings. Values are read once at import.
"""
import os

# Seeded letter defaults - what a fresh session opens with
DEFAULT_RECIPIENT = os.getenv("LETTER_DEFAULT_RECIPIENT", "Cô Tuyết Anna")
DEFAULT_SUBJECT = os.getenv(
    "LETTER_DEFAULT_SUBJECT",
    "Cập nhật tiến độ học IELTS của học viên Tố Uyên, Tạ Khánh, Mai Hương và Thanh Sơn",
)
DEFAULT_SUMMARY = os.getenv(
    "LETTER_DEFAULT_SUMMARY",
    "Vậy em chuyển cho anh 13.5 triệu vnd vào tài khoản BIDV 1690000157 Lê Hồng Trường "
    "tiền học của bạn Tố Uyên từ 2/1/26-1/2/26, 20 buổi của bạn Tạ Khánh, Mai Hương từ "
    "5/12/25 đến 8/1/26, và 20 buổi của bạn Thanh Sơn từ 27/10/25 - 24/1/26",
)
DEFAULT_CONDITIONAL = os.getenv(
    "LETTER_DEFAULT_CONDITIONAL",
    "Nếu trước ngày 10/2/2026 mà anh chưa nhận được tiền của bạn nào thì anh sẽ ngưng dạy "
    "bạn ấy trong một thời gian đến khi nhận được tiền học.",
)
DEFAULT_WISHING = os.getenv(
    "LETTER_DEFAULT_WISHING",
    "chúc bạn Tố Uyên đạt 5.5, bạn Tạ Khánh đạt 5.0 và bạn Mai Hương đạt 5.5, bạn Thanh Sơn "
    "đạt 5.5 theo mục tiêu và vào được trường đại học mong ước của mình.",
)
DEFAULT_SIGNATURE = os.getenv("LETTER_DEFAULT_SIGNATURE", "Thầy Trường\nGiáo viên IELTS")

# Export filename context; empty means "derive from the recipient"
EXPORT_CONTEXT = os.getenv("LETTER_EXPORT_CONTEXT", "")

# In-memory session cap (oldest sessions are evicted past this)
MAX_SESSIONS = int(os.getenv("LETTER_MAX_SESSIONS", "500"))

HOST = os.getenv("LETTER_HOST", "0.0.0.0")
PORT = int(os.getenv("LETTER_PORT", "8001"))
