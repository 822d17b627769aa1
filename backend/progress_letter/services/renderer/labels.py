"""
Letter labels.

Fixed Vietnamese wording of every line the renderer can emit. The order of
STUDENT_LINE_LABELS is the order lines appear inside a student block.
"""

SALUTATION = "Kính gửi {recipient},"
SUBJECT = "Thư này là: {subject}"
STUDENT_HEADER = "{letter}. Về bạn {name}:"
STUDENT_NAME_PLACEHOLDER = "[Tên học sinh]"

SUMMARY = "Tóm lại: {text}"
CONDITIONAL = "Nếu: {text}"
WISHING = "Chúc: {text}"
SIGNATURE = "Ký tên:\n{signature}"

# Placeholder for whichever half of the payment line is missing
PAYMENT_MISSING = "..."
NEXT_PAYMENT = "- Cần đóng từ ngày: {period} với số tiền là {amount}"

# (field, label) for single-field lines; None marks the payment line slot
STUDENT_LINE_LABELS = (
    ("strengths", "Điểm mạnh"),
    ("improvements", "Điểm cần khắc phục"),
    ("praise", "Khen ngợi"),
    ("paid_until", "Đã đóng tiền học đến ngày"),
    (None, None),
    ("session_details", "Chi tiết các buổi học"),
    ("note", "Ghi chú"),
    ("commitment", "Cam kết"),
    ("strategy", "Chiến lược sắp tới"),
)
