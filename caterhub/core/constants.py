import enum


class OrderStatus(str, enum.Enum):
    RECEIVED = "received"
    DELIVERED = "delivered"
    PAID = "paid"


class SizeType(str, enum.Enum):
    PLATE = "plate"
    HALF_TRAY = "half_tray"
    FULL_TRAY = "full_tray"
    PIECE = "piece"


class DiscountType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class ReviewStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# MenuItem column holding the price for each size
SIZE_PRICE_FIELDS = {
    SizeType.PLATE: "price_per_plate",
    SizeType.HALF_TRAY: "price_half_tray",
    SizeType.FULL_TRAY: "price_full_tray",
    SizeType.PIECE: "price_per_piece",
}

PRICE_FIELDS = tuple(SIZE_PRICE_FIELDS.values())

MAX_REVIEW_MENU_ITEMS = 5
TOP_N = 5
MOVING_AVERAGE_WINDOW = 7
TIP_TRANSACTIONS_LIMIT = 50

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".webp"}

SIZE_LABELS = {
    SizeType.PLATE.value: "Plate",
    SizeType.HALF_TRAY.value: "Half Tray",
    SizeType.FULL_TRAY.value: "Full Tray",
    SizeType.PIECE.value: "Piece",
}
