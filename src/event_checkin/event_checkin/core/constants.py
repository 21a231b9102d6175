"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Display format of check-in/check-out stamps (wall clock, not sortable).
CLOCK_FORMAT = "%H:%M:%S"

# Degrees added around a single-point bounding box so a map can fit it.
BOUNDS_EPSILON = 0.01

LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)

# Bangkok; used when no participant has a usable location.
DEFAULT_MAP_CENTER = (13.7563, 100.5018)

CSV_EXPORT_HEADER = ["ลำดับ", "ชื่อ-สกุล", "เบอร์โทรศัพท์", "สถานะ", "เวลาเข้า", "เวลาออก"]

STATUS_LABELS_TH = {
    "pending": "ยังไม่มา",
    "checked-in": "อยู่ในงาน",
    "checked-out": "กลับแล้ว",
}

# Lower-cased fragments that mark a CSV row as a header row.
IMPORT_HEADER_TOKENS = (
    "name",
    "phone",
    "tel",
    "identifier",
    "ชื่อ",
    "เบอร์",
    "โทร",
)


# Column widths of the participants table; scan metadata is clipped to fit.
MAX_LOCATION_LENGTH = 128
MAX_DEVICE_LENGTH = 512
