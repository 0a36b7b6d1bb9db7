"""Fixed-width integer bounds and saturating arithmetic.

Python integers never overflow, so the widths the viewer works in (u64
timestamps, i32 pixel positions, u32 pixel widths) are enforced here by
clamping or by explicit range checks.
"""

U64_MAX = 2**64 - 1
U32_MAX = 2**32 - 1
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def saturating_add_u64(a: int, b: int) -> int:
    return clamp(a + b, 0, U64_MAX)


def saturating_sub_u64(a: int, b: int) -> int:
    return clamp(a - b, 0, U64_MAX)


def saturating_add_i32(a: int, b: int) -> int:
    return clamp(a + b, I32_MIN, I32_MAX)


def saturating_sub_i32(a: int, b: int) -> int:
    return clamp(a - b, I32_MIN, I32_MAX)


def fits_u64(value: int) -> bool:
    return 0 <= value <= U64_MAX


def fits_u32(value: int) -> bool:
    return 0 <= value <= U32_MAX


def fits_i32(value: int) -> bool:
    return I32_MIN <= value <= I32_MAX
