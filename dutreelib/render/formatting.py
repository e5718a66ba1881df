"""Human-readable size strings."""

from .._common.config import KIB

_UNITS = (
    (KIB ** 2, KIB, "KiB"),
    (KIB ** 3, KIB ** 2, "MiB"),
    (KIB ** 4, KIB ** 3, "GiB"),
)


def format_size(num_bytes: int, raw: bool = False) -> str:
    """Format a byte count with two decimals and a binary unit.

    Args:
        num_bytes: Size in bytes
        raw: Always print plain bytes

    Returns:
        String such as ``"512.00 B"`` or ``"2.00 KiB"``
    """
    if raw or num_bytes < KIB:
        return f"{num_bytes:.2f} B"

    for limit, divisor, unit in _UNITS:
        if num_bytes < limit:
            return f"{num_bytes / divisor:.2f} {unit}"
    return f"{num_bytes / KIB ** 4:.2f} TiB"
