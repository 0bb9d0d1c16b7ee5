def clamp(value: float, min_value: float, max_value: float) -> float:
    """Limit value to the closed interval [min_value, max_value]."""
    return max(min_value, min(max_value, value))


def normalize_to_half_extent(offset: float, extent: float) -> float:
    """Express an offset in units of half the given extent (screen centre = 0, edge = 1)."""
    return offset / (extent / 2)
