def pad_with_zeros(number: int, width: int) -> str:
    if number < 0:
        raise ValueError(f"cannot pad negative number: {number}")
    return str(number).rjust(width, "0")
