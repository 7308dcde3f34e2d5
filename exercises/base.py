"""Shared input parsing utilities for exercise handlers."""


def parse_letter_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A-F) or number (1-6) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()
    letter_map = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}

    if user_input in letter_map:
        index = letter_map[user_input]
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index


def parse_number_input(user_input: str, max_value: int) -> int | None:
    """Parse a 1-based number to a 0-based index, or None if out of range."""
    user_input = user_input.strip()
    if not user_input.isdigit():
        return None

    index = int(user_input) - 1
    if index < 0 or index >= max_value:
        return None
    return index
