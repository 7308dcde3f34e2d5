from rich.theme import Theme
from rich.style import Style
from rich.text import Text

PRIMARY_BLUE = "#2E86DE"
ACCENT_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

LEVEL_COLORS = {
    1: SUCCESS_GREEN,
    2: ACCENT_GOLD,
}
DEFAULT_LEVEL_COLOR = ERROR_RED

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=PRIMARY_BLUE, bold=True),
        "secondary": Style(color=ACCENT_GOLD, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "option_label": Style(color=ACCENT_GOLD, bold=True),
        "option_text": Style(color=TEXT_WHITE),
        "title": Style(color=PRIMARY_BLUE, bold=True),
        "subtitle": Style(color=MUTED_GRAY),
    }
)


def get_level_style(level: int) -> Style:
    """Badge style for a clip level: green, gold, then red for level 3+."""
    return Style(
        color=TEXT_WHITE, bgcolor=LEVEL_COLORS.get(level, DEFAULT_LEVEL_COLOR), bold=True
    )


def get_correct_rate_style(rate: float) -> Style:
    """Get color style based on the clip's correct-answer rate."""
    if rate >= 0.8:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif rate >= 0.5:
        return Style(color=ACCENT_GOLD)
    else:
        return Style(color=ERROR_RED)


def create_success_header() -> Text:
    """Create a success/correct answer header."""
    header = Text()
    header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
    header.append("Correct!", Style(color=SUCCESS_GREEN, bold=True))
    return header


def create_error_header() -> Text:
    """Create an error/incorrect answer header."""
    header = Text()
    header.append("✗ ", Style(color=ERROR_RED, bold=True))
    header.append("Not quite!", Style(color=ERROR_RED, bold=True))
    return header
