"""Shared constants for terminal styling."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

# SGR attributes
BOLD = f"{CSI}1m"
DIM = f"{CSI}2m"
ITALIC = f"{CSI}3m"
UNDERLINE = f"{CSI}4m"
REVERSE = f"{CSI}7m"
STRIKETHROUGH = f"{CSI}9m"

# Foreground colors (30-37 standard, 90-97 bright)
FG_BLACK = f"{CSI}30m"
FG_GREEN = f"{CSI}32m"
FG_BLUE = f"{CSI}34m"
FG_MAGENTA = f"{CSI}35m"
FG_CYAN = f"{CSI}36m"
FG_BRIGHT_YELLOW = f"{CSI}93m"
FG_BRIGHT_CYAN = f"{CSI}96m"
FG_BRIGHT_WHITE = f"{CSI}97m"

# 256-color backgrounds used for inline code spans
BG_GREY_DARK = f"{CSI}48;5;236m"
BG_GREY_LIGHT = f"{CSI}48;5;254m"

# Cursor / screen control
CLEAR_SCREEN = f"{CSI}2J"
CURSOR_HOME = f"{CSI}H"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"

ELLIPSIS = "\u2026"

# Box drawing characters for tables and code block frames
BOX = {
    "h": "\u2500",          # Light horizontal
    "v": "\u2502",          # Light vertical
    "top_left": "\u250C",
    "top_mid": "\u252C",
    "top_right": "\u2510",
    "mid_left": "\u251C",
    "mid_mid": "\u253C",
    "mid_right": "\u2524",
    "bot_left": "\u2514",
    "bot_mid": "\u2534",
    "bot_right": "\u2518",
    "round_top": "\u256D",  # Arc down and right
    "round_bot": "\u2570",  # Arc up and right
}

# List markers by unordered nesting depth: bullet, white bullet, small square
BULLETS = ("\u2022 ", "\u25E6 ", "\u25AA ")

CHECK_MARK = "\u2713"
