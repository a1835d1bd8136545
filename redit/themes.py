"""Color themes: display roles mapped to blessed color names.

The cursor roles hold #rrggbb colors handed straight to the terminal.
"""

THEMES: dict[str, dict[str, str]] = {
    "nature": {
        "text": "white",
        "line_number": "bright_black",
        "current_line_number": "yellow",
        "fringe": "bright_black",
        "modeline": "black_on_green",
        "minibuffer": "white",
        "selection": "black_on_cyan",
        "search": "black_on_yellow",
        "normal_cursor": "#658b5f",
        "insert_cursor": "#514b8e",
    },
    "everforest": {
        "text": "bright_white",
        "line_number": "bright_black",
        "current_line_number": "green",
        "fringe": "bright_black",
        "modeline": "black_on_bright_green",
        "minibuffer": "bright_white",
        "selection": "black_on_bright_blue",
        "search": "black_on_bright_yellow",
        "normal_cursor": "#a7c080",
        "insert_cursor": "#e67e80",
    },
}


def theme_names() -> list[str]:
    return list(THEMES)
