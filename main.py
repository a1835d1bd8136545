#!/usr/bin/env python3
"""Redit - a modal terminal text editor.

Usage:
    python main.py [filename]

Normal mode:
    h j k l / arrows: Move        i a A I o O: Insert
    v: Visual selection           x: Delete character
    Y / p / P: Yank line, paste   Ctrl-K: Kill to end of line
    u / Ctrl-R: Undo, redo        / ? n N: Search
    g: Go to line                 ; : Evaluate Python
    s: Save                       q: Quit (asks to save if modified)
"""

from redit.__main__ import main


if __name__ == "__main__":
    main()
