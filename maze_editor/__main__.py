#!/usr/bin/env python3
"""
Maze Editor launcher.
"""

from maze_editor.app import main

if __name__ == "__main__":
    main()
