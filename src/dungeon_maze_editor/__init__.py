"""
Dungeon Maze world structure editor.

Authoring tool for the chunk/cell world structures consumed by the game.
"""

__version__ = "0.1.0"
