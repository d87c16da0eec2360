"""
Dice roller package.

This package contains the dice roll resolution engine, the bounded roll log,
and the preset registry of a tabletop RPG dice roller.
"""
