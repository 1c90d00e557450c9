# unitgroups.core.chars
# Typographic glyphs used in unit symbols.

DEGREE = "\u00b0"
MICRO = "\u00b5"
SQUARED = "\u00b2"
CUBED = "\u00b3"
DOT = "\u00b7"
PERMILLE = "\u2030"
ZWSP = "\u200b"  # zero-width space, symbol of dimensionless units

__all__ = ["DEGREE", "MICRO", "SQUARED", "CUBED", "DOT", "PERMILLE", "ZWSP"]
