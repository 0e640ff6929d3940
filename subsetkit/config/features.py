"""
OpenType layout feature defaults.

Features retained when no layout-feature directive replaces the set.
"""

DEFAULT_LAYOUT_FEATURES = [
    # Common
    "rvrn",  # Required variation alternates
    "ccmp",  # Glyph composition/decomposition
    "liga",  # Standard ligatures
    "locl",  # Localized forms
    "mark",  # Mark positioning
    "mkmk",  # Mark to mark positioning
    "rlig",  # Required ligatures
    # Fractions
    "frac",  # Fractions
    "numr",  # Numerators
    "dnom",  # Denominators
    # Horizontal
    "calt",  # Contextual alternates
    "clig",  # Contextual ligatures
    "curs",  # Cursive positioning
    "kern",  # Kerning
    "rclt",  # Required contextual alternates
    # Vertical
    "valt",  # Alternate vertical metrics
    "vert",  # Vertical writing
    "vkrn",  # Vertical kerning
    "vpal",  # Proportional alternate vertical metrics
    "vrt2",  # Vertical alternates and rotation
    # Left-to-right
    "ltra",  # Left-to-right alternates
    "ltrm",  # Left-to-right mirrored forms
    # Right-to-left
    "rtla",  # Right-to-left alternates
    "rtlm",  # Right-to-left mirrored forms
    # Arabic
    "init",  # Initial forms
    "medi",  # Medial forms
    "fina",  # Terminal forms
    "isol",  # Isolated forms
    "med2",  # Medial forms #2
    "fin2",  # Terminal forms #2
    "fin3",  # Terminal forms #3
    "cswh",  # Contextual swash
    "mset",  # Mark positioning via substitution
    "stch",  # Stretching glyph decomposition
    # Hangul
    "ljmo",  # Leading jamo forms
    "vjmo",  # Vowel jamo forms
    "tjmo",  # Trailing jamo forms
    # Tibetan
    "abvs",  # Above-base substitutions
    "blws",  # Below-base substitutions
    "abvm",  # Above-base mark positioning
    "blwm",  # Below-base mark positioning
    # Indic
    "nukt",  # Nukta forms
    "akhn",  # Akhand
    "rphf",  # Reph form
    "rkrf",  # Rakar forms
    "pref",  # Pre-base forms
    "blwf",  # Below-base forms
    "half",  # Half forms
    "abvf",  # Above-base forms
    "pstf",  # Post-base forms
    "cjct",  # Conjunct forms
    "vatu",  # Vattu variants
    "pres",  # Pre-base substitutions
    "psts",  # Post-base substitutions
    "haln",  # Halant forms
    "dist",  # Distances
]
