"""Character set rendered into every font atlas."""

AVAILABLE_GLYPH_CHARACTERS: tuple[str, ...] = (
    *"abcdefghijklmnopqrstuvwxyz",
    *"ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    *"0123456789",
    *"`!@#$%^&*()-=",
    *"~_+[]\\;',./{}|:\"<>?",
    " ",
)

# Drawn in place of characters that are not in the atlas.
INVALID_CHARACTER = "□"

SPACE = " "
