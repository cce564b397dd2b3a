"""Configuration constants for dictee application."""

LOCALE = 'nl-NL'

# Edit costs for the letter alignment
INSERT_COST = 1           # attempt character with no target counterpart ("extra")
DELETE_COST = 1           # target character that was not typed ("missing")
SUBSTITUTION_COST = 2     # must stay equal to INSERT_COST + DELETE_COST

# Round settings
MIN_QUESTION_COUNT = 1
MAX_QUESTION_COUNT = 100
PRESET_QUESTION_COUNTS = [5, 10, 15, 20, 30]

# Narration
CELEBRATION_TEXT = 'Goed gedaan!'
DEFAULT_FLASH_SECONDS = 1.5   # how long the console client shows a dictated word
