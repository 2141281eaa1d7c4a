"""Exit codes shared by CLI commands."""

VALIDATION_EXIT_CODE = 2
SOURCE_EXIT_CODE = 3
OUTPUT_EXIT_CODE = 4
