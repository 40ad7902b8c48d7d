"""
Configuration constants to replace magic numbers throughout pnt
"""

import os
import tempfile

import numpy as np

# Source files
SOURCE_FILE_EXTENSION = ".pnt"
DEFAULT_SOURCE_FILE = "main.pnt"
DEFAULT_FILE_ENCODING = "utf-8"

# Dialects
DIALECT_PNT = "pnt"
DIALECT_LEGACY = "legacy"
DIALECTS = (DIALECT_PNT, DIALECT_LEGACY)

# Legacy dialect grammar cache
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "pnt_legacy_parser.cache")

# String literal constants
STRING_QUOTE_CHAR = '"'
KEYWORD_PREFIX = ":"

# Method binding names (identifier characters never include "_" or "#")
SELF_BINDING = "self"
KEYWORD_BINDING_PREFIX = "_"
PLACEHOLDER_BINDING_PREFIX = "#"

# Built-in classes
INT_CLASS_NAME = "Int"
INT_VALUE_FIELD = "value"
KEYWORD_CLASS_NAME = "Keyword"

# Integer range (IntValue is a 64-bit signed integer)
INT_DTYPE = np.int64
INT_MIN = int(np.iinfo(INT_DTYPE).min)
INT_MAX = int(np.iinfo(INT_DTYPE).max)

# Environment variables
COLOR_ENV_VAR = "PNT_COLOR"
NO_COLOR_ENV_VAR = "NO_COLOR"

# Error reporting constants
ERROR_POINTER_CHAR = "^"
