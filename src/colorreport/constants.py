"""
colorreport.constants
=====================

Single place for environment variable names and layout constants. Config,
capture and rendering code import from here so we never duplicate strings
like "COLORREPORT_BACKTRACE".
"""

from __future__ import annotations

from typing import Final

# ---- environment variables ---------------------------------------------------

# report verbosity: LIB_BACKTRACE wins over BACKTRACE
LIB_BACKTRACE_ENV: Final = "COLORREPORT_LIB_BACKTRACE"
BACKTRACE_ENV: Final = "COLORREPORT_BACKTRACE"

SPANTRACE_ENV: Final = "COLORREPORT_SPANTRACE"
SHOW_HIDDEN_ENV: Final = "COLORREPORT_SHOW_HIDDEN"
FRAME_FILTER_ENV: Final = "COLORREPORT_FRAME_FILTER"
COLOR_ENV: Final = "COLORREPORT_COLOR"

# ---- layout ------------------------------------------------------------------

# Upper bound on causal chain walks; Python lets users build cyclic chains.
MAX_CHAIN_DEPTH: Final = 256

REPORT_WIDTH: Final = 80
SECTION_INDENT: Final = "   "
CONTINUATION_INDENT: Final = "      "
SOURCE_CONTEXT_LINES: Final = 2

ERROR_HEADER: Final = "Error:"
AGGREGATE_MESSAGE: Final = "encountered multiple errors"
PANIC_HEADER: Final = "The application panicked (crashed)."
