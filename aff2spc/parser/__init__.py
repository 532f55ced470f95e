from .aff import (
    AFFParser,
    parse_aff,
)

from .spc import (
    SPCParser,
    parse_spc,
    parse_spc_line,
)
