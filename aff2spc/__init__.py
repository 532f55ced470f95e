from .config import load_options
from .convert import convert
from .classes.options import ConverterOptions
from .parser.aff import parse_aff
from .report import build_report
from .validation import validate_spc_text
from .writer import dumps_spc
