"""ProtoDef document decoding."""

from .errors import *
from .numeric import NUMERIC_CODES as NUMERIC_CODES
from .numeric import decode_numeric as decode_numeric
from .primitives import PRIMITIVE_TYPES as PRIMITIVE_TYPES
from .primitives import decode_primitive as decode_primitive
from .protocol import load as load
from .protocol import loads as loads
from .protocol import parse_protocol as parse_protocol
from .protocol import read_protocol as read_protocol
from .resolver import RESOLUTION_ORDER as RESOLUTION_ORDER
from .resolver import resolve as resolve
from .types import *
