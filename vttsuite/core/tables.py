"""
Read-only lookup tables shared by the WebVTT reader and writer.
"""

from types import MappingProxyType
from typing import Mapping

# Caption colors conventionally used by broadcasters, keyed by lowercase hex
HEX_TO_COLOR_NAME: Mapping[str, str] = MappingProxyType({
    '#00ffff': 'cyan',     # narrator, thought
    '#ffff00': 'yellow',   # out of vision
    '#ff0000': 'red',      # noises
    '#ff00ff': 'magenta',  # song
    '#00ff00': 'lime',     # foreign speak
})

COLOR_NAME_TO_HEX: Mapping[str, str] = MappingProxyType(
    {name: hex_value for hex_value, name in HEX_TO_COLOR_NAME.items()}
)

# Character escapes applied to cue text in a single pass
ESCAPE_TABLE: Mapping[str, str] = MappingProxyType({
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '\xa0': '&nbsp;',
})

# '&nbsp' without semicolon is accepted on input for older files
UNESCAPE_TABLE: Mapping[str, str] = MappingProxyType({
    '&amp;': '&',
    '&lt;': '<',
    '&gt;': '>',
    '&nbsp;': '\xa0',
    '&nbsp': '\xa0',
})
