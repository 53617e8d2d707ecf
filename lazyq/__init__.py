r"""
'    .____       _____  __________ _____.___.________
'    |    |     /  _  \ \____    / \__  |   |\_____  \
'    |    |    /  /_\  \  /     /   /   |   | /  / \  \
'    |    |___/    |    \/     /_   \____   |/   \_/.  \
'    |_______ \____|__  /_______ \  / ______|\_____\ \_/
'            \/       \/        \/  \/              \__>
"""
import logging

# expose the main classes
from .enumerable import Enumerable, HashableEnumerable

# expose the factory functions
from .factories import (
    from_iterable,
    from_hashable,
    from_range,
    repeat,
    empty,
    generate,
    from_channel,
    P,
    H
)

# expose the protocol and the bridge
from .protocol import Enumerator, enumerator_of
from .channel import Channel, start_producer

from .config import LazyqConfig, config
from .errors import LazyqError, InvalidArgumentError, ChannelClosedError

# library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Enumerable",
    "HashableEnumerable",
    "from_iterable",
    "from_hashable",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "from_channel",
    "P",
    "H",
    "Enumerator",
    "enumerator_of",
    "Channel",
    "start_producer",
    "LazyqConfig",
    "config",
    "LazyqError",
    "InvalidArgumentError",
    "ChannelClosedError"
]
