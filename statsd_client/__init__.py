

from statsd_client.client import StatsdClient, normalize_prefix
from statsd_client.common import StatsdError, ResolutionError, TransportError

__version__ = '0.1.0'
