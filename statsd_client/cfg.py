"""

The default configuration of the statsd client, also intended as a configuration
reference. This is Python code. The command line tool loads a config file like
this one (with environment variables substituted) and hands the resulting names over to
StatsdClient as its options. The client falls back to the values below for
the options not given, and ignores unknown options.

"""


# log_level
# - str
# - Optional, default: 'INFO'
# - Only used by the command line tool, the library never configures logging.
# - More here: https://docs.python.org/3/library/logging.html#levels
log_level = "INFO"


# log_format
# - str
# - Optional, default: '[%(asctime)-15s][%(levelname)s] %(name)s(%(threadName)s@%(process)d) - %(message)s'
# - More here: https://docs.python.org/3/library/logging.html#logrecord-attributes
# - Example: log_format = '%(message)s'


# host
# - str, the StatsD aggregator to send metrics to
# - Optional, default: 'localhost'
# - IPv4 or IPv6 literals are used as they are. Host names are resolved once
#   (per client and all its child clients) and the result is cached for good.
#   If the resolution fails, metrics are silently dropped until the client is
#   recreated.
host = "localhost"


# port
# - int
# - Optional, default: 8125
port = 8125


# prefix
# - str, prepended to all metric names
# - Optional, default: ''
# - A single trailing dot is enforced, "myapp" and "myapp." and "myapp.." all
#   produce "myapp.foo" for the metric "foo".
prefix = ""


# packet_queue
# - dict
# - Optional
# - flush_interval, int, max delay in ms between a metric being queued and sent out.
#   The queue is flushed flush_interval ms after the first metric lands in an empty queue.
# - max_packet_size, int, max size of UDP packets in bytes. Metrics are packed into
#   packets up to this size. A single metric longer than that gets a packet of its own.
#   The default keeps packets within a typical 1500 bytes Ethernet MTU.
packet_queue = dict(
    flush_interval=1000,
    max_packet_size=1440,
)


# socket_timeout
# - int, ms of inactivity after which the UDP socket is closed
# - Optional, default: 1000
# - The socket is reopened on the next send. None keeps the socket open until
#   the client is closed.
socket_timeout = 1000


# dns_resolver
# - dict
# - Optional, default: None
# - lookup, a callable lookup(hostname, callback) that eventually calls
#   callback(error, ip). By default socket.gethostbyname is used, run in a thread.
# - Example: dns_resolver = dict(lookup=my_lookup)


# is_disabled
# - callable returning bool
# - Optional, default: always False
# - Checked on every metric, when it returns True the metric is discarded
#   before even being formatted. Metrics already queued are still sent.
# - Example: is_disabled = lambda: os.path.exists('/etc/no-metrics')
