

import socket
import logging
import threading
from statsd_client.common import ResolutionError


UNRESOLVED = 'unresolved'
RESOLVING = 'resolving'
RESOLVED = 'resolved'
FAILED = 'failed'


def default_lookup(hostname, callback):
    def lookup():
        try:
            ip = socket.gethostbyname(hostname)
        except (OSError, UnicodeError) as e:
            callback(e, None)
        else:
            callback(None, ip)

    thread = threading.Thread(name='ResolverThread', target=lookup, daemon=True)
    thread.start()


class AddressResolver:
    """Resolves one hostname, once, for every client sharing the resolver.

    Callers asking while the lookup is in flight are queued up as waiters
    and all of them get the same result. The result is cached for good,
    failures included, until reset() is called.
    """

    def __init__(self, hostname, lookup=None):
        self.log = logging.getLogger(__name__)
        self.hostname = hostname
        self.lookup = lookup or default_lookup
        self.lock = threading.Lock()
        self.state = UNRESOLVED
        self.ip = None
        self.error = None
        self.waiters = []
        self.closed = False

    def resolve(self, on_resolved):
        with self.lock:
            if self.closed:
                result = ResolutionError("resolver closed"), None
            elif self.state == RESOLVED:
                result = None, self.ip
            elif self.state == FAILED:
                result = self.error, None
            else:
                self.waiters.append(on_resolved)
                if self.state == RESOLVING:
                    return
                self.state = RESOLVING
                result = None
        if result is not None:
            on_resolved(*result)
            return
        self.log.debug("Resolving %s", self.hostname)
        try:
            self.lookup(self.hostname, self.on_lookup)
        except Exception as e:
            # Either the lookup itself failed, or it completed synchronously
            # and a waiter raised, in which case the state has already moved on
            if self.state != RESOLVING:
                raise
            self.on_lookup(e, None)

    def on_lookup(self, error, ip=None):
        with self.lock:
            # Late or repeated callbacks from the lookup are ignored
            if self.state != RESOLVING:
                return
            if error is None and not ip:
                error = ResolutionError("No address found for " + self.hostname)
            if error is None:
                self.state, self.ip = RESOLVED, ip
            else:
                if not isinstance(error, ResolutionError):
                    error = ResolutionError("Could not resolve %s: %s" % (self.hostname, error))
                self.state, self.error = FAILED, error
            waiters, self.waiters = self.waiters, []
        if error is None:
            self.log.debug("Resolved %s as %s", self.hostname, ip)
        else:
            self.log.warning("%s", error)
        # Every waiter gets the result, the first one raising is re-raised afterwards
        first_exception = None
        for waiter in waiters:
            try:
                waiter(error, ip)
            except Exception as e:
                self.log.exception("Resolution callback failed")
                if first_exception is None:
                    first_exception = e
        if first_exception is not None:
            raise first_exception

    def reset(self):
        with self.lock:
            if self.state == FAILED:
                self.state, self.error = UNRESOLVED, None

    def close(self):
        with self.lock:
            self.closed = True
