

import socket
import logging
import threading
from statsd_client.common import TransportError, address_family


class UDPTransport:
    """Fire-and-forget UDP sender.

    Sockets are opened on demand, one per address family. With socket_timeout
    (in ms) set, a single background thread checks every socket_timeout ms
    whether the sockets were used since the previous check, and closes them
    if not. The next send reopens them.
    """

    def __init__(self, socket_timeout=1000):
        self.log = logging.getLogger(__name__)
        self.socket_timeout = socket_timeout
        self.lock = threading.Lock()
        self.socks = {}
        self.socket_used = False
        self.idle_thread = None
        self.stopped = threading.Event()
        self.closed = False

    def open_socket(self, family):
        sock = self.socks.get(family)
        if sock is None:
            sock = self.socks[family] = socket.socket(family, socket.SOCK_DGRAM)
            sock.setblocking(False)
            self.log.debug('Created UDP socket')
        return sock

    def close_sockets(self):
        with self.lock:
            socks, self.socks = self.socks, {}
        for sock in socks.values():
            sock.close()

    def start_idle_check(self):
        if self.socket_timeout is None or self.idle_thread is not None:
            return
        self.idle_thread = threading.Thread(name='IdleSocketThread', target=self.idle_loop, daemon=True)
        self.idle_thread.start()

    def idle_loop(self):
        while not self.stopped.wait(self.socket_timeout / 1000):
            self.check_idle()

    def check_idle(self):
        socks = {}
        with self.lock:
            if not self.socket_used:
                socks, self.socks = self.socks, {}
            self.socket_used = False
        for sock in socks.values():
            sock.close()
        if socks:
            self.log.debug('Closed idle socket(s)')

    def send(self, datagram, host, port, callback=None):
        error = None
        try:
            with self.lock:
                if self.closed:
                    raise TransportError("transport closed")
                sock = self.open_socket(address_family(host) or socket.AF_INET)
                self.socket_used = True
                self.start_idle_check()
                sock.sendto(datagram, (host, port))
        except TransportError as e:
            error = e
        except OSError as e:
            error = TransportError("Sending to %s:%s failed: %s" % (host, port, e))
        if callback is not None:
            callback(error)
        elif error is not None:
            self.log.debug("%s", error)
        return error is None

    def close(self):
        with self.lock:
            self.closed = True
        self.stopped.set()
        self.close_sockets()
