

import socket
import unittest
from unittest.mock import patch, MagicMock
import statsd_client.transport as transport
from statsd_client.client import StatsdClient
from statsd_client.common import TransportError


def udp_server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(('127.0.0.1', 0))
    sock.settimeout(5)
    return sock, sock.getsockname()[1]


class TestUDPTransport(unittest.TestCase):
    def setUp(self):
        self.server, self.port = udp_server()

    def tearDown(self):
        self.server.close()

    def test_send(self):
        udp_transport = transport.UDPTransport(socket_timeout=None)
        callback = MagicMock()
        assert udp_transport.send(b'foo:1|c', '127.0.0.1', self.port, callback)
        data, addr = self.server.recvfrom(65535)
        assert data == b'foo:1|c'
        callback.assert_called_once_with(None)
        udp_transport.close()
        assert udp_transport.socks == {}

    def test_send_after_close(self):
        udp_transport = transport.UDPTransport(socket_timeout=None)
        udp_transport.close()
        callback = MagicMock()
        assert not udp_transport.send(b'foo:1|c', '127.0.0.1', self.port, callback)
        assert isinstance(callback.call_args[0][0], TransportError)
        assert not udp_transport.send(b'foo:1|c', '127.0.0.1', self.port)

    def test_socket_errors(self):
        udp_transport = transport.UDPTransport(socket_timeout=None)
        sock = MagicMock()
        sock.sendto.side_effect = OSError("Network is unreachable")
        udp_transport.socks[socket.AF_INET] = sock
        callback = MagicMock()
        assert not udp_transport.send(b'foo:1|c', '127.0.0.1', self.port, callback)
        assert isinstance(callback.call_args[0][0], TransportError)
        assert not udp_transport.send(b'foo:1|c', '127.0.0.1', self.port)

    def test_idle_socket_closed(self):
        udp_transport = transport.UDPTransport(socket_timeout=500)
        with patch('statsd_client.transport.threading.Thread') as thread:
            udp_transport.send(b'foo:1|c', '127.0.0.1', self.port)
            thread.assert_called_once_with(name='IdleSocketThread', target=udp_transport.idle_loop, daemon=True)
            udp_transport.check_idle()
            assert socket.AF_INET in udp_transport.socks
            udp_transport.send(b'foo:2|c', '127.0.0.1', self.port)
            udp_transport.check_idle()
            assert socket.AF_INET in udp_transport.socks

            udp_transport.check_idle()
            assert udp_transport.socks == {}
            udp_transport.send(b'foo:3|c', '127.0.0.1', self.port)
            assert socket.AF_INET in udp_transport.socks
            assert thread.call_count == 1
        received = [self.server.recvfrom(65535)[0] for i in range(3)]
        assert received == [b'foo:1|c', b'foo:2|c', b'foo:3|c']
        udp_transport.close()

    def test_one_idle_thread_for_many_sends(self):
        udp_transport = transport.UDPTransport(socket_timeout=500)
        with patch('statsd_client.transport.threading.Thread') as thread:
            for i in range(200):
                udp_transport.send(b'foo:1|c', '127.0.0.1', self.port)
            assert thread.call_count == 1
            assert thread.return_value.start.call_count == 1
        udp_transport.close()
        assert udp_transport.stopped.is_set()

    def test_no_idle_thread_without_timeout(self):
        udp_transport = transport.UDPTransport(socket_timeout=None)
        with patch('statsd_client.transport.threading.Thread') as thread:
            udp_transport.send(b'foo:1|c', '127.0.0.1', self.port)
            assert not thread.called
        udp_transport.close()

    def test_idle_loop_stops_on_close(self):
        udp_transport = transport.UDPTransport(socket_timeout=10)
        udp_transport.send(b'foo:1|c', '127.0.0.1', self.port)
        idle_thread = udp_transport.idle_thread
        udp_transport.close()
        idle_thread.join(5)
        assert not idle_thread.is_alive()


class TestClientOverUDP(unittest.TestCase):
    def setUp(self):
        self.server, self.port = udp_server()
        self.client = StatsdClient(host='127.0.0.1', port=self.port, packet_queue=dict(flush_interval=100))

    def tearDown(self):
        self.client.close()
        self.server.close()

    def test_counter(self):
        self.client.counter('foo', 1)
        data, addr = self.server.recvfrom(65535)
        assert data == b'foo:1|c\n'

    def test_batched(self):
        child = self.client.get_child_client('p1')
        child.timing('foo', 42)
        self.client.get_child_client('p2').timing('foo', 43)
        data, addr = self.server.recvfrom(65535)
        assert data == b'p1.foo:42|ms\np2.foo:43|ms\n'

    def test_gauge(self):
        self.client.gauge('foo', 'bar')
        data, addr = self.server.recvfrom(65535)
        assert data == b'foo:bar|g'

    def test_gauges_share_one_idle_thread(self):
        with patch('statsd_client.transport.threading.Thread') as thread:
            for i in range(200):
                self.client.gauge('foo', i)
        assert thread.call_count == 1
        assert self.server.recvfrom(65535)[0] == b'foo:0|g'

    def test_immediate(self):
        callback = MagicMock()
        self.client.immediate_counter('hello', 10, callback)
        data, addr = self.server.recvfrom(65535)
        assert data == b'hello:10|c'
        callback.assert_called_once_with(None)


if __name__ == '__main__':
    unittest.main()
