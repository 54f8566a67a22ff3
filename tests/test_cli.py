from typer.testing import CliRunner

from trophy_cards import __main__ as cli

runner = CliRunner()


class FakeServer:
    instances = []

    def __init__(self, address, handler_class):
        self.address = address
        self.handler_class = handler_class
        self.served = False
        self.closed = False
        FakeServer.instances.append(self)

    def serve_forever(self):
        self.served = True

    def server_close(self):
        self.closed = True


def test_serve_binds_host_and_port(monkeypatch):
    built = []
    FakeServer.instances.clear()
    monkeypatch.setattr(cli, "ThreadingHTTPServer", FakeServer)
    monkeypatch.setattr(cli, "get_app", lambda: built.append(1))
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)

    result = runner.invoke(cli.app, ["--host", "0.0.0.0", "--port", "9123"])

    assert result.exit_code == 0, result.output
    server = FakeServer.instances[0]
    assert server.address == ("0.0.0.0", 9123)
    assert server.served and server.closed
    assert built == [1]


def test_serve_defaults(monkeypatch):
    FakeServer.instances.clear()
    monkeypatch.setattr(cli, "ThreadingHTTPServer", FakeServer)
    monkeypatch.setattr(cli, "get_app", lambda: None)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 0, result.output
    assert FakeServer.instances[0].address == ("127.0.0.1", 8000)
