"""Shared click parameter types."""

from typing import Optional

import click


class HostPort(click.ParamType):
    """HOST:PORT address, e.g. 192.168.1.20:7001 (host may be omitted: ':7001')."""

    name = "host:port"

    def __init__(self, default_host: str = "0.0.0.0"):
        self.default_host = default_host

    def convert(self, value, param: Optional[click.Parameter], ctx: Optional[click.Context]):
        if isinstance(value, tuple):
            return value

        host, sep, port_text = str(value).rpartition(":")
        if not sep:
            self.fail(f"{value!r} is not in HOST:PORT form", param, ctx)

        try:
            port = int(port_text)
        except ValueError:
            self.fail(f"{port_text!r} is not a valid port number", param, ctx)

        if not 1 <= port <= 65535:
            self.fail(f"port {port} is out of range (1-65535)", param, ctx)

        return (host or self.default_host, port)
