from dataclasses import dataclass, field

from ipfscmds.commands.marshal import MessageOutput
from ipfscmds.commands.models import Command, HelpText


def leaf_command(tagline="A leaf.", handler=None, **kwargs):
    "Build a minimal command with help metadata"
    return Command(helptext=HelpText(tagline=tagline), handler=handler or (lambda request: None), **kwargs)


@dataclass
class FakeNode:
    "Node collaborator recording the forwarded calls"

    calls: list = field(default_factory=list)
    ping_reply: str = "pong"

    def ping(self, request):
        self.calls.append(("ping", request.arguments))
        return MessageOutput(self.ping_reply)

    def block_stat(self, request):
        self.calls.append(("block_stat", request.arguments))
        return {"Key": request.arguments[0], "Size": 12}

    def cat(self, request):
        self.calls.append(("cat", request.arguments))
        return iter([b"hello", b"world"])

    def add(self, request):
        self.calls.append(("add", request.arguments))
        raise RuntimeError("disk full")

    def log_level(self, request):
        self.calls.append(("log_level", request.arguments))
        return {"Message": "wrong shape"}


class MockReader:
    "A StreamReader mock"

    def __init__(self, data=b""):
        self.data = data

    async def readline(self, *a):
        line, sep, self.data = self.data.partition(b"\n")
        return line + sep

    async def read(self, *a):
        data, self.data = self.data, b""
        return data


class MockWriter:
    "A StreamWriter mock"

    def __init__(self):
        from unittest.mock import AsyncMock, Mock

        self.write = Mock()
        self.write_eof = Mock()
        self.drain = AsyncMock()
        self.close = Mock()
        self.wait_closed = AsyncMock()

    @property
    def written(self):
        return b"".join(call.args[0] for call in self.write.call_args_list)
