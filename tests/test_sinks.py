import asyncio
import logging
import sys

import pytest

from specan_remote.config import ConfigurationError, SinkConfig
from specan_remote.events import CommandEvent, EventName
from specan_remote.sinks import (
    CommandSinkError,
    LogCommandSink,
    ProcessCommandSink,
    TcpCommandSink,
    build_sink,
)

WRITE_ARGUMENT = "import pathlib, sys; pathlib.Path(sys.argv[1]).write_text(sys.argv[2])"


@pytest.mark.asyncio
async def test_process_sink_appends_argument(tmp_path):
    output = tmp_path / "argument.txt"
    sink = ProcessCommandSink([sys.executable, "-c", WRITE_ARGUMENT, str(output)])

    await sink.send(CommandEvent(EventName.GAIN_VALUE, "75"))

    assert output.read_text() == "E_GAIN_VALUE75"


@pytest.mark.asyncio
async def test_process_sink_ignores_exit_status(caplog):
    sink = ProcessCommandSink([sys.executable, "-c", "import sys; sys.exit(3)"])

    with caplog.at_level(logging.WARNING, logger="specan_remote.sinks"):
        await sink.send(CommandEvent(EventName.GRADIENT_POS))

    assert "exited with status 3" in caplog.text


@pytest.mark.asyncio
async def test_process_sink_missing_command_raises(tmp_path):
    sink = ProcessCommandSink([str(tmp_path / "no-such-script")])

    with pytest.raises(CommandSinkError) as excinfo:
        await sink.send(CommandEvent(EventName.GRADIENT_NEG))

    assert excinfo.value.event == CommandEvent(EventName.GRADIENT_NEG)


@pytest.mark.asyncio
async def test_process_sink_timeout_raises():
    sink = ProcessCommandSink(
        [sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.2
    )

    with pytest.raises(CommandSinkError, match="Timed out"):
        await sink.send(CommandEvent(EventName.DISPLAY_CHANGE_POS))


def test_process_sink_requires_command():
    with pytest.raises(ConfigurationError):
        ProcessCommandSink([])


@pytest.mark.asyncio
async def test_tcp_sink_writes_argument_line():
    received: asyncio.Queue[bytes] = asyncio.Queue()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        await received.put(await reader.read())
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        sink = TcpCommandSink("127.0.0.1", port, timeout=2.0)
        await sink.send(CommandEvent(EventName.BRIGHT_VALUE, "0.74"))
        payload = await asyncio.wait_for(received.get(), 2.0)
    finally:
        server.close()
        await server.wait_closed()

    assert payload == b"E_BRIGHT_VALUE0.74\n"


@pytest.mark.asyncio
async def test_tcp_sink_connection_refused_raises(unused_tcp_port):
    sink = TcpCommandSink("127.0.0.1", unused_tcp_port, timeout=2.0)

    with pytest.raises(CommandSinkError, match="Failed to send E_REVERSE_GRADIENT_TOGGLE"):
        await sink.send(CommandEvent(EventName.REVERSE_GRADIENT_TOGGLE))


@pytest.mark.asyncio
async def test_log_sink_logs_argument(caplog):
    with caplog.at_level(logging.INFO, logger="specan_remote.sinks"):
        await LogCommandSink().send(CommandEvent(EventName.GAIN_BRIGHT_LOCAL))

    assert "E_GAIN_BRIGHT_LOCAL" in caplog.text


def test_build_sink_selects_implementation():
    assert isinstance(build_sink(SinkConfig(type="log")), LogCommandSink)
    assert isinstance(build_sink(SinkConfig(type="tcp")), TcpCommandSink)

    process_sink = build_sink(SinkConfig(type="process", command=["/usr/local/bin/led"]))
    assert isinstance(process_sink, ProcessCommandSink)
    assert process_sink.argv == ["/usr/local/bin/led"]


def test_build_sink_rejects_unknown_type():
    with pytest.raises(ConfigurationError):
        build_sink(SinkConfig(type="carrier-pigeon"))


@pytest.mark.asyncio
async def test_process_sink_rejects_unspawnable_argument():
    sink = ProcessCommandSink([sys.executable, "-c", "pass"])

    with pytest.raises(CommandSinkError):
        await sink.send(CommandEvent(EventName.GAIN_VALUE, "7\x005"))
