import pytest

from specan_remote.events import CommandEvent
from specan_remote.sinks import CommandSinkError


class RecordingSink:
    def __init__(self) -> None:
        self.sent: list[CommandEvent] = []
        self.closed = False

    async def send(self, event: CommandEvent) -> None:
        self.sent.append(event)

    async def close(self) -> None:
        self.closed = True

    @property
    def arguments(self) -> list[str]:
        return [event.argument for event in self.sent]


class FailingSink(RecordingSink):
    """Fails for the listed event arguments, records everything else."""

    def __init__(self, *failing: str) -> None:
        super().__init__()
        self.failing = set(failing)

    async def send(self, event: CommandEvent) -> None:
        if not self.failing or event.argument in self.failing:
            raise CommandSinkError("display unreachable", event=event)
        await super().send(event)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()
