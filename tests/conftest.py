from pathlib import Path

import pytest

from iniio import EntryWriter, PendingWriteQueue
from iniio.abstract import EntryCommitter
from iniio.ini.profile import ProfileCommitter

SAMPLE = """\
[debug]
level=3
trace=false

[license]
LID=3000615
ID=129526429308092496
Exp=2031-12-31
key=XtOnLPcds4G2B9FQx11l+g==

[users]
modwyer=XtOnLPcds4G2B9FQx11l+g==
tester2=tester2value

[licErr]
code=0
msg=
count=12
last=never

[environment]
cloud=false
proxy=

[SessionInfo]
LastSessionAborted=False

[properties]
; display settings
width=800
height=600

[CalendarTransfer]
enabled=true
"""


class RecordingCommitter(EntryCommitter):
    """Commits through `ProfileCommitter`, remembering every call."""
    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str | None, str | None, str]] = []
        self._real = ProfileCommitter()
        self.fail_on = fail_on or set()

    def commit(self, section, key, value, path) -> bool:
        self.calls.append((section, key, value, path))
        if key in self.fail_on:
            return False
        return self._real.commit(section, key, value, path)

    def last_write_time(self, path: str) -> int:
        return self._real.last_write_time(path)


@pytest.fixture
def sample_ini(tmp_path: Path) -> Path:
    path = tmp_path / 'MyECFMail.ini'
    path.write_text(SAMPLE, encoding='utf-8')
    return path


@pytest.fixture
def committer() -> RecordingCommitter:
    return RecordingCommitter()


@pytest.fixture
def writer(committer: RecordingCommitter) -> EntryWriter:
    return EntryWriter(committer)


@pytest.fixture
def queue(writer: EntryWriter):
    ret = PendingWriteQueue(writer, workers=2)
    yield ret
    ret.close()
