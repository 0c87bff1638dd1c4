"""Shared fakes for tests that must not launch wsl.exe."""

from __future__ import annotations

from typing import Sequence

import pytest

from wslcmd.errors import ExternalToolFailure
from wslcmd.registry import DistributionRegistry
from wslcmd.store import LxssEntry

LISTING = [
    '  NAME            STATE           VERSION',
    '* Ubuntu-22.04    Running         2',
    '  Debian          Stopped         2',
    '  Alpine          Running         1',
]


class FakeInvoker:
    """Stands in for ProcessInvoker and records every call."""

    def __init__(
        self,
        listing: Sequence[str] | None = None,
        responses: dict | None = None,
        attached_code: int = 0,
    ):
        self.listing = list(LISTING if listing is None else listing)
        self.responses = dict(responses or {})
        self.attached_code = attached_code
        self.calls: list[list[str]] = []
        self.encodings: list[str | None] = []
        self.attached: list[list[str]] = []

    def argv(self, args):
        return ['wsl.exe', *args]

    def invoke(self, args, *, ignore_errors=False, encoding=None):
        args = list(args)
        self.calls.append(args)
        self.encodings.append(encoding)
        if args == ['--list', '--verbose']:
            return list(self.listing)
        resp = self.responses.get(tuple(args), [])
        if isinstance(resp, Exception):
            if ignore_errors:
                return []
            raise resp
        return list(resp)

    def run_attached(self, args):
        self.attached.append(list(args))
        return self.attached_code

    def actions(self) -> list[list[str]]:
        return [c for c in self.calls if c != ['--list', '--verbose']]


class FakeStore:
    def __init__(self, entries=(), default_version=None):
        self._entries = list(entries)
        self._default_version = default_version

    def entries(self):
        return list(self._entries)

    def default_version(self):
        return self._default_version


def tool_failure(args, code=1, output=('Error: something failed',)):
    return ExternalToolFailure(' '.join(['wsl.exe', *args]), code, output)


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def registry(invoker) -> DistributionRegistry:
    return DistributionRegistry(invoker)


@pytest.fixture
def lxss_entries() -> list[LxssEntry]:
    return [
        LxssEntry(
            guid='{11111111-2222-3333-4444-555555555555}',
            name='ubuntu-22.04',
            base_path='\\\\?\\C:\\Users\\me\\AppData\\Local\\Packages\\Ubuntu\\LocalState',
        ),
        LxssEntry(
            guid='{aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee}',
            name='Alpine',
            base_path='C:\\wsl\\Alpine',
        ),
    ]
