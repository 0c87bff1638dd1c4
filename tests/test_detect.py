"""Tests for wsl.exe path and encoding detection."""

from __future__ import annotations

from wslcmd.config import ToolSettings
from wslcmd.detect import (
    detect_tool_config,
    is_inside_wsl,
    resolve_tool_path,
)


def test_resolve_tool_path_windows_system32(monkeypatch) -> None:
    monkeypatch.setattr('wslcmd.detect._is_wow64', lambda env: False)
    env = {'SystemRoot': 'C:\\Windows'}
    got = resolve_tool_path(env, inside_wsl=False, system='win32')
    assert got == 'C:\\Windows\\System32\\wsl.exe'


def test_resolve_tool_path_windows_32bit_on_64bit(monkeypatch) -> None:
    monkeypatch.setattr('wslcmd.detect._is_wow64', lambda env: True)
    env = {'SystemRoot': 'D:\\WINNT', 'PROCESSOR_ARCHITEW6432': 'AMD64'}
    got = resolve_tool_path(env, inside_wsl=False, system='win32')
    assert got == 'D:\\WINNT\\Sysnative\\wsl.exe'


def test_resolve_tool_path_inside_wsl_uses_search_path(monkeypatch) -> None:
    monkeypatch.setattr(
        'wslcmd.detect.which',
        lambda cmd: '/mnt/c/Windows/system32/' + cmd,
    )
    got = resolve_tool_path({}, inside_wsl=True, system='linux')
    assert got == '/mnt/c/Windows/system32/wsl.exe'

    monkeypatch.setattr('wslcmd.detect.which', lambda cmd: None)
    assert resolve_tool_path({}, inside_wsl=True, system='linux') == 'wsl.exe'


def test_resolve_tool_path_env_override() -> None:
    env = {'WSLCMD_EXE': '/opt/fake/wsl.exe'}
    assert resolve_tool_path(env, system='win32') == '/opt/fake/wsl.exe'


def test_is_inside_wsl_from_environment(monkeypatch) -> None:
    monkeypatch.setattr('wslcmd.detect.sys.platform', 'linux')
    assert is_inside_wsl({'WSL_DISTRO_NAME': 'Ubuntu'}) is True
    assert is_inside_wsl({'WSL_INTEROP': '/run/WSL/1_interop'}) is True
    monkeypatch.setattr('wslcmd.detect.Path.exists', lambda self: False)
    assert is_inside_wsl({}) is False


def test_detect_tool_config_default_is_utf16() -> None:
    cfg = detect_tool_config(
        ToolSettings(exe='wsl.exe'), {}, inside_wsl=False
    )
    assert cfg.exe == 'wsl.exe'
    assert cfg.encoding == 'utf-16-le'
    assert cfg.env_overlay == {}


def test_detect_tool_config_respects_wsl_utf8_env() -> None:
    cfg = detect_tool_config(
        ToolSettings(exe='wsl.exe'), {'WSL_UTF8': '1'}, inside_wsl=False
    )
    assert cfg.encoding == 'utf-8'
    assert cfg.env_overlay == {}


def test_detect_tool_config_utf8_setting_sets_overlay() -> None:
    cfg = detect_tool_config(
        ToolSettings(exe='wsl.exe', utf8=True), {}, inside_wsl=False
    )
    assert cfg.encoding == 'utf-8'
    assert cfg.env_overlay == {'WSL_UTF8': '1'}


def test_detect_tool_config_inside_wsl_forwards_variable() -> None:
    cfg = detect_tool_config(
        ToolSettings(exe='wsl.exe'),
        {'WSLENV': 'USERPROFILE/p:WT_SESSION'},
        inside_wsl=True,
    )
    assert cfg.inside_wsl is True
    assert cfg.encoding == 'utf-8'
    assert cfg.env_overlay == {
        'WSL_UTF8': '1',
        'WSLENV': 'USERPROFILE/p:WT_SESSION:WSL_UTF8',
    }

    again = detect_tool_config(
        ToolSettings(exe='wsl.exe'), {'WSLENV': 'WSL_UTF8'}, inside_wsl=True
    )
    assert again.env_overlay['WSLENV'] == 'WSL_UTF8'
