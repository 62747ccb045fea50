"""Tests for notepilot.app.commands (slash commands and hotkeys)."""

from pathlib import Path

import pytest

from notepilot.app.commands import (
    EMPTY_REPLY_MESSAGE,
    NO_BLOCK_MESSAGE,
    CopilotCommands,
    command_name,
    page_reference,
)
from notepilot.app.host import RecordingHost
from notepilot.app.runner import CopilotRunner
from notepilot.config.config import Settings
from notepilot.providers.client import CompletionClient

from conftest import TransportRecorder, json_response

REPLY = json_response(200, {"choices": [{"message": {"content": "Done."}}]})
CONFIGURED = dict(api_endpoint="https://x/v1", api_key="k", model="m")


@pytest.mark.parametrize(
    "content,expected",
    [
        ("[[Meeting notes]]", "Meeting notes"),
        ("  [[Roadmap]] ", "Roadmap"),
        ("see [[Roadmap]]", None),
        ("[[a]] [[b]]", None),
        ("", None),
    ],
)
def test_page_reference(content, expected):
    assert page_reference(content) == expected


def test_command_names():
    assert [command_name(i) for i in range(4)] == [
        "copilot",
        "copilot1",
        "copilot2",
        "copilot3",
    ]


def test_register_adds_commands_and_hotkeys(make_runner, host):
    runner, _ = make_runner(hotkey_3="")
    CopilotCommands(host, runner).register()
    assert set(host.slash_commands) == {
        "copilot",
        "copilot1",
        "copilot2",
        "copilot3",
    }
    assert set(host.hotkeys) == {"ctrl+shift+h", "ctrl+shift+j", "ctrl+shift+k"}


async def test_default_command_inserts_reply(make_runner, host):
    runner, recorder = make_runner(REPLY, **CONFIGURED)
    commands = CopilotCommands(host, runner)

    assert await commands.run(0) is True

    assert [b.content for b in host.inserted] == ["Done."]
    assert recorder.body()["messages"] == [
        {"role": "user", "content": "Summarize X"},
    ]


async def test_hotkey_runs_same_command(make_runner, host):
    runner, _ = make_runner(REPLY, **CONFIGURED)
    CopilotCommands(host, runner).register()
    await host.hotkeys["ctrl+shift+h"]()
    assert len(host.inserted) == 1


async def test_custom_prompt_becomes_system_prompt(make_runner, host):
    runner, recorder = make_runner(
        REPLY,
        custom_prompt_2="Translate to French",
        **CONFIGURED,
    )
    assert await CopilotCommands(host, runner).run(2) is True
    assert recorder.body()["messages"][0] == {
        "role": "system",
        "content": "Translate to French",
    }


async def test_empty_custom_prompt_warns(make_runner, host):
    runner, recorder = make_runner(REPLY, **CONFIGURED)
    assert await CopilotCommands(host, runner).run(1) is False
    assert recorder.requests == []
    assert host.messages[0]["status"] == "warning"
    assert "Custom Prompt No.1 is empty" in host.messages[0]["message"]


async def test_no_block_selected(settings_path):
    empty_host = RecordingHost(settings_path=settings_path)
    recorder = TransportRecorder(REPLY)
    runner = CopilotRunner(
        empty_host,
        Settings(**CONFIGURED),
        client=CompletionClient(transport=recorder.transport),
    )
    commands = CopilotCommands(empty_host, runner)

    assert await commands.run(0) is False

    assert recorder.requests == []
    assert empty_host.messages == [
        {"status": "warning", "message": NO_BLOCK_MESSAGE},
    ]


async def test_page_reference_sends_page_text(
    make_runner,
    tmp_path: Path,
    settings_path,
):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "Meeting.md").write_text("- decided X\n- todo Y", encoding="utf-8")
    page_host = RecordingHost(
        block_text="[[Meeting]]",
        pages_dir=pages,
        settings_path=settings_path,
    )
    runner, recorder = make_runner(REPLY, **CONFIGURED)

    await CopilotCommands(page_host, runner).run(0)

    assert recorder.body()["messages"][-1]["content"] == (
        "- decided X\n- todo Y"
    )


async def test_failed_completion_inserts_nothing(make_runner, host):
    runner, _ = make_runner(json_response(401, {"error": "bad key"}), **CONFIGURED)
    assert await CopilotCommands(host, runner).run(0) is False
    assert host.inserted == []
    assert host.messages == [
        {"status": "error", "message": "API call failed: bad key"},
    ]


async def test_blank_reply_is_not_inserted(make_runner, host):
    blank = json_response(200, {"choices": [{"message": {"content": "  \n"}}]})
    runner, _ = make_runner(blank, **CONFIGURED)

    assert await CopilotCommands(host, runner).run(0) is False

    assert host.inserted == []
    assert host.messages == [
        {"status": "warning", "message": EMPTY_REPLY_MESSAGE},
    ]
