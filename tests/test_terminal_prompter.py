import io
import os
from contextlib import contextmanager

import pytest
from rich.console import Console

from adapters.prompts.raw_keys import Key, decode_key, read_posix_key
from adapters.prompts.terminal_prompter import TerminalPrompter
from core.domain.launch_strategy import LaunchStrategy
from core.errors import QuitRequested

UP = "\x1b[A"
DOWN = "\x1b[B"
SPACE = " "
ENTER = "\r"


class FakeKeyboard:
    def __init__(self, *keys: str):
        self.keys = list(keys)
        self.entered = 0
        self.restored = 0

    @contextmanager
    def __call__(self):
        self.entered += 1
        try:
            yield lambda: self.keys.pop(0)
        finally:
            self.restored += 1


def _prompter(*, keyboard=None, answers=(), sleeps=None):
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=100)
    answers = list(answers)
    prompts: list[str] = []

    def _read_line(prompt: str) -> str:
        prompts.append(prompt)
        return answers.pop(0)

    async def _sleep(seconds):
        if sleeps is not None:
            sleeps.append(seconds)

    prompter = TerminalPrompter(
        console,
        keyboard=keyboard or FakeKeyboard(),
        read_line=_read_line,
        sleep=_sleep,
    )
    return prompter, output, prompts


def test_decode_key_covers_posix_and_windows_arrows():
    assert decode_key("\x1b[A") is Key.UP
    assert decode_key("\xe0P") is Key.DOWN
    assert decode_key(" ") is Key.TOGGLE
    assert decode_key("\n") is Key.CONFIRM
    assert decode_key("\x03") is Key.QUIT
    assert decode_key("x") is Key.OTHER


@pytest.fixture
def key_pipe():
    if os.name == "nt":
        pytest.skip("select() on pipes is POSIX only")
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    os.close(read_fd)
    os.close(write_fd)


def test_keys_typed_ahead_are_read_one_at_a_time(key_pipe):
    read_fd, write_fd = key_pipe
    os.write(write_fd, b" \n\x1b[Bq")

    keys = [read_posix_key(read_fd) for _ in range(4)]

    assert keys == [SPACE, "\n", DOWN, "q"]
    assert [decode_key(key) for key in keys] == [Key.TOGGLE, Key.CONFIRM, Key.DOWN, Key.QUIT]


def test_lone_escape_does_not_swallow_the_next_key(key_pipe):
    read_fd, write_fd = key_pipe
    os.write(write_fd, b"\x1b")

    assert read_posix_key(read_fd) == "\x1b"
    os.write(write_fd, b" ")
    assert read_posix_key(read_fd) == SPACE


@pytest.mark.asyncio
async def test_select_returns_checked_devices_and_restores_terminal():
    keyboard = FakeKeyboard(DOWN, SPACE, DOWN, SPACE, "x", ENTER)
    prompter, output, _ = _prompter(keyboard=keyboard)

    selection = await prompter.select_devices(["Pixel_5", "Pixel_7", "Tablet"])

    assert selection == ["Pixel_7", "Tablet"]
    assert keyboard.entered == keyboard.restored == 1
    assert "Selected: 2 AVD(s)" in output.getvalue()


@pytest.mark.asyncio
async def test_select_wraps_around_upwards():
    prompter, _, _ = _prompter(keyboard=FakeKeyboard(UP, SPACE, ENTER))

    assert await prompter.select_devices(["a", "b", "c"]) == ["c"]


@pytest.mark.asyncio
async def test_empty_confirmation_reprompts():
    sleeps: list[float] = []
    keyboard = FakeKeyboard(ENTER, SPACE, ENTER)
    prompter, output, _ = _prompter(keyboard=keyboard, sleeps=sleeps)

    selection = await prompter.select_devices(["Pixel_5", "Pixel_7"])

    assert selection == ["Pixel_5"]
    assert sleeps == [1.5]
    assert "Please select at least one AVD." in output.getvalue()


@pytest.mark.asyncio
async def test_quit_key_aborts_and_restores_terminal():
    keyboard = FakeKeyboard(SPACE, "q")
    prompter, _, _ = _prompter(keyboard=keyboard)

    with pytest.raises(QuitRequested):
        await prompter.select_devices(["Pixel_5"])

    assert keyboard.restored == 1


@pytest.mark.asyncio
async def test_choose_strategy_by_number():
    prompter, _, prompts = _prompter(answers=["3"])

    strategy = await prompter.choose_strategy(list(LaunchStrategy))

    assert strategy is LaunchStrategy.SEQUENTIAL
    assert prompts == ["Enter your choice (1-3): "]


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", ["", "4", "0", "two", "-1", "²", "١"])
async def test_invalid_strategy_choice_defaults_to_parallel(answer):
    prompter, output, _ = _prompter(answers=[answer])

    strategy = await prompter.choose_strategy(list(LaunchStrategy))

    assert strategy is LaunchStrategy.PARALLEL
    assert "Invalid choice. Using parallel launch." in output.getvalue()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("answer", "expected"),
    [("y", True), ("Yes", True), (" yep", True), ("", False), ("n", False), ("sure", False)],
)
async def test_confirm_only_accepts_yes(answer, expected):
    prompter, _, prompts = _prompter(answers=[answer])

    assert await prompter.confirm("Proceed?", default=True) is expected
    assert prompts == ["Proceed? (y/n): "]


@pytest.mark.asyncio
async def test_acknowledge_waits_for_a_line():
    prompter, _, prompts = _prompter(answers=[""])

    await prompter.acknowledge("Press Enter to launch: Pixel_5")

    assert prompts == ["Press Enter to launch: Pixel_5 "]
