from __future__ import annotations

from enum import Enum


class RemoteButton(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"

    POWER = "power"
    HOME = "home"
    MENU = "menu"
    BACK = "back"

    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    MUTE = "mute"

    CHANNEL_UP = "channel_up"
    CHANNEL_DOWN = "channel_down"

    PLAY = "play"
    PAUSE = "pause"
    STOP = "stop"
    REWIND = "rewind"
    FAST_FORWARD = "fast_forward"

    NUM_0 = "num_0"
    NUM_1 = "num_1"
    NUM_2 = "num_2"
    NUM_3 = "num_3"
    NUM_4 = "num_4"
    NUM_5 = "num_5"
    NUM_6 = "num_6"
    NUM_7 = "num_7"
    NUM_8 = "num_8"
    NUM_9 = "num_9"

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]

    @property
    def is_digit(self) -> bool:
        return self.value.startswith("num_")


DISPLAY_NAMES: dict[RemoteButton, str] = {
    RemoteButton.UP: "▲",
    RemoteButton.DOWN: "▼",
    RemoteButton.LEFT: "◀",
    RemoteButton.RIGHT: "▶",
    RemoteButton.SELECT: "OK",
    RemoteButton.POWER: "⏻",
    RemoteButton.HOME: "⌂",
    RemoteButton.MENU: "☰",
    RemoteButton.BACK: "←",
    RemoteButton.VOLUME_UP: "+",
    RemoteButton.VOLUME_DOWN: "−",
    RemoteButton.MUTE: "🔇",
    RemoteButton.CHANNEL_UP: "CH+",
    RemoteButton.CHANNEL_DOWN: "CH−",
    RemoteButton.PLAY: "▶",
    RemoteButton.PAUSE: "⏸",
    RemoteButton.STOP: "⏹",
    RemoteButton.REWIND: "⏪",
    RemoteButton.FAST_FORWARD: "⏩",
    **{RemoteButton(f"num_{digit}"): str(digit) for digit in range(10)},
}


class HapticCategory(str, Enum):
    HEAVY = "heavy"
    MEDIUM = "medium"
    SELECTION = "selection"
    LIGHT = "light"


def haptic_category(button: RemoteButton) -> HapticCategory:
    if button is RemoteButton.POWER:
        return HapticCategory.HEAVY
    if button in (RemoteButton.SELECT, RemoteButton.HOME, RemoteButton.MENU):
        return HapticCategory.MEDIUM
    if button in (
        RemoteButton.VOLUME_UP,
        RemoteButton.VOLUME_DOWN,
        RemoteButton.CHANNEL_UP,
        RemoteButton.CHANNEL_DOWN,
    ):
        return HapticCategory.SELECTION
    return HapticCategory.LIGHT
