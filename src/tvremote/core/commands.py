"""Vendor key tokens for every remote button.

Real devices match on the exact token, so these tables are the wire format.
"""

from __future__ import annotations

from tvremote.models import RemoteButton, VendorKind

B = RemoteButton

ROKU_KEYS: dict[RemoteButton, str] = {
    B.UP: "Up",
    B.DOWN: "Down",
    B.LEFT: "Left",
    B.RIGHT: "Right",
    B.SELECT: "Select",
    B.POWER: "Power",
    B.HOME: "Home",
    B.MENU: "Info",
    B.BACK: "Back",
    B.VOLUME_UP: "VolumeUp",
    B.VOLUME_DOWN: "VolumeDown",
    B.MUTE: "VolumeMute",
    B.CHANNEL_UP: "ChannelUp",
    B.CHANNEL_DOWN: "ChannelDown",
    B.PLAY: "Play",
    B.PAUSE: "Pause",
    B.STOP: "Stop",
    B.REWIND: "Rev",
    B.FAST_FORWARD: "Fwd",
    **{B(f"num_{digit}"): f"Lit_{digit}" for digit in range(10)},
}

SAMSUNG_KEYS: dict[RemoteButton, str] = {
    B.UP: "KEY_UP",
    B.DOWN: "KEY_DOWN",
    B.LEFT: "KEY_LEFT",
    B.RIGHT: "KEY_RIGHT",
    B.SELECT: "KEY_ENTER",
    B.POWER: "KEY_POWER",
    B.HOME: "KEY_HOME",
    B.MENU: "KEY_MENU",
    B.BACK: "KEY_RETURN",
    B.VOLUME_UP: "KEY_VOLUP",
    B.VOLUME_DOWN: "KEY_VOLDOWN",
    B.MUTE: "KEY_MUTE",
    B.CHANNEL_UP: "KEY_CHUP",
    B.CHANNEL_DOWN: "KEY_CHDOWN",
    B.PLAY: "KEY_PLAY",
    B.PAUSE: "KEY_PAUSE",
    B.STOP: "KEY_STOP",
    B.REWIND: "KEY_REWIND",
    B.FAST_FORWARD: "KEY_FF",
    **{B(f"num_{digit}"): f"KEY_{digit}" for digit in range(10)},
}

LG_KEYS: dict[RemoteButton, str] = {
    B.UP: "UP",
    B.DOWN: "DOWN",
    B.LEFT: "LEFT",
    B.RIGHT: "RIGHT",
    B.SELECT: "ENTER",
    B.POWER: "POWER",
    B.HOME: "HOME",
    B.MENU: "MENU",
    B.BACK: "BACK",
    B.VOLUME_UP: "VOLUMEUP",
    B.VOLUME_DOWN: "VOLUMEDOWN",
    B.MUTE: "MUTE",
    B.CHANNEL_UP: "CHANNELUP",
    B.CHANNEL_DOWN: "CHANNELDOWN",
    B.PLAY: "PLAY",
    B.PAUSE: "PAUSE",
    B.STOP: "STOP",
    B.REWIND: "REWIND",
    B.FAST_FORWARD: "FASTFORWARD",
    **{B(f"num_{digit}"): str(digit) for digit in range(10)},
}

# No number pad on the Apple TV remote; digits fall back to their glyph.
APPLE_TV_KEYS: dict[RemoteButton, str] = {
    B.UP: "up",
    B.DOWN: "down",
    B.LEFT: "left",
    B.RIGHT: "right",
    B.SELECT: "select",
    B.POWER: "suspend",
    B.HOME: "home",
    B.MENU: "menu",
    B.BACK: "menu",
    B.VOLUME_UP: "volumeup",
    B.VOLUME_DOWN: "volumedown",
    B.MUTE: "mute",
    B.CHANNEL_UP: "channelup",
    B.CHANNEL_DOWN: "channeldown",
    B.PLAY: "play",
    B.PAUSE: "pause",
    B.STOP: "stop",
    B.REWIND: "rewind",
    B.FAST_FORWARD: "fastforward",
    **{button: button.display_name for button in B if button.is_digit},
}

UNKNOWN_KEYS: dict[RemoteButton, str] = {button: "" for button in B}

COMMAND_TABLES: dict[VendorKind, dict[RemoteButton, str]] = {
    VendorKind.ROKU: ROKU_KEYS,
    VendorKind.SAMSUNG: SAMSUNG_KEYS,
    VendorKind.LG: LG_KEYS,
    VendorKind.APPLE_TV: APPLE_TV_KEYS,
    VendorKind.UNKNOWN: UNKNOWN_KEYS,
}


def command(button: RemoteButton, kind: VendorKind) -> str:
    """Return the token ``kind`` expects for ``button``."""
    return COMMAND_TABLES[kind][button]
