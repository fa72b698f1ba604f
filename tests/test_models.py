from __future__ import annotations

import pytest
from pydantic import ValidationError

from tvremote.core import COMMAND_TABLES, command
from tvremote.models import (
    Device,
    HapticCategory,
    RemoteButton,
    VendorKind,
    haptic_category,
    manual_device,
)


def test_known_tokens():
    assert command(RemoteButton.VOLUME_UP, VendorKind.ROKU) == "VolumeUp"
    assert command(RemoteButton.MENU, VendorKind.ROKU) == "Info"
    assert command(RemoteButton.NUM_7, VendorKind.ROKU) == "Lit_7"
    assert command(RemoteButton.SELECT, VendorKind.SAMSUNG) == "KEY_ENTER"
    assert command(RemoteButton.BACK, VendorKind.SAMSUNG) == "KEY_RETURN"
    assert command(RemoteButton.NUM_3, VendorKind.SAMSUNG) == "KEY_3"
    assert command(RemoteButton.FAST_FORWARD, VendorKind.LG) == "FASTFORWARD"
    assert command(RemoteButton.NUM_0, VendorKind.LG) == "0"
    assert command(RemoteButton.SELECT, VendorKind.APPLE_TV) == "select"
    assert command(RemoteButton.VOLUME_UP, VendorKind.APPLE_TV) == "volumeup"


def test_every_button_has_a_token_for_known_vendors():
    for kind in (VendorKind.ROKU, VendorKind.SAMSUNG, VendorKind.LG):
        for button in RemoteButton:
            assert command(button, kind), (kind, button)
    assert set(COMMAND_TABLES) == set(VendorKind)


def test_unknown_vendor_maps_to_empty_token():
    assert all(command(button, VendorKind.UNKNOWN) == "" for button in RemoteButton)


def test_apple_tv_digits_fall_back_to_glyph():
    assert command(RemoteButton.NUM_5, VendorKind.APPLE_TV) == "5"


def test_display_names():
    assert RemoteButton.SELECT.display_name == "OK"
    assert RemoteButton.CHANNEL_UP.display_name == "CH+"
    assert RemoteButton.NUM_9.display_name == "9"
    assert RemoteButton.NUM_9.is_digit
    assert not RemoteButton.HOME.is_digit


@pytest.mark.parametrize(
    ("button", "category"),
    [
        (RemoteButton.POWER, HapticCategory.HEAVY),
        (RemoteButton.SELECT, HapticCategory.MEDIUM),
        (RemoteButton.HOME, HapticCategory.MEDIUM),
        (RemoteButton.MENU, HapticCategory.MEDIUM),
        (RemoteButton.VOLUME_DOWN, HapticCategory.SELECTION),
        (RemoteButton.CHANNEL_UP, HapticCategory.SELECTION),
        (RemoteButton.UP, HapticCategory.LIGHT),
        (RemoteButton.NUM_1, HapticCategory.LIGHT),
    ],
)
def test_haptic_category(button, category):
    assert haptic_category(button) is category


def test_manual_device_uses_vendor_default_port():
    device = manual_device("192.168.1.40", VendorKind.SAMSUNG)
    assert device.port == 8001
    assert device.name == "Samsung (192.168.1.40)"
    assert device.kind is VendorKind.SAMSUNG

    assert manual_device("192.168.1.41", VendorKind.LG).port == 3000
    assert manual_device("192.168.1.42", VendorKind.APPLE_TV).port == 7000
    assert manual_device("192.168.1.43", VendorKind.ROKU, port=9000).port == 9000


def test_device_defaults_and_validation():
    device = Device(name="TV", host="10.0.0.2", port=8060)
    assert device.kind is VendorKind.UNKNOWN
    assert device.last_connected is None
    assert device.address == ("10.0.0.2", 8060)
    assert device.id != Device(name="TV", host="10.0.0.2", port=8060).id

    with pytest.raises(ValidationError):
        Device(name="TV", host="10.0.0.2", port=70000)


EXPECTED_TOKENS = {
    # button: (Roku, Samsung, LG, Apple TV)
    "up": ("Up", "KEY_UP", "UP", "up"),
    "down": ("Down", "KEY_DOWN", "DOWN", "down"),
    "left": ("Left", "KEY_LEFT", "LEFT", "left"),
    "right": ("Right", "KEY_RIGHT", "RIGHT", "right"),
    "select": ("Select", "KEY_ENTER", "ENTER", "select"),
    "power": ("Power", "KEY_POWER", "POWER", "suspend"),
    "home": ("Home", "KEY_HOME", "HOME", "home"),
    "menu": ("Info", "KEY_MENU", "MENU", "menu"),
    "back": ("Back", "KEY_RETURN", "BACK", "menu"),
    "volume_up": ("VolumeUp", "KEY_VOLUP", "VOLUMEUP", "volumeup"),
    "volume_down": ("VolumeDown", "KEY_VOLDOWN", "VOLUMEDOWN", "volumedown"),
    "mute": ("VolumeMute", "KEY_MUTE", "MUTE", "mute"),
    "channel_up": ("ChannelUp", "KEY_CHUP", "CHANNELUP", "channelup"),
    "channel_down": ("ChannelDown", "KEY_CHDOWN", "CHANNELDOWN", "channeldown"),
    "play": ("Play", "KEY_PLAY", "PLAY", "play"),
    "pause": ("Pause", "KEY_PAUSE", "PAUSE", "pause"),
    "stop": ("Stop", "KEY_STOP", "STOP", "stop"),
    "rewind": ("Rev", "KEY_REWIND", "REWIND", "rewind"),
    "fast_forward": ("Fwd", "KEY_FF", "FASTFORWARD", "fastforward"),
    **{
        f"num_{digit}": (f"Lit_{digit}", f"KEY_{digit}", str(digit), str(digit))
        for digit in range(10)
    },
}

VENDORS = (VendorKind.ROKU, VendorKind.SAMSUNG, VendorKind.LG, VendorKind.APPLE_TV)


@pytest.mark.parametrize(
    ("button", "kind", "token"),
    [
        (RemoteButton(name), kind, token)
        for name, tokens in EXPECTED_TOKENS.items()
        for kind, token in zip(VENDORS, tokens)
    ],
)
def test_command_table(button, kind, token):
    assert command(button, kind) == token


def test_command_table_covers_every_button():
    assert set(EXPECTED_TOKENS) == {button.value for button in RemoteButton}
