"""Tests for turning pynput key presses into descriptors."""

import unittest

from tests.pynput_utils import require_pynput

pynput = require_pynput()

# pylint: disable=wrong-import-position
from keyseq.events import KeyEventDescriptor
from keyseq.key_utils import descriptor_from_pynput, key_name, modifier_of
from keyseq.keys import Modifier
from keyseq.platforms.common import PynputKeySource

Key = pynput.keyboard.Key
KeyCode = pynput.keyboard.KeyCode


class KeyUtilsTests(unittest.TestCase):
    """pynput keys to descriptor conversion."""

    def test_modifier_keys(self):
        self.assertEqual(modifier_of(Key.ctrl_l), Modifier.CTRL)
        self.assertEqual(modifier_of(Key.shift), Modifier.SHIFT)
        self.assertEqual(modifier_of(Key.alt), Modifier.ALT)
        self.assertEqual(modifier_of(Key.cmd), Modifier.META)
        self.assertIsNone(modifier_of(Key.tab))
        self.assertIsNone(modifier_of(KeyCode.from_char("a")))

    def test_named_keys(self):
        self.assertEqual(key_name(Key.esc), "Escape")
        self.assertEqual(key_name(Key.space), " ")
        self.assertEqual(key_name(Key.page_down), "PageDown")
        self.assertEqual(key_name(Key.up), "ArrowUp")
        self.assertEqual(key_name(Key.f12), "F12")

    def test_character_key(self):
        event = descriptor_from_pynput(KeyCode.from_char("*"), frozenset({Modifier.SHIFT}))
        self.assertEqual(event, KeyEventDescriptor(key="*", shift=True))

    def test_control_character_is_mapped_back_to_letter(self):
        event = descriptor_from_pynput(KeyCode.from_char("\x0e"), frozenset({Modifier.CTRL}))
        self.assertEqual(event, KeyEventDescriptor(key="n", ctrl=True))

    def test_modifier_press_has_no_descriptor(self):
        self.assertIsNone(descriptor_from_pynput(Key.shift, frozenset()))

    def test_key_without_char(self):
        self.assertIsNone(descriptor_from_pynput(KeyCode.from_vk(0), frozenset()))


class PynputKeySourceTests(unittest.TestCase):
    """Modifier tracking without starting a real listener."""

    def test_tracks_held_modifiers(self):
        received = []
        source = PynputKeySource()
        source._handler = received.append  # pylint: disable=protected-access

        source._on_press(Key.shift)  # pylint: disable=protected-access
        source._on_press(KeyCode.from_char("A"))  # pylint: disable=protected-access
        source._on_release(Key.shift)  # pylint: disable=protected-access
        source._on_press(KeyCode.from_char("a"))  # pylint: disable=protected-access

        self.assertEqual(received, [
            KeyEventDescriptor(key="A", shift=True),
            KeyEventDescriptor(key="a"),
        ])
        self.assertEqual(source.held_modifiers(), frozenset())

    def test_stop_clears_state(self):
        source = PynputKeySource()
        source._on_press(Key.ctrl)  # pylint: disable=protected-access
        self.assertEqual(source.held_modifiers(), frozenset({Modifier.CTRL}))
        source.stop()
        self.assertEqual(source.held_modifiers(), frozenset())


if __name__ == "__main__":
    unittest.main()
