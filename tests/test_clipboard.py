import sys
import types

import pytest

from imgcaption.client.clipboard import (
    CommandClipboard,
    TkClipboard,
    copy_text,
    default_strategies,
    shared_tk_clipboard,
)


class FakeTk:
    instances = []

    def __init__(self):
        self.text = ""
        self.destroyed = False
        FakeTk.instances.append(self)

    def withdraw(self):
        pass

    def clipboard_clear(self):
        self.text = ""

    def clipboard_append(self, text):
        self.text += text

    def update(self):
        pass

    def destroy(self):
        self.destroyed = True


@pytest.fixture
def fake_tkinter(monkeypatch):
    FakeTk.instances = []
    monkeypatch.setitem(sys.modules, "tkinter", types.SimpleNamespace(Tk=FakeTk))
    return FakeTk


def test_tk_root_outlives_the_copy(fake_tkinter):
    clip = TkClipboard()
    clip.copy("first")
    clip.copy("second")

    assert len(fake_tkinter.instances) == 1
    root = fake_tkinter.instances[0]
    assert root.text == "second"
    assert root.destroyed is False

    clip.close()
    assert root.destroyed is True


def test_default_chain_reuses_one_tk_clipboard():
    assert default_strategies()[1] is default_strategies()[1] is shared_tk_clipboard()


def test_command_clipboard_unavailable_without_tools(monkeypatch):
    monkeypatch.setattr("imgcaption.client.clipboard.shutil.which", lambda name: None)
    clip = CommandClipboard()
    assert clip.available() is False
    with pytest.raises(RuntimeError):
        clip.copy("x")


def test_copy_text_falls_through_to_tk(monkeypatch, fake_tkinter):
    monkeypatch.setattr("imgcaption.client.clipboard.shutil.which", lambda name: None)
    assert copy_text("A cat.", [CommandClipboard(), TkClipboard()]) is True
    assert fake_tkinter.instances[0].text == "A cat."
