import pytest
from vnengine.core.actions import Action
from vnframework.playback import (
    Advance,
    JumpToIndex,
    Quit,
    Rewind,
    ToggleAutoPlay,
    command_for_action,
)

@pytest.mark.parametrize("action,command", [
    (Action.ADVANCE, Advance()),
    (Action.REWIND, Rewind()),
    (Action.AUTO_PLAY, ToggleAutoPlay()),
    (Action.QUIT, Quit()),
    (Action.DEBUG_JUMP_0, JumpToIndex(0)),
    (Action.DEBUG_JUMP_7, JumpToIndex(7)),
])
def test_command_for_action(action, command):
    assert command_for_action(action) == command

def test_commands_are_frozen():
    command = JumpToIndex(2)

    with pytest.raises(AttributeError):
        command.index = 3
