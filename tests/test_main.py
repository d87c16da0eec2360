"""
Smoke test for the demo entry point.
"""

from diceroller.core.storage import JsonFileStore
from diceroller.history.roll_log import ROLL_LOG_KEY
from diceroller.main import main


def test_main_rolls_featured_presets_and_persists(tmp_path, mocker):
    """Test that the demo rolls every featured preset plus the custom die."""
    mocker.patch("diceroller.core.sheets.cprint")
    mocker.patch("diceroller.core.sheets.crule")
    mocker.patch("diceroller.main.cprint")
    mocker.patch("diceroller.main.crule")
    path = tmp_path / "store.json"

    main(path)

    store = JsonFileStore(path)
    assert len(store.get(ROLL_LOG_KEY)) == 5

    main(path)

    assert len(JsonFileStore(path).get(ROLL_LOG_KEY)) == 10
