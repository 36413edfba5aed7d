import pytest
from gemrun_arcade import assets
from gemrun_arcade.level import STONE
from gemrun_arcade.start_screen import BACKGROUND_Y, StartScreen


def test_renders_full_presentation(surface):
    StartScreen().render(surface)

    assert surface.calls[0] == ("image", assets.BACKGROUND, 0, BACKGROUND_Y)
    assert "Choose your Player" in surface.texts
    assert len(surface.texts) == 6
    for image in [*assets.ARROWS.values(), *assets.DIFFICULTY_BUTTONS, *assets.CHARACTERS]:
        assert image in surface.images
    assert surface.images.count(STONE) == len(assets.CHARACTERS)


def test_selector_drawn_under_selected_character(surface):
    screen = StartScreen(selected=2)
    screen.render(surface)

    selector = [c for c in surface.calls if c[1] == assets.SELECTOR][0]
    character = [c for c in surface.calls if c[1] == assets.CHARACTERS[2]][0]
    assert selector[2:] == character[2:]
    assert surface.calls.index(selector) < surface.calls.index(character)


def test_selection_wraps():
    screen = StartScreen()
    screen.selected = -1
    assert screen.selected_character == assets.CHARACTERS[-1]
    screen.selected = len(assets.CHARACTERS)
    assert screen.selected == 0


def test_needs_characters():
    with pytest.raises(ValueError):
        StartScreen(characters=[])


def test_draws_only_manifest_assets(surface):
    manifest = assets.default_manifest()
    StartScreen().render(surface)
    assert set(surface.images) <= set(manifest)
